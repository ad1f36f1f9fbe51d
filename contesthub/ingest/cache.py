from __future__ import annotations

import re
from datetime import UTC, datetime
from pathlib import Path

_STAMP_FORMAT = "%Y%m%dT%H%M%SZ"
_PAYLOAD_NAME_PATTERN = re.compile(r"^(\d{8}T\d{6}Z)\.[a-z0-9]+$")


def write_raw_payload(
    *,
    source_name: str,
    payload: bytes,
    extension: str,
    raw_root: Path,
    timestamp: datetime | None = None,
) -> Path:
    resolved_ts = timestamp or datetime.now(tz=UTC)
    stamp = resolved_ts.astimezone(UTC).strftime(_STAMP_FORMAT)

    target_dir = raw_root / source_name
    target_dir.mkdir(parents=True, exist_ok=True)

    output_path = target_dir / f"{stamp}.{extension.lstrip('.')}"
    temp_path = output_path.with_name(f"{output_path.name}.tmp")
    temp_path.write_bytes(payload)
    temp_path.replace(output_path)
    return output_path


def latest_raw_payload(*, source_name: str, raw_root: Path) -> tuple[Path, datetime] | None:
    """Most recent cached payload for ``source_name`` and its fetch time, if any."""

    source_dir = raw_root / source_name
    if not source_dir.is_dir():
        return None

    cached: list[tuple[datetime, Path]] = []
    for candidate in source_dir.iterdir():
        match = _PAYLOAD_NAME_PATTERN.match(candidate.name)
        if not match:
            continue
        fetched_at = datetime.strptime(match.group(1), _STAMP_FORMAT).replace(tzinfo=UTC)
        cached.append((fetched_at, candidate))

    if not cached:
        return None
    fetched_at, path = max(cached, key=lambda item: item[0])
    return path, fetched_at

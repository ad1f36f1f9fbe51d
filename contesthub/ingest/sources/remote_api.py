from __future__ import annotations

import json
import logging
from datetime import date, datetime
from typing import Any, Mapping

import pandas as pd

from contesthub.ingest.base import BaseSource, RawResponse
from contesthub.normalize.dates import format_date_only
from contesthub.normalize.schema import Contest, coerce_category

logger = logging.getLogger(__name__)

DEFAULT_ORGANIZER = "한양대 ERICA"
DEFAULT_TITLE = "(제목 없음)"
ALL_TARGETS = "전체"
MAX_TAGS = 5


def _to_date_only(value: Any) -> str | None:
    if isinstance(value, bool) or not isinstance(value, (str, int, float, date, datetime)):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        timestamp = pd.to_datetime(value, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(timestamp):
        return None
    return format_date_only(timestamp.date())


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


def map_admin_record(record: Mapping[str, Any], *, fetched_at: datetime) -> Contest:
    """Map an admin-side record onto the public contest shape.

    The deadline falls back to the start date and then to the fetch day, so
    every mapped contest carries a deadline.
    """

    start = _to_date_only(record.get("startDate"))
    deadline = _to_date_only(record.get("endDate")) or start or format_date_only(fetched_at.date())

    targets = _string_list(record.get("targets"))
    apply_url = str(record.get("applyUrl") or "")
    image_url = record.get("imageUrl")

    return Contest(
        id=str(record.get("id", "")),
        title=str(record.get("title") or DEFAULT_TITLE),
        organizer=targets[0] if targets else DEFAULT_ORGANIZER,
        category=coerce_category(record.get("category")),
        start_date=start,
        end_date=deadline,
        deadline=deadline,
        tags=targets[:MAX_TAGS],
        target=", ".join(targets) if targets else ALL_TARGETS,
        summary=str(record.get("description") or ""),
        # The admin schema has no separate notice link yet.
        source_url=apply_url,
        apply_url=apply_url,
        image_url=str(image_url) if image_url else None,
    )


class RemoteApiSource(BaseSource):
    name = "remote_api"

    def __init__(self, endpoint: str) -> None:
        self.endpoint = endpoint

    def fetch(self, http_client: Any) -> RawResponse:
        content = http_client.get_bytes(self.endpoint)
        return RawResponse(content=content, extension="json", fetched_at=self.now())

    def parse(self, raw_content: bytes, *, fetched_at: datetime) -> list[Contest]:
        loaded = json.loads(raw_content.decode("utf-8-sig"))
        if not isinstance(loaded, list):
            logger.warning("Source=%s returned %s instead of a list", self.name, type(loaded).__name__)
            return []

        contests: list[Contest] = []
        skipped = 0
        for item in loaded:
            if not isinstance(item, Mapping):
                skipped += 1
                continue
            contests.append(map_admin_record(item, fetched_at=fetched_at))
        if skipped:
            logger.warning("Source=%s skipped %d non-object records", self.name, skipped)
        return contests

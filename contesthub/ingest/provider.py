from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence

from contesthub.ingest.base import BaseSource
from contesthub.ingest.cache import latest_raw_payload, write_raw_payload
from contesthub.ingest.http import ReadOnlyApiClient
from contesthub.ingest.registry import register_sources
from contesthub.ingest.sources.fallback import FallbackSource
from contesthub.normalize.schema import Contest

logger = logging.getLogger(__name__)

ROOT_DIR = Path(__file__).resolve().parents[2]
DEFAULT_RAW_DIR = ROOT_DIR / "data" / "raw"


@dataclass(frozen=True, slots=True)
class ProviderSettings:
    api_url: str | None = None
    raw_dir: Path = DEFAULT_RAW_DIR
    timeout_seconds: float = 10.0
    requests_per_second: float = 2.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ProviderSettings:
        env = os.environ if environ is None else environ
        return cls(
            api_url=(env.get("CONTESTHUB_API_URL") or "").strip() or None,
            raw_dir=Path(env.get("CONTESTHUB_RAW_DIR") or DEFAULT_RAW_DIR),
            timeout_seconds=float(env.get("CONTESTHUB_TIMEOUT_SECONDS") or 10.0),
            requests_per_second=float(env.get("CONTESTHUB_REQUESTS_PER_SECOND") or 2.0),
        )


@dataclass(slots=True)
class LoadReport:
    origin: str = "none"
    records: int = 0
    cache_path: str | None = None
    errors: list[dict[str, str]] = field(default_factory=list)


def _exception_summary(source: str, exc: Exception) -> dict[str, str]:
    return {"source": source, "type": type(exc).__name__, "message": str(exc)}


class ContestProvider:
    """Single accessor for contest records.

    Tries each remote source (caching the raw payload), then the newest cached
    payload of that source, then the bundled sample dataset. Failures are
    logged and recorded in ``last_report``; they never reach the caller.
    """

    def __init__(
        self,
        settings: ProviderSettings | None = None,
        *,
        sources: Sequence[BaseSource] | None = None,
        client_factory: Callable[[], Any] | None = None,
        fallback: BaseSource | None = None,
    ) -> None:
        self.settings = settings or ProviderSettings.from_env()
        self._sources = list(sources) if sources is not None else register_sources(self.settings.api_url)
        self._client_factory = client_factory or self._default_client
        self._fallback = fallback or FallbackSource()
        self._contests: list[Contest] | None = None
        self.last_report = LoadReport()

    def _default_client(self) -> ReadOnlyApiClient:
        return ReadOnlyApiClient(
            requests_per_second=self.settings.requests_per_second,
            timeout_seconds=self.settings.timeout_seconds,
        )

    def get_contests(self) -> list[Contest]:
        if self._contests is None:
            self._contests = self._load()
        return list(self._contests)

    def refresh(self) -> list[Contest]:
        self._contests = None
        return self.get_contests()

    def _load(self) -> list[Contest]:
        report = LoadReport()
        self.last_report = report

        if self._sources:
            client = self._client_factory()
            try:
                for source in self._sources:
                    contests = self._load_remote(source, client, report)
                    if contests:
                        return contests
                    contests = self._load_cached(source, report)
                    if contests:
                        return contests
            finally:
                client.close()

        return self._load_fallback(report)

    def _load_remote(self, source: BaseSource, client: Any, report: LoadReport) -> list[Contest]:
        try:
            raw = source.fetch(client)
            cache_path = write_raw_payload(
                source_name=source.name,
                payload=raw.content,
                extension=raw.extension,
                raw_root=self.settings.raw_dir,
                timestamp=raw.fetched_at,
            )
            contests = source.parse(raw.content, fetched_at=raw.fetched_at)
        except Exception as exc:
            report.errors.append(_exception_summary(source.name, exc))
            logger.exception("Source %s failed. Trying cached payload.", source.name)
            return []

        logger.info("Source=%s cached=%s records=%d", source.name, cache_path, len(contests))
        if not contests:
            logger.warning("Source=%s returned no contests", source.name)
            return []
        report.origin = source.name
        report.records = len(contests)
        report.cache_path = str(cache_path)
        return contests

    def _load_cached(self, source: BaseSource, report: LoadReport) -> list[Contest]:
        latest = latest_raw_payload(source_name=source.name, raw_root=self.settings.raw_dir)
        if latest is None:
            return []
        path, fetched_at = latest
        try:
            contests = source.parse(path.read_bytes(), fetched_at=fetched_at)
        except Exception as exc:
            report.errors.append(_exception_summary(source.name, exc))
            logger.exception("Cached payload %s could not be parsed", path)
            return []

        if contests:
            logger.warning("Using cached payload %s (%d contests)", path, len(contests))
            report.origin = f"{source.name}:cache"
            report.records = len(contests)
            report.cache_path = str(path)
        return contests

    def _load_fallback(self, report: LoadReport) -> list[Contest]:
        raw = self._fallback.fetch(None)
        contests = self._fallback.parse(raw.content, fetched_at=raw.fetched_at)
        if self._sources:
            logger.warning("Falling back to bundled sample contests (%d)", len(contests))
        report.origin = self._fallback.name
        report.records = len(contests)
        return contests

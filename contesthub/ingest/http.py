from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any

import requests
from requests import Response
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

DEFAULT_USER_AGENT = "ContestHubBot/0.1 (+https://localhost; contact=local)"
logger = logging.getLogger(__name__)
_SLOW_REQUEST_SECONDS = 3.0
_RETRY_STATUSES = (429, 500, 502, 503, 504)


@dataclass(slots=True)
class ReadOnlyApiClient:
    """GET-only JSON client with retries and a minimum spacing between calls."""

    requests_per_second: float = 2.0
    timeout_seconds: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    max_retries: int = 2
    backoff_factor: float = 0.5
    _session: requests.Session = field(init=False, repr=False)
    _last_request_monotonic: float = field(init=False, default=0.0)
    _lock: threading.Lock = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._session = requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent, "Accept": "application/json"})

        retry = Retry(
            total=self.max_retries,
            backoff_factor=self.backoff_factor,
            status_forcelist=_RETRY_STATUSES,
            allowed_methods=frozenset({"GET"}),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        self._session.mount("http://", adapter)
        self._session.mount("https://", adapter)
        self._lock = threading.Lock()

    def __enter__(self) -> ReadOnlyApiClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def get_bytes(self, url: str, *, params: dict[str, Any] | None = None) -> bytes:
        return self._get(url, params=params).content

    def get_json(self, url: str, *, params: dict[str, Any] | None = None) -> Any:
        return self._get(url, params=params).json()

    def _get(self, url: str, *, params: dict[str, Any] | None = None) -> Response:
        self._wait_turn()
        started_at = time.monotonic()
        response = self._session.get(url, params=params, timeout=self.timeout_seconds)
        elapsed = time.monotonic() - started_at
        if elapsed > _SLOW_REQUEST_SECONDS:
            logger.warning("Slow GET %.3fs %s", elapsed, url)
        response.raise_for_status()
        return response

    def _wait_turn(self) -> None:
        if self.requests_per_second <= 0:
            return
        min_interval = 1.0 / self.requests_per_second
        with self._lock:
            wait = min_interval - (time.monotonic() - self._last_request_monotonic)
            if wait > 0:
                time.sleep(wait)
            self._last_request_monotonic = time.monotonic()

from __future__ import annotations

from .base import BaseSource, RawResponse
from .cache import latest_raw_payload, write_raw_payload
from .http import ReadOnlyApiClient
from .provider import ContestProvider, LoadReport, ProviderSettings
from .registry import register_sources

__all__ = [
    "BaseSource",
    "ContestProvider",
    "LoadReport",
    "ProviderSettings",
    "RawResponse",
    "ReadOnlyApiClient",
    "latest_raw_payload",
    "register_sources",
    "write_raw_payload",
]

from __future__ import annotations

from .base import BaseSource
from .sources.remote_api import RemoteApiSource


def register_sources(api_url: str | None) -> list[BaseSource]:
    if not api_url:
        return []
    return [RemoteApiSource(api_url)]

from __future__ import annotations

from .fallback import FallbackSource, build_sample_records
from .remote_api import RemoteApiSource, map_admin_record

__all__ = ["FallbackSource", "RemoteApiSource", "build_sample_records", "map_admin_record"]

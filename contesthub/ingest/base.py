from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from contesthub.normalize.schema import Contest


@dataclass(slots=True)
class RawResponse:
    content: bytes
    extension: str
    fetched_at: datetime


class BaseSource(ABC):
    name: str

    @abstractmethod
    def fetch(self, http_client: Any) -> RawResponse:
        """Fetch the raw source payload."""

    @abstractmethod
    def parse(self, raw_content: bytes, *, fetched_at: datetime) -> list[Contest]:
        """Parse a raw payload into contest records."""

    @staticmethod
    def now() -> datetime:
        return datetime.now().astimezone()

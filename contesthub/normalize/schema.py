from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

CAMPUS_CONTEST = "교내 공모전"
SUPPORTERS = "서포터즈"
IC_PBL = "IC-PBL"
EXTERNAL_ACTIVITY = "대외활동"

CATEGORIES = (CAMPUS_CONTEST, SUPPORTERS, IC_PBL, EXTERNAL_ACTIVITY)
DEFAULT_CATEGORY = CAMPUS_CONTEST


def coerce_category(value: Any) -> str:
    if isinstance(value, str) and value in CATEGORIES:
        return value
    return DEFAULT_CATEGORY


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    as_str = str(value).strip()
    return as_str or None


def _tags(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item).strip() for item in value if str(item).strip()]


@dataclass(slots=True)
class Contest:
    """Canonical contest record shared by the classifier, the calendar and the UI.

    Date fields hold date-only ``YYYY-MM-DD`` strings exactly as the data source
    supplied them; parsing happens at the point of use so that malformed values
    degrade to "cannot classify" instead of failing at load time.
    """

    id: str
    title: str
    organizer: str
    category: str
    deadline: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    target: str = ""
    summary: str = ""
    source_url: str = ""
    apply_url: str = ""
    image_url: Optional[str] = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> Contest:
        image_url = payload.get("image_url", payload.get("imageUrl"))
        return cls(
            id=_text(payload.get("id")),
            title=_text(payload.get("title")),
            organizer=_text(payload.get("organizer")),
            category=coerce_category(payload.get("category")),
            deadline=_text(payload.get("deadline")).strip(),
            start_date=_optional_text(payload.get("start_date")),
            end_date=_optional_text(payload.get("end_date")),
            tags=_tags(payload.get("tags")),
            target=_text(payload.get("target")),
            summary=_text(payload.get("summary")),
            source_url=_text(payload.get("source_url")),
            apply_url=_text(payload.get("apply_url")),
            image_url=_optional_text(image_url),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "organizer": self.organizer,
            "category": self.category,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "deadline": self.deadline,
            "tags": list(self.tags),
            "target": self.target,
            "summary": self.summary,
            "source_url": self.source_url,
            "apply_url": self.apply_url,
            "imageUrl": self.image_url,
        }

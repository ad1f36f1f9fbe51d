from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

_RULE_FIELDS = ("urgent_max_days", "closed_visible_days", "ongoing_min_days")


@dataclass(frozen=True, slots=True)
class StatusRules:
    """Day-count thresholds that split the D-day line into status buckets.

    ``urgent`` owns D-``urgent_max_days``..D-0, ``ongoing`` starts the day after
    that window, ``closed_recent`` covers the ``closed_visible_days`` days after
    the deadline.
    """

    urgent_max_days: int
    closed_visible_days: int
    ongoing_min_days: int

    def __post_init__(self) -> None:
        for field_name in _RULE_FIELDS:
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Status rule '{field_name}' must be an integer.")
            if value < 0:
                raise ValueError(f"Status rule '{field_name}' must be non-negative.")

        if self.ongoing_min_days != self.urgent_max_days + 1:
            raise ValueError(
                "Status rules must leave no gap between urgent and ongoing "
                f"(ongoing_min_days={self.ongoing_min_days}, "
                f"urgent_max_days={self.urgent_max_days})."
            )

    @classmethod
    def baseline(cls) -> StatusRules:
        return cls(urgent_max_days=7, closed_visible_days=7, ongoing_min_days=8)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> StatusRules:
        values = payload or {}
        baseline = cls.baseline()
        return cls(
            urgent_max_days=int(values.get("urgent_max_days", baseline.urgent_max_days)),
            closed_visible_days=int(values.get("closed_visible_days", baseline.closed_visible_days)),
            ongoing_min_days=int(values.get("ongoing_min_days", baseline.ongoing_min_days)),
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "urgent_max_days": self.urgent_max_days,
            "closed_visible_days": self.closed_visible_days,
            "ongoing_min_days": self.ongoing_min_days,
        }


DEFAULT_RULES = StatusRules.baseline()

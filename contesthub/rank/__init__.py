from __future__ import annotations

from contesthub.rank.heuristics import (
    FIELD_RULES,
    CalendarFilters,
    PrizeRange,
    apply_calendar_filters,
    is_recruiting_team,
    matches_field,
    matches_prize_range,
    matching_fields,
    parse_prize_amount,
)
from contesthub.rank.listing import ListSort, ListStatusFilter, filter_contests
from contesthub.rank.rules import DEFAULT_RULES, StatusRules
from contesthub.rank.status import (
    ContestStatus,
    StatusPartition,
    badge_tone,
    classify,
    dday_label,
    partition_by_status,
    sort_by_deadline,
)

__all__ = [
    "DEFAULT_RULES",
    "FIELD_RULES",
    "CalendarFilters",
    "ContestStatus",
    "ListSort",
    "ListStatusFilter",
    "PrizeRange",
    "StatusPartition",
    "StatusRules",
    "apply_calendar_filters",
    "badge_tone",
    "classify",
    "dday_label",
    "filter_contests",
    "is_recruiting_team",
    "matches_field",
    "matches_prize_range",
    "matching_fields",
    "parse_prize_amount",
    "partition_by_status",
    "sort_by_deadline",
]

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Iterable

from contesthub.normalize.schema import CATEGORIES, Contest
from contesthub.rank.rules import DEFAULT_RULES, StatusRules
from contesthub.rank.status import ContestStatus, classify, sort_by_deadline

ALL_CATEGORIES = "ALL"


class ListStatusFilter(str, Enum):
    ALL = "ALL"
    OPEN = "OPEN"
    URGENT = "URGENT"


class ListSort(str, Enum):
    DEADLINE = "DEADLINE"
    NEWEST = "NEWEST"


_STATUS_FOR_FILTER = {
    ListStatusFilter.OPEN: ContestStatus.ONGOING,
    ListStatusFilter.URGENT: ContestStatus.URGENT,
}


def _matches_search(contest: Contest, query: str) -> bool:
    tags = " ".join(contest.tags or []).lower()
    return (
        query in (contest.title or "").lower()
        or query in (contest.organizer or "").lower()
        or query in tags
    )


def filter_contests(
    contests: Iterable[Contest],
    *,
    status: ListStatusFilter | str = ListStatusFilter.ALL,
    category: str = ALL_CATEGORIES,
    search: str = "",
    sort: ListSort | str = ListSort.DEADLINE,
    reference: date | datetime | None = None,
    rules: StatusRules = DEFAULT_RULES,
) -> list[Contest]:
    status_filter = ListStatusFilter(status)
    sort_order = ListSort(sort)
    if category != ALL_CATEGORIES and category not in CATEGORIES:
        raise ValueError(f"Unknown category: {category!r}")

    result = list(contests)

    wanted_status = _STATUS_FOR_FILTER.get(status_filter)
    if wanted_status is not None:
        result = [c for c in result if classify(c, reference, rules=rules) is wanted_status]

    if category != ALL_CATEGORIES:
        result = [c for c in result if c.category == category]

    query = search.strip().lower()
    if query:
        result = [c for c in result if _matches_search(c, query)]

    if sort_order is ListSort.DEADLINE:
        return sort_by_deadline(result)
    return sorted(result, key=lambda c: str(c.id), reverse=True)

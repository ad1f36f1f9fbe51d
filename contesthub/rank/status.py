from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Iterable

from contesthub.normalize.dates import days_until, parse_date_only
from contesthub.normalize.schema import Contest
from contesthub.rank.rules import DEFAULT_RULES, StatusRules


class ContestStatus(str, Enum):
    ONGOING = "ONGOING"
    URGENT = "URGENT"
    CLOSED_RECENT = "CLOSED_RECENT"
    HIDDEN = "HIDDEN"


@dataclass(slots=True)
class StatusPartition:
    ongoing: list[Contest] = field(default_factory=list)
    urgent: list[Contest] = field(default_factory=list)
    closed_recent: list[Contest] = field(default_factory=list)


def classify(
    contest: Contest,
    reference: date | datetime | None = None,
    *,
    rules: StatusRules = DEFAULT_RULES,
) -> ContestStatus:
    """Map a contest to its lifecycle bucket. Never raises on bad data."""

    remaining = days_until(contest.deadline, reference)
    if remaining is None:
        return ContestStatus.HIDDEN

    if remaining >= rules.ongoing_min_days:
        return ContestStatus.ONGOING
    if 0 <= remaining <= rules.urgent_max_days:
        return ContestStatus.URGENT
    if -rules.closed_visible_days <= remaining < 0:
        return ContestStatus.CLOSED_RECENT
    return ContestStatus.HIDDEN


def sort_by_deadline(contests: Iterable[Contest], *, descending: bool = False) -> list[Contest]:
    """Stable deadline sort; contests with unparseable deadlines always go last."""

    dated: list[tuple[date, Contest]] = []
    undated: list[Contest] = []
    for contest in contests:
        deadline = parse_date_only(contest.deadline)
        if deadline is None:
            undated.append(contest)
        else:
            dated.append((deadline, contest))

    dated.sort(key=lambda item: item[0], reverse=descending)
    return [contest for _, contest in dated] + undated


def partition_by_status(
    contests: Iterable[Contest],
    reference: date | datetime | None = None,
    *,
    rules: StatusRules = DEFAULT_RULES,
) -> StatusPartition:
    ongoing: list[Contest] = []
    urgent: list[Contest] = []
    closed_recent: list[Contest] = []

    for contest in contests:
        status = classify(contest, reference, rules=rules)
        if status is ContestStatus.ONGOING:
            ongoing.append(contest)
        elif status is ContestStatus.URGENT:
            urgent.append(contest)
        elif status is ContestStatus.CLOSED_RECENT:
            closed_recent.append(contest)

    return StatusPartition(
        ongoing=sort_by_deadline(ongoing),
        urgent=sort_by_deadline(urgent),
        closed_recent=sort_by_deadline(closed_recent, descending=True),
    )


def dday_label(contest: Contest, reference: date | datetime | None = None) -> str:
    remaining = days_until(contest.deadline, reference)
    if remaining is None:
        return ""
    if remaining < 0:
        return "마감"
    if remaining == 0:
        return "D-Day"
    return f"D-{remaining}"


def badge_tone(
    contest: Contest,
    reference: date | datetime | None = None,
    *,
    rules: StatusRules = DEFAULT_RULES,
) -> str:
    status = classify(contest, reference, rules=rules)
    if status is ContestStatus.URGENT:
        return "urgent"
    remaining = days_until(contest.deadline, reference)
    if remaining is not None and remaining < 0:
        return "closed"
    return "open"

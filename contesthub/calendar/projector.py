from __future__ import annotations

import calendar
import unicodedata
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable

from contesthub.normalize.dates import days_until, parse_date_only, start_of_today
from contesthub.normalize.schema import Contest

START_LABEL = "신청 시작"
DEADLINE_LABEL = "마감일"
CLOSED_LABEL = "신청 마감"
UPCOMING_WINDOW_DAYS = 21


class EventKind(str, Enum):
    START = "START"
    DEADLINE = "DEADLINE"


_KIND_ORDER = {EventKind.START: 0, EventKind.DEADLINE: 1}


@dataclass(frozen=True, slots=True)
class CalendarEvent:
    kind: EventKind
    contest: Contest


@dataclass(frozen=True, slots=True)
class EventBadge:
    label: str
    tone: str


def title_sort_key(title: str | None) -> str:
    # Code-point order over precomposed Hangul matches Korean dictionary order.
    return unicodedata.normalize("NFC", title or "").casefold()


def effective_end_date(contest: Contest) -> date | None:
    return parse_date_only(contest.deadline) or parse_date_only(contest.end_date)


def _resolve_today(today: date | datetime | None) -> date:
    if today is None:
        return start_of_today()
    if isinstance(today, datetime):
        return today.date()
    return today


def project_month(contests: Iterable[Contest], year: int, month: int) -> dict[int, list[CalendarEvent]]:
    """Group contest start and deadline events by day-of-month for one month.

    A contest whose start and deadline coincide yields two events on that day.
    Within a day, START events come first, then titles in ascending order.
    """

    if not 1 <= month <= 12:
        raise ValueError(f"month must be within 1..12, received {month}")

    events_by_day: dict[int, list[CalendarEvent]] = {}

    def _add(day: date | None, event: CalendarEvent) -> None:
        if day is None or day.year != year or day.month != month:
            return
        events_by_day.setdefault(day.day, []).append(event)

    for contest in contests:
        _add(parse_date_only(contest.start_date), CalendarEvent(EventKind.START, contest))
        _add(effective_end_date(contest), CalendarEvent(EventKind.DEADLINE, contest))

    for events in events_by_day.values():
        events.sort(key=lambda event: (_KIND_ORDER[event.kind], title_sort_key(event.contest.title)))
    return events_by_day


def event_badge(event: CalendarEvent, today: date | datetime | None = None) -> EventBadge:
    if event.kind is EventKind.START:
        return EventBadge(label=START_LABEL, tone="start")

    end = effective_end_date(event.contest)
    if end is None:
        return EventBadge(label=DEADLINE_LABEL, tone="deadline")
    if days_until(end, _resolve_today(today)) < 0:
        return EventBadge(label=CLOSED_LABEL, tone="closed")
    return EventBadge(label=DEADLINE_LABEL, tone="deadline")


def todays_deadlines(contests: Iterable[Contest], today: date | datetime | None = None) -> list[Contest]:
    resolved_today = _resolve_today(today)
    due_today = [c for c in contests if parse_date_only(c.deadline) == resolved_today]
    return sorted(due_today, key=lambda c: title_sort_key(c.title))


def upcoming_deadlines(
    contests: Iterable[Contest],
    today: date | datetime | None = None,
    *,
    window_days: int = UPCOMING_WINDOW_DAYS,
) -> list[Contest]:
    start = _resolve_today(today)
    end = start + timedelta(days=window_days)

    dated: list[tuple[date, Contest]] = []
    for contest in contests:
        deadline = parse_date_only(contest.deadline)
        if deadline is not None and start <= deadline <= end:
            dated.append((deadline, contest))
    dated.sort(key=lambda item: item[0])
    return [contest for _, contest in dated]


def month_grid(year: int, month: int) -> list[list[int | None]]:
    """Sunday-first weeks for the month, padded with ``None`` outside it."""

    weeks = calendar.Calendar(firstweekday=calendar.SUNDAY).monthdayscalendar(year, month)
    return [[day or None for day in week] for week in weeks]


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1

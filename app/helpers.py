from __future__ import annotations

from datetime import date
from typing import Iterable

import pandas as pd

from contesthub.calendar.projector import CalendarEvent, event_badge
from contesthub.normalize.schema import Contest
from contesthub.rank.heuristics import matching_fields, parse_prize_amount
from contesthub.rank.status import classify, dday_label

FRAME_COLUMNS = [
    "id",
    "title",
    "organizer",
    "category",
    "start_date",
    "deadline",
    "dday",
    "status",
    "prize",
    "fields",
    "apply_url",
]

_BADGE_ICONS = {"start": "🔵", "deadline": "🔴", "closed": "⚪"}


def format_prize(amount: int | None) -> str:
    if amount is None:
        return "Unknown"
    if amount >= 100_000_000 and amount % 100_000_000 == 0:
        return f"{amount // 100_000_000:,}억원"
    if amount % 10_000 == 0:
        return f"{amount // 10_000:,}만원"
    return f"{amount:,}원"


def contests_to_frame(contests: Iterable[Contest], *, today: date) -> pd.DataFrame:
    rows = [
        {
            "id": contest.id,
            "title": contest.title,
            "organizer": contest.organizer,
            "category": contest.category,
            "start_date": contest.start_date or "",
            "deadline": contest.deadline,
            "dday": dday_label(contest, today),
            "status": classify(contest, today).value,
            "prize": format_prize(parse_prize_amount(contest.summary)),
            "fields": ", ".join(matching_fields(contest)),
            "apply_url": contest.apply_url,
        }
        for contest in contests
    ]
    if not rows:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def format_event_line(event: CalendarEvent, *, today: date) -> str:
    badge = event_badge(event, today)
    return f"{_BADGE_ICONS.get(badge.tone, '')} [{badge.label}] {event.contest.title}".strip()


def overflow_label(total: int, shown: int) -> str:
    hidden = total - shown
    if hidden <= 0:
        return ""
    return f"+{hidden}개 더보기"

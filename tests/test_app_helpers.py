from __future__ import annotations

from datetime import date

from app.helpers import FRAME_COLUMNS, contests_to_frame, format_event_line, format_prize, overflow_label
from contesthub.calendar.projector import CalendarEvent, EventKind
from contesthub.normalize.schema import Contest


def _contest(contest_id: str, deadline: str, summary: str = "") -> Contest:
    return Contest(
        id=contest_id,
        title=f"{contest_id} 디자인 공모전",
        organizer="org",
        category="교내 공모전",
        deadline=deadline,
        summary=summary,
    )


def test_format_prize_handles_unknown_and_units() -> None:
    assert format_prize(None) == "Unknown"
    assert format_prize(5_000_000) == "500만원"
    assert format_prize(200_000_000) == "2억원"
    assert format_prize(150_000_000) == "15,000만원"
    assert format_prize(12_345) == "12,345원"


def test_contests_to_frame_derives_status_columns() -> None:
    frame = contests_to_frame(
        [_contest("a", "2024-03-12", "총 상금 500만원"), _contest("b", "bad")],
        today=date(2024, 3, 10),
    )

    assert list(frame.columns) == FRAME_COLUMNS
    assert frame.loc[0, "dday"] == "D-2"
    assert frame.loc[0, "status"] == "URGENT"
    assert frame.loc[0, "prize"] == "500만원"
    assert frame.loc[0, "fields"] == "디자인"
    assert frame.loc[1, "status"] == "HIDDEN"
    assert frame.loc[1, "prize"] == "Unknown"


def test_contests_to_frame_empty_keeps_columns() -> None:
    frame = contests_to_frame([], today=date(2024, 3, 10))

    assert frame.empty
    assert list(frame.columns) == FRAME_COLUMNS


def test_format_event_line_uses_badge_label() -> None:
    contest = _contest("a", "2024-03-01")
    line = format_event_line(CalendarEvent(EventKind.DEADLINE, contest), today=date(2024, 3, 10))

    assert "[신청 마감]" in line
    assert line.endswith("a 디자인 공모전")


def test_overflow_label() -> None:
    assert overflow_label(5, 3) == "+2개 더보기"
    assert overflow_label(3, 3) == ""

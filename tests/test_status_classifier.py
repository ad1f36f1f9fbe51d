from __future__ import annotations

from datetime import date, timedelta

from contesthub.normalize.dates import format_date_only
from contesthub.normalize.schema import Contest
from contesthub.rank.rules import StatusRules
from contesthub.rank.status import (
    ContestStatus,
    badge_tone,
    classify,
    dday_label,
    partition_by_status,
    sort_by_deadline,
)

TODAY = date(2024, 3, 10)


def _contest(contest_id: str, deadline: str, title: str | None = None) -> Contest:
    return Contest(
        id=contest_id,
        title=title or contest_id,
        organizer="org",
        category="교내 공모전",
        deadline=deadline,
    )


def _due_in(days: int, contest_id: str = "c") -> Contest:
    return _contest(contest_id, format_date_only(TODAY + timedelta(days=days)))


def test_classify_partitions_the_day_line_without_overlap() -> None:
    for days in range(-100, 101):
        status = classify(_due_in(days), TODAY)
        if days <= -8:
            assert status is ContestStatus.HIDDEN, days
        elif days <= -1:
            assert status is ContestStatus.CLOSED_RECENT, days
        elif days <= 7:
            assert status is ContestStatus.URGENT, days
        else:
            assert status is ContestStatus.ONGOING, days


def test_classify_hides_unparseable_deadlines() -> None:
    assert classify(_contest("bad", "2024-13-40"), TODAY) is ContestStatus.HIDDEN
    assert classify(_contest("empty", ""), TODAY) is ContestStatus.HIDDEN


def test_status_walks_through_lifecycle_as_reference_advances() -> None:
    contest = _due_in(7)

    assert classify(contest, TODAY) is ContestStatus.URGENT
    assert classify(contest, TODAY + timedelta(days=1)) is ContestStatus.URGENT
    assert classify(contest, TODAY + timedelta(days=8)) is ContestStatus.CLOSED_RECENT
    assert classify(contest, TODAY + timedelta(days=15)) is ContestStatus.HIDDEN


def test_classify_respects_custom_rules() -> None:
    rules = StatusRules(urgent_max_days=3, closed_visible_days=1, ongoing_min_days=4)

    assert classify(_due_in(4), TODAY, rules=rules) is ContestStatus.ONGOING
    assert classify(_due_in(3), TODAY, rules=rules) is ContestStatus.URGENT
    assert classify(_due_in(-2), TODAY, rules=rules) is ContestStatus.HIDDEN


def test_partition_by_status_groups_and_orders_each_bucket() -> None:
    contests = [
        _due_in(30, "ongoing-late"),
        _due_in(9, "ongoing-soon"),
        _due_in(5, "urgent-late"),
        _due_in(0, "urgent-today"),
        _due_in(-6, "closed-older"),
        _due_in(-1, "closed-yesterday"),
        _due_in(-30, "hidden-old"),
        _contest("hidden-bad", "not-a-date"),
    ]

    groups = partition_by_status(contests, TODAY)

    assert [c.id for c in groups.ongoing] == ["ongoing-soon", "ongoing-late"]
    assert [c.id for c in groups.urgent] == ["urgent-today", "urgent-late"]
    assert [c.id for c in groups.closed_recent] == ["closed-yesterday", "closed-older"]


def test_partition_by_status_never_duplicates_or_leaks_hidden() -> None:
    contests = [_due_in(days, f"c{days}") for days in range(-20, 21)]

    groups = partition_by_status(contests, TODAY)
    returned = [c.id for c in groups.ongoing + groups.urgent + groups.closed_recent]

    assert len(returned) == len(set(returned))
    assert all(classify(c, TODAY) is not ContestStatus.HIDDEN for c in groups.ongoing + groups.urgent + groups.closed_recent)
    assert len(returned) == 28


def test_sort_by_deadline_puts_unparseable_last_and_is_stable() -> None:
    contests = [
        _contest("bad", "??"),
        _contest("b", "2024-03-12"),
        _contest("a", "2024-03-12"),
        _contest("early", "2024-03-01"),
    ]

    assert [c.id for c in sort_by_deadline(contests)] == ["early", "b", "a", "bad"]
    assert [c.id for c in sort_by_deadline(contests, descending=True)] == ["b", "a", "early", "bad"]


def test_dday_label_and_badge_tone() -> None:
    assert dday_label(_due_in(3), TODAY) == "D-3"
    assert dday_label(_due_in(0), TODAY) == "D-Day"
    assert dday_label(_due_in(-2), TODAY) == "마감"
    assert dday_label(_contest("bad", ""), TODAY) == ""

    assert badge_tone(_due_in(7), TODAY) == "urgent"
    assert badge_tone(_due_in(8), TODAY) == "open"
    assert badge_tone(_due_in(-1), TODAY) == "closed"
    assert badge_tone(_contest("bad", ""), TODAY) == "open"

from __future__ import annotations

import pytest

from contesthub.normalize.schema import Contest
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


def _contest(contest_id: str, *, title: str = "", summary: str = "", tags: list[str] | None = None) -> Contest:
    return Contest(
        id=contest_id,
        title=title,
        organizer="org",
        category="교내 공모전",
        deadline="2024-03-20",
        tags=tags or [],
        summary=summary,
    )


@pytest.mark.parametrize(
    ("summary", "expected"),
    [
        ("총 상금 500만원", 5_000_000),
        ("상금 1,000만원", 10_000_000),
        ("대상 300 만 원", 3_000_000),
        ("1억", 100_000_000),
        ("총 1.5억 규모", 150_000_000),
        ("대상 1억, 우수상 500만원", 100_000_000),
        ("참가비 무료", None),
        ("상금 ５００만원", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_prize_amount(summary: str | None, expected: int | None) -> None:
    assert parse_prize_amount(summary) == expected


def test_matches_prize_range_bucket_edges() -> None:
    assert matches_prize_range(990_000, PrizeRange.UNDER_100)
    assert not matches_prize_range(1_000_000, PrizeRange.UNDER_100)
    assert matches_prize_range(1_000_000, PrizeRange.FROM_100_TO_300)
    assert matches_prize_range(3_000_000, "300_1000")
    assert not matches_prize_range(10_000_000, "300_1000")
    assert matches_prize_range(10_000_000, PrizeRange.OVER_1000)
    assert matches_prize_range(0, PrizeRange.UNDER_100)


def test_unknown_amount_only_matches_all_bucket() -> None:
    assert matches_prize_range(None, "ALL")
    assert not matches_prize_range(None, "UNDER_100")
    for bucket in PrizeRange:
        if bucket is not PrizeRange.ALL:
            assert not matches_prize_range(None, bucket)


def test_field_rules_are_non_exclusive() -> None:
    contest = _contest("c", title="AI 로고 디자인 공모전", tags=["창업"])

    assert matching_fields(contest) == ["창업", "IT/SW", "디자인"]
    assert matches_field(contest, "디자인")
    assert not matches_field(contest, "공학")


def test_field_rules_are_case_insensitive_and_scan_tags() -> None:
    assert matches_field(_contest("c", summary="ux research"), "디자인")
    assert matches_field(_contest("c", tags=["반도체"]), "공학")


def test_field_table_lists_six_fields() -> None:
    assert list(FIELD_RULES) == ["창업", "IT/SW", "디자인", "마케팅", "공학", "인문/사회"]


def test_is_recruiting_team() -> None:
    assert is_recruiting_team(_contest("c", title="팀원모집합니다"))
    assert is_recruiting_team(_contest("c", summary="팀원  모집 중"))
    assert is_recruiting_team(_contest("c", tags=["Recruiting"]))
    assert not is_recruiting_team(_contest("c", title="독서 감상문 대회"))
    assert not is_recruiting_team(_contest("c"))


def test_apply_calendar_filters_composes_all_predicates() -> None:
    contests = [
        _contest("startup", title="창업 경진대회 팀원 모집", summary="총 상금 500만원"),
        _contest("design", title="로고 디자인", summary="상금 50만원"),
        _contest("essay", title="에세이 대회", summary="상장 수여"),
    ]

    assert [c.id for c in apply_calendar_filters(contests, CalendarFilters())] == [
        "startup",
        "design",
        "essay",
    ]
    by_field = CalendarFilters(fields=frozenset({"디자인", "인문/사회"}))
    assert [c.id for c in apply_calendar_filters(contests, by_field)] == ["design", "essay"]

    by_prize = CalendarFilters(prize_range=PrizeRange.FROM_300_TO_1000)
    assert [c.id for c in apply_calendar_filters(contests, by_prize)] == ["startup"]

    team_only = CalendarFilters(team_only=True)
    assert [c.id for c in apply_calendar_filters(contests, team_only)] == ["startup"]


def test_apply_calendar_filters_rejects_unknown_field() -> None:
    with pytest.raises(KeyError):
        apply_calendar_filters([], CalendarFilters(fields=frozenset({"요리"})))

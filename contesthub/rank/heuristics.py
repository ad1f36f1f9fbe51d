from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from contesthub.normalize.schema import Contest

FIELD_RULES: dict[str, re.Pattern[str]] = {
    "창업": re.compile(r"창업|스타트업|사업화|BM|아이디어", re.IGNORECASE),
    "IT/SW": re.compile(r"IT|SW|소프트웨어|개발|코딩|해커톤|AI|데이터|앱|웹|알고리즘", re.IGNORECASE),
    "디자인": re.compile(r"디자인|포스터|로고|UX|UI|영상|콘텐츠", re.IGNORECASE),
    "마케팅": re.compile(r"마케팅|홍보|브랜딩|SNS|캠페인", re.IGNORECASE),
    "공학": re.compile(r"공학|제조|로봇|기계|전기|전자|화학|반도체", re.IGNORECASE),
    "인문/사회": re.compile(r"인문|사회|글쓰기|에세이|독서|정책|문화|역사", re.IGNORECASE),
}

_TEAM_RECRUITING_PATTERN = re.compile(r"팀원모집|팀원\s*모집|리크루팅|recruit", re.IGNORECASE)
_WHITESPACE_PATTERN = re.compile(r"\s+")
_EOK_PATTERN = re.compile(r"(\d+(?:\.\d+)?)억", re.ASCII)
_MAN_PATTERN = re.compile(r"(\d{1,3}(?:,\d{3})*|\d+)(?:만원|만)", re.ASCII)

EOK = 100_000_000
MAN = 10_000


class PrizeRange(str, Enum):
    ALL = "ALL"
    UNDER_100 = "UNDER_100"
    FROM_100_TO_300 = "100_300"
    FROM_300_TO_1000 = "300_1000"
    OVER_1000 = "OVER_1000"


# Half-open bounds in units of 10,000 (만원).
_PRIZE_BOUNDS: dict[PrizeRange, tuple[float | None, float | None]] = {
    PrizeRange.UNDER_100: (None, 100),
    PrizeRange.FROM_100_TO_300: (100, 300),
    PrizeRange.FROM_300_TO_1000: (300, 1000),
    PrizeRange.OVER_1000: (1000, None),
}


def searchable_text(contest: Contest) -> str:
    tags = " ".join(str(tag) for tag in (contest.tags or []))
    return f"{contest.title or ''} {contest.summary or ''} {tags}"


def matches_field(contest: Contest, field_key: str) -> bool:
    return FIELD_RULES[field_key].search(searchable_text(contest)) is not None


def matching_fields(contest: Contest) -> list[str]:
    text = searchable_text(contest)
    return [key for key, pattern in FIELD_RULES.items() if pattern.search(text)]


def parse_prize_amount(summary: str | None) -> int | None:
    """Rough prize estimate in won from text like "총 상금 500만원" or "1억".

    The 억 pattern wins over 만 when both appear. ``None`` means the amount is
    unknown, which is not the same as zero.
    """

    if not summary:
        return None
    compact = _WHITESPACE_PATTERN.sub("", summary)

    eok = _EOK_PATTERN.search(compact)
    if eok:
        return round(float(eok.group(1)) * EOK)

    man = _MAN_PATTERN.search(compact)
    if man:
        return int(man.group(1).replace(",", "")) * MAN
    return None


def matches_prize_range(amount: int | None, bucket: PrizeRange | str) -> bool:
    resolved = PrizeRange(bucket)
    if resolved is PrizeRange.ALL:
        return True
    if amount is None:
        return False

    in_man = amount / MAN
    lower, upper = _PRIZE_BOUNDS[resolved]
    if lower is not None and in_man < lower:
        return False
    if upper is not None and in_man >= upper:
        return False
    return True


def is_recruiting_team(contest: Contest) -> bool:
    return _TEAM_RECRUITING_PATTERN.search(searchable_text(contest)) is not None


@dataclass(frozen=True, slots=True)
class CalendarFilters:
    fields: frozenset[str] = field(default_factory=frozenset)
    prize_range: PrizeRange = PrizeRange.ALL
    team_only: bool = False


def apply_calendar_filters(contests: Iterable[Contest], filters: CalendarFilters) -> list[Contest]:
    unknown = set(filters.fields) - set(FIELD_RULES)
    if unknown:
        raise KeyError(f"Unknown field keys: {sorted(unknown)}")

    selected: list[Contest] = []
    for contest in contests:
        if filters.fields and not any(matches_field(contest, key) for key in filters.fields):
            continue
        if not matches_prize_range(parse_prize_amount(contest.summary), filters.prize_range):
            continue
        if filters.team_only and not is_recruiting_team(contest):
            continue
        selected.append(contest)
    return selected

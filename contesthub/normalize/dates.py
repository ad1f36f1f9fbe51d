from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

_DATE_ONLY_PATTERN = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})$")


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_date_only(value: Any) -> date | None:
    """Parse a strict ``YYYY-MM-DD`` string into a calendar day.

    Returns ``None`` for empty input, other shapes and impossible days such as
    ``2024-13-40``. Values are local calendar days with no time or zone, so the
    day read back is always the day written.
    """

    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return _as_date(value)
    if not isinstance(value, str):
        return None

    match = _DATE_ONLY_PATTERN.match(value.strip())
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def start_of_today() -> date:
    return date.today()


def format_date_only(value: date | datetime) -> str:
    day = _as_date(value)
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def days_until(deadline: Any, reference: date | datetime | None = None) -> int | None:
    """Signed day count from ``reference`` (default: today) to ``deadline``.

    Positive means the deadline is ahead, zero is D-day, negative is past.
    """

    end = parse_date_only(deadline)
    if end is None:
        return None
    base = _as_date(reference) if reference is not None else start_of_today()
    return (end - base).days

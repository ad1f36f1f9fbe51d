"""Contest data model and date-only helpers."""

from contesthub.normalize.dates import days_until, format_date_only, parse_date_only, start_of_today
from contesthub.normalize.schema import CATEGORIES, DEFAULT_CATEGORY, Contest, coerce_category

__all__ = [
    "CATEGORIES",
    "DEFAULT_CATEGORY",
    "Contest",
    "coerce_category",
    "days_until",
    "format_date_only",
    "parse_date_only",
    "start_of_today",
]

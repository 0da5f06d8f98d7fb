from .mime import CATEGORIES, CATEGORY_RULES, DEFAULT_MIME, OTHER_CATEGORY, category_for
from .time import now_utc, parse_rfc3339, seconds_until, to_short_date

__all__ = [
    "CATEGORIES",
    "CATEGORY_RULES",
    "DEFAULT_MIME",
    "OTHER_CATEGORY",
    "category_for",
    "now_utc",
    "parse_rfc3339",
    "seconds_until",
    "to_short_date",
]

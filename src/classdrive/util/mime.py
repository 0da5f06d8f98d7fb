from __future__ import annotations

from typing import Callable

DEFAULT_MIME: str = "application/octet-stream"

OTHER_CATEGORY: str = "Other"


def _contains(*needles: str) -> Callable[[str], bool]:
    def predicate(mime_type: str) -> bool:
        return any(needle in mime_type for needle in needles)

    return predicate


# Evaluated in order; the first matching predicate wins.
# Google apps types match too (e.g. application/vnd.google-apps.spreadsheet).
CATEGORY_RULES: tuple[tuple[Callable[[str], bool], str], ...] = (
    (_contains("pdf"), "PDF"),
    (_contains("spreadsheet"), "Spreadsheet"),
    (_contains("document"), "Document"),
    (_contains("presentation"), "Presentation"),
    (_contains("image"), "Image"),
    (_contains("video"), "Video"),
    (_contains("audio"), "Audio"),
    (_contains("zip", "rar", "tar"), "Archive"),
)

CATEGORIES: tuple[str, ...] = tuple(c for _, c in CATEGORY_RULES) + (OTHER_CATEGORY,)


def category_for(mime_type: str) -> str:
    """
    Return the coarse category for a MIME type.

    Matching is case-sensitive on the raw string; Drive always reports
    lowercase types.
    """
    if not isinstance(mime_type, str):
        return OTHER_CATEGORY
    for predicate, category in CATEGORY_RULES:
        if predicate(mime_type):
            return category
    return OTHER_CATEGORY

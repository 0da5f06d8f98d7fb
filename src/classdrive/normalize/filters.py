"""Dashboard helpers over normalized files."""

from __future__ import annotations

from typing import Iterable, Optional
from urllib.parse import urlencode

from classdrive.models import NormalizedFile

DOWNLOAD_BASE_URL: str = "https://drive.google.com/uc"


def download_url(file_id: str) -> str:
    """Direct download link for a publicly readable Drive file."""
    return f"{DOWNLOAD_BASE_URL}?{urlencode({'export': 'download', 'id': file_id})}"


def filter_files(
    files: Iterable[NormalizedFile],
    *,
    term: Optional[str] = None,
    category: Optional[str] = None,
) -> list[NormalizedFile]:
    """
    Filter files the way the dashboard does.

    `term` matches name, category or class tag (case-insensitive substring);
    `category` must match exactly.
    """
    result = list(files)

    if term:
        needle = term.lower()
        result = [
            f
            for f in result
            if needle in f.name.lower()
            or needle in f.category.lower()
            or needle in f.class_tag.lower()
        ]

    if category:
        result = [f for f in result if f.category == category]

    return result


def categories_of(files: Iterable[NormalizedFile]) -> list[str]:
    """Unique categories, in first-seen order."""
    seen: dict[str, None] = {}
    for f in files:
        seen.setdefault(f.category, None)
    return list(seen)

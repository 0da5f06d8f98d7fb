"""Mapping of raw Drive records to NormalizedFile."""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from classdrive.models import NormalizedFile, Origin
from classdrive.util.mime import DEFAULT_MIME, category_for
from classdrive.util.time import parse_rfc3339, to_short_date

UNNAMED_FILE: str = "Unnamed File"
UNKNOWN_SIZE: str = "Unknown size"
UNKNOWN_DATE: str = "Unknown date"
ALL_CLASSES: str = "All Classes"

SIZE_UNITS: tuple[str, ...] = ("Bytes", "KB", "MB", "GB", "TB")

_GRADE_RE = re.compile(r"grade\s*:?\s*(\d+)", re.IGNORECASE | re.ASCII)
_DECIMAL_RE = re.compile(r"^[0-9]+$")

_UPLOADED_BY: dict[str, str] = {
    "listed": "Google Drive",
    "uploaded": "You",
}


def _parse_size(value: Any) -> Optional[int]:
    # Drive reports size as a decimal string; bool is an int subclass.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _DECIMAL_RE.match(value.strip()):
        try:
            return int(value.strip())
        except ValueError:
            # Longer than the interpreter's int-string conversion limit.
            return None
    return None


def format_file_size(size: Any) -> str:
    """
    Human-readable size on a base-1024 ladder.

    1536 -> "2 KB", 1572864 -> "2 MB". Sizes past the last unit stay in TB.
    """
    n = _parse_size(size)
    if n is None or n < 0:
        return UNKNOWN_SIZE
    if n == 0:
        return "0 Byte"

    index = 0
    while index < len(SIZE_UNITS) - 1 and n >= 1024 ** (index + 1):
        index += 1

    # Half-up rounding in integers; floats overflow on absurd sizes.
    unit = 1024**index
    value = (n * 2 + unit) // (2 * unit)
    try:
        return f"{value} {SIZE_UNITS[index]}"
    except ValueError:
        return UNKNOWN_SIZE


def file_category(mime_type: Any) -> str:
    return category_for(mime_type)


def class_tag(description: Any) -> str:
    """Return "Grade N" for descriptions like "Grade: 11" or "grade10"."""
    if not isinstance(description, str) or not description:
        return ALL_CLASSES
    match = _GRADE_RE.search(description)
    if match is None:
        return ALL_CLASSES
    return f"Grade {match.group(1)}"


def format_created(created_time: Any) -> str:
    if not isinstance(created_time, str):
        return UNKNOWN_DATE
    try:
        return to_short_date(parse_rfc3339(created_time))
    except (ValueError, OverflowError):
        # OverflowError: offsets that push year 1 or 9999 out of range.
        return UNKNOWN_DATE


def _text(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return value if isinstance(value, str) else None


def normalize(remote: Mapping[str, Any] | None, origin: Origin = "listed") -> NormalizedFile:
    """
    Build a NormalizedFile from a Drive record.

    Total: every missing or malformed field falls back to a default, so this
    never raises for any mapping (or None).
    """
    data: Mapping[str, Any] = remote if isinstance(remote, Mapping) else {}

    mime_type = _text(data, "mimeType") or DEFAULT_MIME

    return NormalizedFile(
        id=_text(data, "id") or "",
        name=_text(data, "name") or UNNAMED_FILE,
        mime_type=mime_type,
        size_label=format_file_size(data.get("size")),
        created_label=format_created(data.get("createdTime")),
        category=file_category(mime_type),
        class_tag=class_tag(data.get("description")),
        uploaded_by=_UPLOADED_BY.get(origin, _UPLOADED_BY["listed"]),
        web_view_link=_text(data, "webViewLink"),
        web_content_link=_text(data, "webContentLink"),
        icon_link=_text(data, "iconLink"),
        thumbnail_link=_text(data, "thumbnailLink"),
    )

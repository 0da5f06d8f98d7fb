"""Public normalization exports for classdrive."""

from __future__ import annotations

from .filters import categories_of, download_url, filter_files
from .normalizer import (
    ALL_CLASSES,
    UNKNOWN_DATE,
    UNKNOWN_SIZE,
    UNNAMED_FILE,
    class_tag,
    file_category,
    format_created,
    format_file_size,
    normalize,
)

__all__ = [
    "normalize",
    "format_file_size",
    "file_category",
    "class_tag",
    "format_created",
    "download_url",
    "filter_files",
    "categories_of",
    "ALL_CLASSES",
    "UNKNOWN_DATE",
    "UNKNOWN_SIZE",
    "UNNAMED_FILE",
]

"""Field definitions for Google Drive API requests."""

from __future__ import annotations

FILE_FIELDS: str = (
    "id,"
    "name,"
    "mimeType,"
    "size,"
    "createdTime,"
    "description,"
    "webViewLink,"
    "webContentLink,"
    "iconLink,"
    "thumbnailLink"
)

LIST_FIELDS: str = f"files({FILE_FIELDS})"

PAGE_SIZE: int = 50

PUBLIC_READER_PERMISSION: dict[str, str] = {"role": "reader", "type": "anyone"}

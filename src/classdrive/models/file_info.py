"""Data models for Drive file records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Optional, TypedDict


Origin = Literal["listed", "uploaded"]


class RemoteFile(TypedDict, total=False):
    """A file record as returned by the Drive v3 API (all keys optional)."""

    id: str
    name: str
    mimeType: str
    size: str
    createdTime: str
    description: str
    webViewLink: str
    webContentLink: str
    iconLink: str
    thumbnailLink: str


@dataclass(slots=True, frozen=True)
class NormalizedFile:
    """
    Display-ready view of a Drive file.

    Built by `classdrive.normalize.normalize`; never mutated afterwards.
    """

    id: str
    name: str
    mime_type: str
    size_label: str
    created_label: str
    category: str
    class_tag: str
    uploaded_by: str

    web_view_link: Optional[str] = None
    web_content_link: Optional[str] = None
    icon_link: Optional[str] = None
    thumbnail_link: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "mimeType": self.mime_type,
            "size": self.size_label,
            "createdTime": self.created_label,
            "category": self.category,
            "forClass": self.class_tag,
            "uploadedBy": self.uploaded_by,
            "webViewLink": self.web_view_link,
            "webContentLink": self.web_content_link,
            "iconLink": self.icon_link,
            "thumbnailLink": self.thumbnail_link,
        }


@dataclass(slots=True, frozen=True)
class FileBlob:
    """Bytes and metadata of a file the user wants to upload."""

    name: str
    mime_type: str
    data: bytes

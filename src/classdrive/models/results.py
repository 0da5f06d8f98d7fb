"""Result models returned by the sync façade."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional

from .file_info import NormalizedFile


ListStatus = Literal["ok", "unauthenticated", "unavailable"]
FileStatus = Literal["ok", "not_found", "unauthenticated", "unavailable"]
UploadStatus = Literal[
    "uploaded",
    "uploaded_private",
    "unauthenticated",
    "invalid",
    "failed",
    "rolled_back",
]


@dataclass(slots=True)
class AuthResult:
    """Result of complete_authorization / refresh_access."""

    success: bool
    error: Optional[str] = None
    error_type: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, "error": self.error}


@dataclass(slots=True)
class ListResult:
    """
    Result of list_files.

    `authenticated` keeps the coarse flag the UI renders; `status`
    separates an expired/revoked token from a transient failure.
    """

    files: list[NormalizedFile] = field(default_factory=list)
    authenticated: bool = False
    status: ListStatus = "unauthenticated"

    def to_dict(self) -> dict[str, Any]:
        return {
            "files": [f.to_dict() for f in self.files],
            "authenticated": self.authenticated,
            "status": self.status,
        }


@dataclass(slots=True)
class FileResult:
    """Result of get_file."""

    file: Optional[NormalizedFile] = None
    authenticated: bool = False
    status: FileStatus = "unauthenticated"

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file.to_dict() if self.file is not None else None,
            "authenticated": self.authenticated,
            "status": self.status,
        }


@dataclass(slots=True)
class UploadResult:
    """
    Result of upload_file.

    `error` is always a generic, user-presentable message; `detail` carries
    the provider's message when one was available.
    """

    success: bool
    status: UploadStatus
    file: Optional[NormalizedFile] = None
    error: Optional[str] = None
    detail: Optional[str] = None
    shared: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "status": self.status,
            "file": self.file.to_dict() if self.file is not None else None,
            "error": self.error,
            "detail": self.detail,
            "shared": self.shared,
        }


@dataclass(slots=True)
class DisconnectResult:
    success: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success}

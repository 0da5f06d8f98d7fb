"""Public model exports for classdrive."""

from __future__ import annotations

from .file_info import FileBlob, NormalizedFile, Origin, RemoteFile
from .results import (
    AuthResult,
    DisconnectResult,
    FileResult,
    FileStatus,
    ListResult,
    ListStatus,
    UploadResult,
    UploadStatus,
)
from .session import SessionContext, TokenPair

__all__ = [
    "RemoteFile",
    "NormalizedFile",
    "FileBlob",
    "Origin",
    "SessionContext",
    "TokenPair",
    "AuthResult",
    "ListResult",
    "ListStatus",
    "FileResult",
    "FileStatus",
    "UploadResult",
    "UploadStatus",
    "DisconnectResult",
]

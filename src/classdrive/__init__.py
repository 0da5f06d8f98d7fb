"""classdrive public API."""

from __future__ import annotations

from classdrive.auth import AuthInfo, OAuthClient
from classdrive.controller import DriveController
from classdrive.errors import (
    AuthExchangeError,
    ClassDriveError,
    HttpErrorInfo,
    InvalidArgumentError,
    PermissionGrantError,
    RemoteError,
    RemoteGetError,
    RemoteListError,
    RemoteUploadError,
    TokenRefreshError,
    classify_http_error,
)
from classdrive.manager import DriveSyncManager
from classdrive.models import (
    AuthResult,
    DisconnectResult,
    FileBlob,
    FileResult,
    ListResult,
    NormalizedFile,
    SessionContext,
    TokenPair,
    UploadResult,
)
from classdrive.normalize import normalize
from classdrive.session import TokenStore

__all__ = [
    # High-level
    "DriveSyncManager",
    "DriveController",
    "TokenStore",
    "normalize",
    # Auth
    "AuthInfo",
    "OAuthClient",
    # Models
    "NormalizedFile",
    "FileBlob",
    "SessionContext",
    "TokenPair",
    "AuthResult",
    "ListResult",
    "FileResult",
    "UploadResult",
    "DisconnectResult",
    # Errors
    "ClassDriveError",
    "InvalidArgumentError",
    "AuthExchangeError",
    "TokenRefreshError",
    "RemoteError",
    "RemoteListError",
    "RemoteGetError",
    "RemoteUploadError",
    "PermissionGrantError",
    "HttpErrorInfo",
    "classify_http_error",
]

"""Public error exports for classdrive."""

from __future__ import annotations

from .exceptions import (
    AuthExchangeError,
    ClassDriveError,
    FailureKind,
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

__all__ = [
    "ClassDriveError",
    "InvalidArgumentError",
    "AuthExchangeError",
    "TokenRefreshError",
    "RemoteError",
    "RemoteListError",
    "RemoteGetError",
    "RemoteUploadError",
    "PermissionGrantError",
    "FailureKind",
    "HttpErrorInfo",
    "classify_http_error",
]

"""Exception hierarchy and HTTP failure classification for classdrive."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Optional


FailureKind = Literal[
    "auth",
    "permission",
    "quota",
    "not_found",
    "network",
    "invalid",
    "unknown",
]


class ClassDriveError(Exception):
    """
    Base exception for classdrive.

    Attributes:
        details: Optional structured information (e.g., HTTP status, kind).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class InvalidArgumentError(ClassDriveError):
    """Raised when arguments or configuration are invalid."""


class AuthExchangeError(ClassDriveError):
    """Raised when an authorization code cannot be exchanged for tokens."""


class TokenRefreshError(ClassDriveError):
    """Raised when a refresh token cannot produce a new access token."""


class RemoteError(ClassDriveError):
    """Base class for Drive adapter failures."""

    @property
    def kind(self) -> FailureKind:
        return self.details.get("kind", "unknown")

    @property
    def is_auth_failure(self) -> bool:
        """True when the access token was rejected (expired or revoked)."""
        return self.kind == "auth"

    @property
    def provider_message(self) -> str | None:
        value = self.details.get("provider_message")
        return value if isinstance(value, str) else None


class RemoteListError(RemoteError):
    """Raised when listing files fails."""


class RemoteGetError(RemoteError):
    """Raised when fetching a single file fails for a reason other than 404."""


class RemoteUploadError(RemoteError):
    """Raised when creating (or deleting) an uploaded file fails."""


class PermissionGrantError(RemoteError):
    """Raised when the public-read grant after an upload fails."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information used for classification."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "usageLimits",
    "dailyLimitExceeded",
    "storageQuotaExceeded",
)

_RATE_REASON_KEYWORDS: tuple[str, ...] = (
    "rateLimitExceeded",
    "userRateLimitExceeded",
)


def _reason_matches(reason: str | None, keywords: tuple[str, ...]) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in keywords)


def classify_http_error(info: HttpErrorInfo) -> FailureKind:
    """
    Classify an HTTP error into a failure kind.

    Policy:
        - 401 -> auth
        - 403 -> network if rate-limited, quota if quota-related,
          permission otherwise
        - 404 -> not_found
        - 400 -> invalid
        - 429 -> network
        - 5xx -> network
        - otherwise -> unknown
    """
    code = info.status_code

    if code == 401:
        return "auth"
    if code == 403:
        if _reason_matches(info.reason, _RATE_REASON_KEYWORDS):
            return "network"
        if _reason_matches(info.reason, _QUOTA_REASON_KEYWORDS):
            return "quota"
        return "permission"
    if code == 404:
        return "not_found"
    if code == 400:
        return "invalid"
    if code == 429:
        return "network"
    if 500 <= code <= 599:
        return "network"

    return "unknown"

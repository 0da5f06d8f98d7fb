"""Google Drive API controller for a single access token."""

from __future__ import annotations

import io
import json
import logging
from typing import Any, Callable, Optional, TypeVar

from classdrive.errors import (
    FailureKind,
    HttpErrorInfo,
    InvalidArgumentError,
    PermissionGrantError,
    RemoteError,
    RemoteGetError,
    RemoteListError,
    RemoteUploadError,
    classify_http_error,
)
from classdrive.models import FileBlob, RemoteFile
from classdrive.util.mime import DEFAULT_MIME

from .fields import FILE_FIELDS, LIST_FIELDS, PAGE_SIZE, PUBLIC_READER_PERMISSION

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT_SEC: float = 30.0


class DriveController:
    """
    Drive API controller.

    Notes:
        - Built per call from a bare access token; it never refreshes.
        - The Drive `service` object is NOT exposed.
        - Every failure is raised as a RemoteError subclass whose
          `details["kind"]` tells an expired token apart from other failures.
    """

    def __init__(self, access_token: str, *, timeout_sec: float = DEFAULT_TIMEOUT_SEC) -> None:
        if not isinstance(access_token, str) or not access_token:
            raise InvalidArgumentError("access_token must be a non-empty string")
        self._service = _build_drive_service(access_token, timeout_sec)

    @classmethod
    def from_service(cls, service: Any) -> "DriveController":
        """Create controller from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._service = service
        return obj

    # ----------------------------
    # Public API
    # ----------------------------
    def list_files(self, search_term: Optional[str] = None) -> list[RemoteFile]:
        """List up to PAGE_SIZE non-trashed files, optionally filtered by name."""
        req = self._service.files().list(
            q=build_list_query(search_term),
            pageSize=PAGE_SIZE,
            fields=LIST_FIELDS,
        )
        data = self._execute(req.execute, RemoteListError, "Failed to list files")
        files = data.get("files") if isinstance(data, dict) else None
        return list(files) if isinstance(files, list) else []

    def get_file(self, file_id: str) -> Optional[RemoteFile]:
        """Return one file, or None when Drive reports it does not exist."""
        req = self._service.files().get(fileId=file_id, fields=FILE_FIELDS)
        try:
            return self._execute(
                req.execute,
                RemoteGetError,
                "Failed to fetch file",
                file_id=file_id,
            )
        except RemoteGetError as exc:
            if exc.kind == "not_found":
                return None
            raise

    def upload_file(self, blob: FileBlob, class_tag: Optional[str] = None) -> RemoteFile:
        """Create a new Drive file from blob; description records the grade."""
        try:
            from googleapiclient.http import MediaIoBaseUpload
        except Exception as exc:  # pragma: no cover
            raise RemoteUploadError(
                "google-api-python-client is not available",
                details={"kind": "unknown"},
                cause=exc,
            ) from exc

        body: dict[str, Any] = {"name": blob.name}
        if class_tag:
            body["description"] = f"Grade: {class_tag}"

        media = MediaIoBaseUpload(
            io.BytesIO(blob.data),
            mimetype=blob.mime_type or DEFAULT_MIME,
            resumable=True,
        )
        req = self._service.files().create(
            body=body,
            media_body=media,
            fields=FILE_FIELDS,
        )
        return self._execute(req.execute, RemoteUploadError, "Failed to upload file", name=blob.name)

    def grant_public_read(self, file_id: str) -> None:
        """Make file readable by anyone with the link."""
        req = self._service.permissions().create(
            fileId=file_id,
            body=dict(PUBLIC_READER_PERMISSION),
            fields="id",
        )
        self._execute(
            req.execute,
            PermissionGrantError,
            "Failed to share file",
            file_id=file_id,
        )

    def delete_file(self, file_id: str) -> None:
        req = self._service.files().delete(fileId=file_id)
        self._execute(req.execute, RemoteUploadError, "Failed to delete file", file_id=file_id)

    # ----------------------------
    # Internals
    # ----------------------------
    def _execute(
        self,
        func: Callable[[], T],
        error_cls: type[RemoteError],
        message: str,
        **context: Any,
    ) -> T:
        try:
            return func()
        except Exception as exc:
            details = dict(context)
            details.update(_failure_details(exc))
            logger.warning(
                "%s (kind=%s, status=%s)",
                message,
                details.get("kind"),
                details.get("status_code"),
            )
            raise error_cls(message, details=details, cause=exc) from exc


def build_list_query(search_term: Optional[str] = None) -> str:
    q = "trashed = false"
    if search_term:
        escaped = search_term.replace("\\", "\\\\").replace("'", "\\'")
        q = f"{q} and name contains '{escaped}'"
    return q


def _build_drive_service(access_token: str, timeout_sec: float):
    try:
        import httplib2
        from google.oauth2.credentials import Credentials
        from google_auth_httplib2 import AuthorizedHttp
        from googleapiclient.discovery import build
    except Exception as exc:  # pragma: no cover
        raise RemoteError(
            "google-api-python-client is not available",
            details={"kind": "unknown", "hint": "Install google-api-python-client"},
            cause=exc,
        ) from exc

    creds = Credentials(token=access_token)
    http = AuthorizedHttp(creds, http=httplib2.Http(timeout=timeout_sec))
    try:
        return build("drive", "v3", http=http, cache_discovery=False)
    except Exception as exc:
        raise RemoteError(
            "Failed to build Drive service",
            details={"kind": "unknown"},
            cause=exc,
        ) from exc


def _failure_details(exc: Exception) -> dict[str, Any]:
    try:
        from googleapiclient.errors import HttpError
    except Exception:  # pragma: no cover
        HttpError = None  # type: ignore[assignment]

    if HttpError is not None and isinstance(exc, HttpError):
        info = _http_error_to_info(exc)
        return {
            "kind": classify_http_error(info),
            "status_code": info.status_code,
            "reason": info.reason,
            "provider_message": info.message,
        }

    return {"kind": _transport_kind(exc)}


def _transport_kind(exc: Exception) -> FailureKind:
    try:
        from google.auth.exceptions import RefreshError
    except Exception:  # pragma: no cover
        RefreshError = None  # type: ignore[assignment]

    # A bare access token cannot be refreshed; a 401 surfaces as RefreshError.
    if RefreshError is not None and isinstance(exc, RefreshError):
        return "auth"
    if isinstance(exc, (OSError, TimeoutError)):
        return "network"

    try:
        import httplib2
    except Exception:  # pragma: no cover
        return "unknown"
    if isinstance(exc, httplib2.HttpLib2Error):
        return "network"
    return "unknown"


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
            err = payload.get("error", {})
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]
        except (ValueError, AttributeError):
            message = None

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )

"""DriveSyncManager: the façade the presentation layer calls."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from classdrive.auth import AuthInfo, OAuthClient
from classdrive.auth.oauth_client import DRIVE_SCOPES
from classdrive.config import GrantFailurePolicy, Settings, get_settings
from classdrive.controller import DEFAULT_TIMEOUT_SEC, DriveController
from classdrive.errors import (
    AuthExchangeError,
    ClassDriveError,
    InvalidArgumentError,
    PermissionGrantError,
    RemoteError,
    TokenRefreshError,
)
from classdrive.models import (
    AuthResult,
    DisconnectResult,
    FileBlob,
    FileResult,
    ListResult,
    NormalizedFile,
    SessionContext,
    UploadResult,
)
from classdrive.normalize import normalize
from classdrive.session import TokenStore

logger = logging.getLogger(__name__)

ControllerFactory = Callable[[str], DriveController]

NOT_AUTHENTICATED = "Not authenticated with Google Drive"
NO_FILE = "No file provided"
UPLOAD_FAILED = "Failed to upload file"
SHARE_FAILED = "File was uploaded but could not be shared"
AUTH_FAILED = "Failed to authenticate with Google"
REFRESH_FAILED = "Failed to refresh Google access"
NO_REFRESH_TOKEN = "No refresh token available"


class DriveSyncManager:
    """
    Orchestrates token storage, the Drive controller and normalization.

    Policy:
        - Every operation takes the caller's SessionContext explicitly.
        - No operation raises: failures come back as result objects.
        - An expired/revoked token and a transient failure are reported with
          different statuses, though both leave `authenticated` False.
        - Access tokens are never refreshed implicitly; see refresh_access().
    """

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        redirect_uri: str,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        on_grant_failure: GrantFailurePolicy = "rollback",
        token_store: Optional[TokenStore] = None,
    ) -> None:
        self._oauth = OAuthClient(auth_info)
        self._controller_factory: ControllerFactory = lambda token: DriveController(
            token, timeout_sec=timeout_sec
        )
        self._redirect_uri = redirect_uri
        self._on_grant_failure = on_grant_failure
        self._tokens = token_store or TokenStore()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "DriveSyncManager":
        """
        Build a manager from Settings (environment / .env by default).

        Raises:
            InvalidArgumentError: if the Google client id/secret are missing.
        """
        settings = settings or get_settings()
        if not settings.google_client_id or not settings.google_client_secret:
            raise InvalidArgumentError(
                "GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET must be configured"
            )
        auth_info = AuthInfo(
            kind="oauth",
            data={
                "client_id": settings.google_client_id,
                "client_secret": settings.google_client_secret,
            },
        )
        return cls(
            auth_info,
            redirect_uri=settings.redirect_uri,
            timeout_sec=settings.request_timeout_sec,
            on_grant_failure=settings.on_grant_failure,
        )

    @classmethod
    def from_components(
        cls,
        oauth_client: OAuthClient,
        controller_factory: ControllerFactory,
        *,
        redirect_uri: str,
        on_grant_failure: GrantFailurePolicy = "rollback",
        token_store: Optional[TokenStore] = None,
    ) -> "DriveSyncManager":
        """Create manager with injected collaborators (useful for tests)."""
        obj = cls.__new__(cls)
        obj._oauth = oauth_client
        obj._controller_factory = controller_factory
        obj._redirect_uri = redirect_uri
        obj._on_grant_failure = on_grant_failure
        obj._tokens = token_store or TokenStore()
        return obj

    @property
    def token_store(self) -> TokenStore:
        return self._tokens

    @property
    def redirect_uri(self) -> str:
        return self._redirect_uri

    # ----------------------------
    # Authorization
    # ----------------------------
    def get_authorization_url(self) -> str:
        """Consent URL for full Drive access."""
        return self._oauth.authorization_url(DRIVE_SCOPES, self._redirect_uri)

    def complete_authorization(self, session: SessionContext, code: str) -> AuthResult:
        """Exchange the callback code and store the tokens on success."""
        try:
            tokens = self._oauth.exchange_code(code, self._redirect_uri)
        except AuthExchangeError as exc:
            logger.warning("Authorization code exchange failed: %s", exc)
            return AuthResult(success=False, error=AUTH_FAILED, error_type=type(exc).__name__)
        except ClassDriveError as exc:
            logger.error("Authorization failed: %s", exc)
            return AuthResult(success=False, error=AUTH_FAILED, error_type=type(exc).__name__)

        self._tokens.save(session, tokens.access_token, tokens.refresh_token)
        logger.info(
            "Google Drive authorized (refresh token %s)",
            "received" if tokens.refresh_token else "not received",
        )
        return AuthResult(success=True)

    def refresh_access(self, session: SessionContext) -> AuthResult:
        """
        Exchange the stored refresh token for a new access token.

        Runs only when the caller asks for it.
        """
        refresh_token = self._tokens.read_refresh(session)
        if refresh_token is None:
            return AuthResult(success=False, error=NO_REFRESH_TOKEN)

        try:
            tokens = self._oauth.refresh(refresh_token)
        except TokenRefreshError as exc:
            logger.warning("Token refresh failed: %s", exc)
            return AuthResult(success=False, error=REFRESH_FAILED, error_type=type(exc).__name__)

        self._tokens.save(session, tokens.access_token, tokens.refresh_token)
        return AuthResult(success=True)

    def disconnect(self, session: SessionContext) -> DisconnectResult:
        self._tokens.clear(session)
        return DisconnectResult(success=True)

    # ----------------------------
    # Files
    # ----------------------------
    def list_files(
        self,
        session: SessionContext,
        search_term: Optional[str] = None,
    ) -> ListResult:
        token = self._tokens.read(session)
        if token is None:
            return ListResult(files=[], authenticated=False, status="unauthenticated")

        try:
            records = self._controller_factory(token).list_files(search_term)
        except ClassDriveError as exc:
            status = _downgraded_status(exc)
            logger.info("Listing files downgraded to %s", status)
            return ListResult(files=[], authenticated=False, status=status)

        files = [normalize(record, "listed") for record in records]
        return ListResult(files=files, authenticated=True, status="ok")

    def get_file(self, session: SessionContext, file_id: str) -> FileResult:
        token = self._tokens.read(session)
        if token is None:
            return FileResult(file=None, authenticated=False, status="unauthenticated")

        try:
            record = self._controller_factory(token).get_file(file_id)
        except ClassDriveError as exc:
            status = _downgraded_status(exc)
            logger.info("Fetching file %s downgraded to %s", file_id, status)
            return FileResult(file=None, authenticated=False, status=status)

        if record is None:
            return FileResult(file=None, authenticated=True, status="not_found")
        return FileResult(file=normalize(record, "listed"), authenticated=True, status="ok")

    def upload_file(
        self,
        session: SessionContext,
        blob: Optional[FileBlob],
        class_tag: Optional[str] = None,
    ) -> UploadResult:
        """
        Upload blob, then share it with anyone holding the link.

        If sharing fails, `on_grant_failure` decides: "rollback" deletes the
        new file, "keep_private" keeps it and reports shared=False.
        """
        token = self._tokens.read(session)
        if token is None:
            return UploadResult(success=False, status="unauthenticated", error=NOT_AUTHENTICATED)

        if blob is None or not blob.name:
            return UploadResult(success=False, status="invalid", error=NO_FILE)

        try:
            controller = self._controller_factory(token)
            record = controller.upload_file(blob, class_tag or None)
        except ClassDriveError as exc:
            status = "unauthenticated" if _is_auth_failure(exc) else "failed"
            return UploadResult(
                success=False,
                status=status,
                error=NOT_AUTHENTICATED if status == "unauthenticated" else UPLOAD_FAILED,
                detail=_provider_message(exc),
            )

        uploaded = normalize(record, "uploaded")

        try:
            controller.grant_public_read(uploaded.id)
        except PermissionGrantError as exc:
            return self._handle_grant_failure(controller, uploaded, exc)

        logger.info("Uploaded %s (%s)", uploaded.id, uploaded.category)
        return UploadResult(success=True, status="uploaded", file=uploaded, shared=True)

    def _handle_grant_failure(
        self,
        controller: DriveController,
        uploaded: NormalizedFile,
        exc: PermissionGrantError,
    ) -> UploadResult:
        detail = _provider_message(exc)

        if self._on_grant_failure == "keep_private":
            logger.warning("Uploaded %s but sharing failed; kept private", uploaded.id)
            return UploadResult(
                success=True,
                status="uploaded_private",
                file=uploaded,
                detail=detail,
                shared=False,
            )

        try:
            controller.delete_file(uploaded.id)
        except ClassDriveError:
            logger.error("Sharing and rollback both failed for %s; file left private", uploaded.id)
            return UploadResult(
                success=False,
                status="uploaded_private",
                file=uploaded,
                error=SHARE_FAILED,
                detail=detail,
                shared=False,
            )

        logger.warning("Sharing failed for %s; upload rolled back", uploaded.id)
        return UploadResult(
            success=False,
            status="rolled_back",
            error=UPLOAD_FAILED,
            detail=detail,
        )


def _is_auth_failure(exc: ClassDriveError) -> bool:
    return isinstance(exc, RemoteError) and exc.is_auth_failure


def _downgraded_status(exc: ClassDriveError):
    return "unauthenticated" if _is_auth_failure(exc) else "unavailable"


def _provider_message(exc: ClassDriveError) -> Optional[str]:
    return exc.provider_message if isinstance(exc, RemoteError) else None

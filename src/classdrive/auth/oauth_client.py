"""OAuth client utilities for classdrive."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from classdrive.errors import AuthExchangeError, InvalidArgumentError, TokenRefreshError
from classdrive.models import TokenPair

from .auth_info import AuthInfo

logger = logging.getLogger(__name__)

DRIVE_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)


class OAuthClient:
    """Build consent URLs, exchange authorization codes and refresh tokens."""

    def __init__(self, auth_info: AuthInfo) -> None:
        if auth_info.kind != "oauth":
            raise InvalidArgumentError("OAuthClient requires AuthInfo(kind='oauth')")
        self._auth_info = auth_info
        self._issued_redirect_uris: set[str] = set()

    def authorization_url(self, scopes: Sequence[str], redirect_uri: str) -> str:
        """
        Return the provider consent URL.

        Requests offline access (so a refresh token is issued) and forces the
        consent screen every time.

        Raises:
            InvalidArgumentError: if scopes or redirect_uri are invalid.
        """
        _check_scopes(scopes)
        if not isinstance(redirect_uri, str) or not redirect_uri.strip():
            raise InvalidArgumentError("redirect_uri must be a non-empty string")

        flow = self._flow(scopes, redirect_uri)
        url, _state = flow.authorization_url(access_type="offline", prompt="consent")
        self._issued_redirect_uris.add(redirect_uri)
        logger.debug("Issued consent URL for redirect_uri=%s", redirect_uri)
        return url

    def exchange_code(
        self,
        code: str,
        redirect_uri: str,
        *,
        scopes: Sequence[str] = DRIVE_SCOPES,
    ) -> TokenPair:
        """
        Exchange an authorization code for tokens.

        The redirect URI must be byte-for-byte the one the consent URL was
        built with. When this client issued consent URLs, a mismatch is
        rejected locally; otherwise Google rejects it.

        Raises:
            AuthExchangeError: on mismatch, provider rejection or a response
                without an access token.
        """
        if not isinstance(code, str) or not code:
            raise AuthExchangeError("Authorization code is missing")

        if self._issued_redirect_uris and redirect_uri not in self._issued_redirect_uris:
            raise AuthExchangeError(
                "redirect_uri does not match the one used for authorization",
                details={"redirect_uri": redirect_uri},
            )

        flow = self._flow(scopes, redirect_uri)
        try:
            token = flow.fetch_token(code=code)
        except Exception as exc:
            raise AuthExchangeError(
                "Failed to exchange authorization code",
                details={"redirect_uri": redirect_uri},
                cause=exc,
            ) from exc

        access_token = token.get("access_token") if token else None
        if not isinstance(access_token, str) or not access_token:
            raise AuthExchangeError("No access token received")

        refresh_token = token.get("refresh_token")
        expires_in = token.get("expires_in")
        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token if isinstance(refresh_token, str) else None,
            expires_in=int(expires_in) if isinstance(expires_in, (int, float)) else None,
        )

    def refresh(self, refresh_token: str) -> TokenPair:
        """
        Obtain a new access token from a refresh token.

        Raises:
            TokenRefreshError: when Google rejects the refresh token or the
                request fails.
        """
        if not isinstance(refresh_token, str) or not refresh_token:
            raise TokenRefreshError("Refresh token is missing")

        try:
            from google.auth.transport.requests import Request
            from google.oauth2.credentials import Credentials
        except Exception as exc:  # pragma: no cover
            raise TokenRefreshError(
                "Google auth libraries are not available",
                details={"hint": "Install google-auth"},
                cause=exc,
            ) from exc

        creds = Credentials(
            token=None,
            refresh_token=refresh_token,
            token_uri=self._auth_info.token_uri,
            client_id=self._auth_info.client_id,
            client_secret=self._auth_info.client_secret,
        )
        try:
            creds.refresh(Request())
        except Exception as exc:
            raise TokenRefreshError("Failed to refresh OAuth credentials", cause=exc) from exc

        if not creds.token:
            raise TokenRefreshError("No access token received")

        rotated = creds.refresh_token if creds.refresh_token != refresh_token else None
        return TokenPair(
            access_token=creds.token,
            refresh_token=rotated,
            expires_in=_expires_in(creds.expiry),
        )

    def _flow(self, scopes: Sequence[str], redirect_uri: str):
        try:
            from google_auth_oauthlib.flow import Flow
        except Exception as exc:  # pragma: no cover
            raise AuthExchangeError(
                "google-auth-oauthlib is not available",
                details={"hint": "Install google-auth-oauthlib"},
                cause=exc,
            ) from exc

        # No PKCE: the exchange runs on a fresh Flow, possibly in another process.
        return Flow.from_client_config(
            self._auth_info.client_config(),
            scopes=list(scopes),
            redirect_uri=redirect_uri,
            autogenerate_code_verifier=False,
        )


def _check_scopes(scopes: Sequence[str]) -> None:
    if not scopes or not all(isinstance(s, str) and s.strip() for s in scopes):
        raise InvalidArgumentError("scopes must be a non-empty sequence of strings")


def _expires_in(expiry: Optional[datetime]) -> Optional[int]:
    if expiry is None:
        return None
    # google-auth stores expiry as naive UTC.
    if expiry.tzinfo is None:
        expiry = expiry.replace(tzinfo=timezone.utc)
    return max(0, int((expiry - datetime.now(timezone.utc)).total_seconds()))

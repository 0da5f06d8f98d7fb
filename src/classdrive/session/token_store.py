"""Access/refresh token storage on an explicit SessionContext."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Optional

from classdrive.models import SessionContext
from classdrive.util.time import now_utc

ACCESS_TOKEN_TTL: timedelta = timedelta(hours=1)
REFRESH_TOKEN_TTL: timedelta = timedelta(days=30)


class TokenStore:
    """
    Hold, read and clear the two bearer tokens of a session.

    The store owns no state itself; every call works on the SessionContext it
    is given, so one store can serve any number of sessions.
    """

    def __init__(self, clock: Callable[[], datetime] = now_utc) -> None:
        self._clock = clock

    def save(
        self,
        session: SessionContext,
        access_token: str,
        refresh_token: Optional[str] = None,
    ) -> None:
        """
        Store the access token (1 hour) and, when given, the refresh token
        (30 days). A refresh response carries no refresh token, so the
        existing one is kept in that case.
        """
        now = self._clock()
        session.access_token = access_token
        session.access_expires_at = now + ACCESS_TOKEN_TTL
        if refresh_token:
            session.refresh_token = refresh_token
            session.refresh_expires_at = now + REFRESH_TOKEN_TTL
        session.dirty = True

    def read(self, session: SessionContext) -> Optional[str]:
        """Return the access token, or None when absent or expired."""
        return self._live(session.access_token, session.access_expires_at)

    def read_refresh(self, session: SessionContext) -> Optional[str]:
        return self._live(session.refresh_token, session.refresh_expires_at)

    def clear(self, session: SessionContext) -> None:
        """Remove both tokens. Safe to call on an empty session."""
        session.access_token = None
        session.refresh_token = None
        session.access_expires_at = None
        session.refresh_expires_at = None
        session.dirty = True

    def _live(self, token: object, expires_at: Optional[datetime]) -> Optional[str]:
        if not isinstance(token, str) or not token:
            return None
        if expires_at is not None and expires_at <= self._clock():
            return None
        return token

"""Session state carried between the presentation layer and the façade."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class SessionContext:
    """
    Token pair for one browser session.

    The presentation layer builds it from its own storage (cookies), passes it
    into every façade call and persists it back when `dirty` is set.
    Expiries are None when unknown (e.g. a token read back from a cookie).
    """

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    access_expires_at: Optional[datetime] = None
    refresh_expires_at: Optional[datetime] = None
    dirty: bool = False


@dataclass(slots=True, frozen=True)
class TokenPair:
    """Tokens returned by a code exchange or a refresh."""

    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None

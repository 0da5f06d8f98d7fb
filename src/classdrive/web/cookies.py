"""Cookie persistence of the SessionContext."""

from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional

from fastapi import Response

from classdrive.models import SessionContext
from classdrive.session import ACCESS_TOKEN_TTL, REFRESH_TOKEN_TTL
from classdrive.util.time import now_utc, seconds_until

ACCESS_COOKIE = "access_token"
REFRESH_COOKIE = "refresh_token"


def _cookie_value(cookies: Mapping[str, str], name: str) -> Optional[str]:
    try:
        value = cookies.get(name)
    except Exception:
        return None
    if not isinstance(value, str) or not value.strip():
        return None
    return value


def session_from_cookies(cookies: Mapping[str, str]) -> SessionContext:
    """
    Build a SessionContext from request cookies.

    Expiry is enforced by the browser, so expiries stay unknown here.
    Unreadable cookies count as absent.
    """
    return SessionContext(
        access_token=_cookie_value(cookies, ACCESS_COOKIE),
        refresh_token=_cookie_value(cookies, REFRESH_COOKIE),
    )


def write_session_cookies(
    response: Response,
    session: SessionContext,
    *,
    secure: bool,
    now: Optional[datetime] = None,
) -> None:
    """Persist a dirty session onto the response; no-op otherwise."""
    if not session.dirty:
        return
    now = now or now_utc()

    _write_one(
        response,
        ACCESS_COOKIE,
        session.access_token,
        session.access_expires_at,
        int(ACCESS_TOKEN_TTL.total_seconds()),
        secure=secure,
        now=now,
    )
    _write_one(
        response,
        REFRESH_COOKIE,
        session.refresh_token,
        session.refresh_expires_at,
        int(REFRESH_TOKEN_TTL.total_seconds()),
        secure=secure,
        now=now,
    )


def _write_one(
    response: Response,
    name: str,
    value: Optional[str],
    expires_at: Optional[datetime],
    default_max_age: int,
    *,
    secure: bool,
    now: datetime,
) -> None:
    if not value:
        response.delete_cookie(name, path="/", secure=secure, httponly=True, samesite="lax")
        return
    # Unknown expiry means the token came from the request; leave the cookie alone.
    if expires_at is None:
        return
    response.set_cookie(
        key=name,
        value=value,
        max_age=min(default_max_age, seconds_until(expires_at, now)),
        path="/",
        httponly=True,
        secure=secure,
        samesite="lax",
    )

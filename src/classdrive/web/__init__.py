"""HTTP surface for classdrive."""

from __future__ import annotations

from .app import create_app
from .cookies import ACCESS_COOKIE, REFRESH_COOKIE, session_from_cookies, write_session_cookies

__all__ = [
    "create_app",
    "ACCESS_COOKIE",
    "REFRESH_COOKIE",
    "session_from_cookies",
    "write_session_cookies",
]

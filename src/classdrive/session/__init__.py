"""Public session exports for classdrive."""

from __future__ import annotations

from .token_store import ACCESS_TOKEN_TTL, REFRESH_TOKEN_TTL, TokenStore

__all__ = ["TokenStore", "ACCESS_TOKEN_TTL", "REFRESH_TOKEN_TTL"]

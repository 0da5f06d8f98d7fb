"""Authentication information for classdrive (OAuth web client)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

GOOGLE_AUTH_URI: str = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI: str = "https://oauth2.googleapis.com/token"


@dataclass(slots=True, frozen=True)
class AuthInfo:
    """
    Authentication information.

    Only OAuth web clients are supported:
        kind = "oauth"
        data must include:
            - client_id
            - client_secret
        data may include:
            - auth_uri
            - token_uri
    """

    kind: str
    data: dict[str, Any]

    def __post_init__(self) -> None:
        if self.kind != "oauth":
            raise ValueError("AuthInfo.kind must be 'oauth'")

        if not isinstance(self.data, dict):
            raise TypeError("AuthInfo.data must be a dict")

        for key in ("client_id", "client_secret"):
            value = self.data.get(key)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"AuthInfo.data['{key}'] must be a non-empty string")

    @property
    def client_id(self) -> str:
        return str(self.data["client_id"])

    @property
    def client_secret(self) -> str:
        return str(self.data["client_secret"])

    @property
    def auth_uri(self) -> str:
        return str(self.data.get("auth_uri") or GOOGLE_AUTH_URI)

    @property
    def token_uri(self) -> str:
        return str(self.data.get("token_uri") or GOOGLE_TOKEN_URI)

    def client_config(self) -> dict[str, Any]:
        """Client config in the shape of a downloaded client_secrets.json."""
        return {
            "web": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "auth_uri": self.auth_uri,
                "token_uri": self.token_uri,
            }
        }

"""Runtime configuration for classdrive."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings

GrantFailurePolicy = Literal["rollback", "keep_private"]


class Settings(BaseSettings):
    app_name: str = "ClassDrive"
    environment: str = "development"
    log_level: str = "INFO"

    # Google OAuth (web client)
    google_client_id: str | None = None
    google_client_secret: str | None = None

    # The redirect URI registered with Google is redirect_base_url + redirect_suffix
    redirect_base_url: str = "http://localhost:3000/api/auth/callback"
    redirect_suffix: str = "/google"

    # Where the callback sends the browser afterwards
    files_view_path: str = "/files"

    # Drive calls
    request_timeout_sec: float = 30.0
    on_grant_failure: GrantFailurePolicy = "rollback"

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def redirect_uri(self) -> str:
        return self.redirect_base_url + self.redirect_suffix

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()

from fastapi import Request

from classdrive.config import Settings
from classdrive.manager import DriveSyncManager
from classdrive.models import SessionContext

from .cookies import session_from_cookies


def get_manager(request: Request) -> DriveSyncManager:
    return request.app.state.manager


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_context(request: Request) -> SessionContext:
    """Session for this request, read from its cookies."""
    return session_from_cookies(request.cookies)

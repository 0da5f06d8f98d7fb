import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse

from classdrive.config import Settings
from classdrive.manager import DriveSyncManager
from classdrive.models import SessionContext

from .cookies import write_session_cookies
from .deps import get_app_settings, get_manager, get_session_context

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.get("/google")
def login(manager: DriveSyncManager = Depends(get_manager)):
    """Redirect to the Google consent screen."""
    return RedirectResponse(url=manager.get_authorization_url(), status_code=307)


@router.get("/callback/google")
def callback(
    code: str | None = None,
    session: SessionContext = Depends(get_session_context),
    manager: DriveSyncManager = Depends(get_manager),
    settings: Settings = Depends(get_app_settings),
):
    """Handle the Google OAuth redirect."""
    if not code:
        return PlainTextResponse("No code provided", status_code=400)

    result = manager.complete_authorization(session, code)
    if not result.success:
        logger.warning("OAuth callback failed (%s)", result.error_type)
        return RedirectResponse(
            url=f"{settings.files_view_path}?error=auth_failed",
            status_code=307,
        )

    redirect = RedirectResponse(url=settings.files_view_path, status_code=307)
    write_session_cookies(redirect, session, secure=settings.is_production)
    return redirect


@router.post("/refresh")
def refresh(
    session: SessionContext = Depends(get_session_context),
    manager: DriveSyncManager = Depends(get_manager),
    settings: Settings = Depends(get_app_settings),
) -> Any:
    """Explicitly trade the refresh token for a new access token."""
    result = manager.refresh_access(session)
    response = JSONResponse(result.to_dict())
    write_session_cookies(response, session, secure=settings.is_production)
    return response


@router.post("/logout")
def logout(
    session: SessionContext = Depends(get_session_context),
    manager: DriveSyncManager = Depends(get_manager),
    settings: Settings = Depends(get_app_settings),
) -> Any:
    """Forget both Google tokens."""
    result = manager.disconnect(session)
    response = JSONResponse(result.to_dict())
    write_session_cookies(response, session, secure=settings.is_production)
    return response

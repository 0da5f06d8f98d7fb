import logging
from typing import Any, Optional

from fastapi import FastAPI

from classdrive.config import Settings, get_settings
from classdrive.manager import DriveSyncManager

from .auth import router as auth_router
from .files import router as files_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    manager: Optional[DriveSyncManager] = None,
) -> FastAPI:
    """Build the HTTP surface around one DriveSyncManager."""
    settings = settings or get_settings()
    logging.getLogger("classdrive").setLevel(settings.log_level.upper())

    app = FastAPI(
        title=settings.app_name,
        description="Google Drive files for the class portal",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.manager = manager or DriveSyncManager.from_settings(settings)

    app.include_router(auth_router, prefix="/api")
    app.include_router(files_router, prefix="/api")

    @app.get("/health")
    def health_check() -> dict[str, Any]:
        return {"status": "healthy", "environment": settings.environment}

    logger.info("%s ready (redirect_uri=%s)", settings.app_name, app.state.manager.redirect_uri)
    return app

"""Drive controller exports for classdrive."""

from __future__ import annotations

from .drive_controller import DEFAULT_TIMEOUT_SEC, DriveController, build_list_query

__all__ = ["DriveController", "DEFAULT_TIMEOUT_SEC", "build_list_query"]

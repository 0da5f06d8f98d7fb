import logging
from typing import Any

from fastapi import APIRouter, Depends, File, Form, UploadFile

from classdrive.manager import DriveSyncManager
from classdrive.models import FileBlob, NormalizedFile, SessionContext
from classdrive.normalize import categories_of, download_url, filter_files
from classdrive.util.mime import DEFAULT_MIME

from .deps import get_manager, get_session_context

router = APIRouter(prefix="/files", tags=["files"])
logger = logging.getLogger(__name__)


@router.get("")
def list_files(
    search: str | None = None,
    q: str | None = None,
    category: str | None = None,
    session: SessionContext = Depends(get_session_context),
    manager: DriveSyncManager = Depends(get_manager),
) -> dict[str, Any]:
    """
    List Drive files.

    `search` goes to Drive as a name filter; `q` and `category` narrow the
    normalized rows the way the dashboard does.
    """
    result = manager.list_files(session, search or None)

    payload = result.to_dict()
    payload["files"] = [
        _file_row(f) for f in filter_files(result.files, term=q, category=category)
    ]
    payload["categories"] = categories_of(result.files)
    return payload


def _file_row(f: NormalizedFile) -> dict[str, Any]:
    row = f.to_dict()
    row["downloadUrl"] = download_url(f.id) if f.id else None
    return row


@router.get("/{file_id}")
def get_file(
    file_id: str,
    session: SessionContext = Depends(get_session_context),
    manager: DriveSyncManager = Depends(get_manager),
) -> dict[str, Any]:
    return manager.get_file(session, file_id).to_dict()


@router.post("")
def upload_file(
    file: UploadFile | None = File(default=None),
    for_class: str | None = Form(default=None, alias="forClass"),
    session: SessionContext = Depends(get_session_context),
    manager: DriveSyncManager = Depends(get_manager),
) -> dict[str, Any]:
    """Upload one file, optionally tagged with a grade."""
    blob = None
    if file is not None and file.filename:
        blob = FileBlob(
            name=file.filename,
            mime_type=file.content_type or DEFAULT_MIME,
            data=file.file.read(),
        )

    result = manager.upload_file(session, blob, for_class or None)
    if not result.success:
        logger.info("Upload finished with status %s", result.status)
    return result.to_dict()

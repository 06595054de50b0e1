"""
Filesystem helpers - directory creation and attachment downloads.
"""
import os
from pathlib import Path
from typing import Union
from fastapi import status
from starlette.responses import FileResponse, PlainTextResponse, Response

from ..core.logging_config import get_logger

logger = get_logger(__name__)

PathLike = Union[str, os.PathLike]


def ensure_directory(path: PathLike) -> None:
    """
    Create a directory, and any missing parents, if nothing exists at path.

    Raises:
        OSError: If the directory cannot be created
    """
    directory = Path(path)
    if not directory.exists():
        directory.mkdir(mode=0o777, parents=True, exist_ok=True)
        logger.debug(f"Created directory: {directory}")


def serve_as_attachment(path: PathLike, display_name: str) -> Response:
    """
    Send a file so the browser downloads it as display_name.

    Returns a 404 plain-text response carrying the OS error when the file
    does not exist. Range and conditional requests are handled by FileResponse.
    """
    try:
        os.stat(path)
    except (FileNotFoundError, NotADirectoryError) as e:
        logger.debug(f"Attachment not found: {path}")
        return PlainTextResponse(str(e), status_code=status.HTTP_404_NOT_FOUND)

    # FileResponse falls back to an RFC 5987 filename* for non-ASCII names
    return FileResponse(path, filename=display_name, content_disposition_type="attachment")

"""
Upload Service - validates and persists multipart file uploads.

The upload workflow for one request:
1. Ensure the target directory exists
2. Parse the multipart body, bounded by the configured size limit
3. For every file part, in arrival order:
   - sniff the content type from its first 512 bytes
   - check it against the allow-list
   - rewind, pick the output name and copy the part to disk
4. Stop at the first failing file; files written before it stay on disk

Example Usage:
    files = await upload_files(request, "uploads", rename=True,
                               max_file_size=MAX, allowed_file_types=TYPES)
"""
import asyncio
import shutil
from pathlib import Path
from typing import AsyncIterator, List, Optional, Sequence, Tuple

from starlette.datastructures import FormData, UploadFile
from starlette.formparsers import MultiPartException, MultiPartParser
from starlette.requests import Request

from ..api.dto import UploadedFile
from ..api.exceptions import (
    FileTypeNotPermittedError,
    NoFileUploadedError,
    UploadError,
    UploadPersistError,
    UploadTooLargeError,
)
from ..core.config import RENAMED_FILE_LENGTH, SNIFF_LENGTH
from ..core.logging_config import get_logger
from ..utils.filesystem import PathLike, ensure_directory
from ..utils.mime_sniff import detect_content_type
from ..utils.text import random_string

logger = get_logger(__name__)


def check_file_type(file_type: str, allowed_file_types: Sequence[str]) -> bool:
    """Case-insensitive exact match of file_type against the allow-list."""
    wanted = file_type.casefold()
    return any(wanted == allowed.casefold() for allowed in allowed_file_types)


def file_extension(filename: str) -> str:
    """
    Extension of the final path element, from its last dot.

    Dotfiles count as all extension: ".env" gives ".env".
    """
    name = Path(filename).name
    dot = name.rfind(".")
    return name[dot:] if dot != -1 else ""


def new_file_name(filename: str, rename: bool) -> str:
    """
    Name an upload is saved under.

    A renamed file keeps only the original extension.
    """
    if rename:
        return f"{random_string(RENAMED_FILE_LENGTH)}{file_extension(filename)}"
    return filename


async def _limited_stream(request: Request, max_size: int) -> AsyncIterator[bytes]:
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > max_size:
            raise MultiPartException(f"request body exceeds {max_size} bytes")
        yield chunk


async def parse_multipart(request: Request, max_size: int) -> FormData:
    """
    Parse the request body as multipart form data.

    Raises:
        UploadTooLargeError: For any parse failure, whatever its cause
    """
    parser = MultiPartParser(request.headers, _limited_stream(request, max_size))
    try:
        return await parser.parse()
    except Exception as e:
        logger.warning(f"Could not parse multipart body: {e}")
        raise UploadTooLargeError("the uploaded file is too big") from e


async def handle_file(
    upload: UploadFile,
    upload_dir: PathLike,
    rename: bool,
    allowed_file_types: Sequence[str]
) -> UploadedFile:
    """
    Validate one uploaded part and write it to upload_dir.

    Raises:
        FileTypeNotPermittedError: If the sniffed type is not allowed
        UploadPersistError: If the part cannot be read or written
    """
    try:
        head = await upload.read(SNIFF_LENGTH)
    except OSError as e:
        raise UploadPersistError(f"could not read uploaded file: {e}") from e

    file_type = detect_content_type(head)
    if not check_file_type(file_type, allowed_file_types):
        logger.warning(f"Rejected upload {upload.filename!r}: type {file_type} not permitted")
        raise FileTypeNotPermittedError("file type not permitted")

    try:
        await upload.seek(0)
    except OSError as e:
        raise UploadPersistError(f"could not rewind uploaded file: {e}") from e

    original_file_name = Path(upload.filename or "").name
    file_name = new_file_name(original_file_name, rename)
    destination = Path(upload_dir) / file_name

    def _save() -> int:
        with open(destination, "wb") as outfile:
            try:
                shutil.copyfileobj(upload.file, outfile)
            except OSError:
                outfile.close()
                destination.unlink(missing_ok=True)
                raise
            return outfile.tell()

    # Run in executor to avoid blocking
    loop = asyncio.get_event_loop()
    try:
        file_size = await loop.run_in_executor(None, _save)
    except OSError as e:
        raise UploadPersistError(f"could not save {file_name}: {e}") from e

    logger.debug(f"Saved {original_file_name!r} as {destination} ({file_size} bytes, {file_type})")
    return UploadedFile(
        original_file_name=original_file_name,
        new_file_name=file_name,
        file_size=file_size,
    )


async def collect_uploads(
    files: Sequence[UploadFile],
    upload_dir: PathLike,
    rename: bool,
    allowed_file_types: Sequence[str]
) -> Tuple[List[UploadedFile], Optional[UploadError]]:
    """
    Persist files in order, stopping at the first failure.

    Returns the files written so far and the error that stopped the batch,
    or None when every file was written.
    """
    uploaded: List[UploadedFile] = []
    for upload in files:
        try:
            uploaded.append(await handle_file(upload, upload_dir, rename, allowed_file_types))
        except UploadError as e:
            return uploaded, e
    return uploaded, None


async def upload_files(
    request: Request,
    upload_dir: PathLike,
    rename: bool,
    max_file_size: int,
    allowed_file_types: Sequence[str]
) -> List[UploadedFile]:
    """
    Save every file of a multipart request into upload_dir.

    Raises:
        OSError: If upload_dir cannot be created
        UploadError: On the first failing file; uploaded_files lists the
            files already written
    """
    ensure_directory(upload_dir)

    form = await parse_multipart(request, max_file_size)
    try:
        files = [value for _, value in form.multi_items() if isinstance(value, UploadFile)]
        uploaded, error = await collect_uploads(files, upload_dir, rename, allowed_file_types)
    finally:
        await form.close()

    if error is not None:
        error.uploaded_files = uploaded
        raise error

    logger.info(f"Uploaded {len(uploaded)} file(s) to {upload_dir}")
    return uploaded


async def upload_file(
    request: Request,
    upload_dir: PathLike,
    rename: bool,
    max_file_size: int,
    allowed_file_types: Sequence[str]
) -> UploadedFile:
    """Save a single uploaded file; the first file of the request wins."""
    uploaded = await upload_files(request, upload_dir, rename, max_file_size, allowed_file_types)
    if not uploaded:
        raise NoFileUploadedError("no file was uploaded")
    return uploaded[0]

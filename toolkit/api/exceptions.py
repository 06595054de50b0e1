"""
Custom exceptions for the toolkit.
Separates library errors from HTTP exceptions.
"""
from typing import List, Optional
from fastapi import HTTPException, status


class ToolkitError(Exception):
    """Base class for every error raised by the toolkit."""
    pass


class SlugifyError(ToolkitError, ValueError):
    """Raised when a string cannot be turned into a slug."""
    pass

class EmptyInputError(SlugifyError):
    """Raised when the input to slugify is blank."""
    pass

class EmptySlugError(SlugifyError):
    """Raised when nothing alphanumeric is left after slugifying."""
    pass


class UploadError(ToolkitError):
    """
    Raised when an upload batch fails.

    Files persisted before the failure stay on disk and are listed in
    uploaded_files.
    """

    def __init__(self, message: str, uploaded_files: Optional[List] = None):
        super().__init__(message)
        self.uploaded_files = list(uploaded_files or [])

class UploadTooLargeError(UploadError):
    """Raised when the multipart body cannot be parsed within the size limit."""
    pass

class FileTypeNotPermittedError(UploadError):
    """Raised when a sniffed content type is not in the allow-list."""
    pass

class NoFileUploadedError(UploadError):
    """Raised when a single-file upload carries no file."""
    pass

class UploadPersistError(UploadError):
    """Raised when an uploaded file cannot be read or written to disk."""
    pass


class JSONBodyError(ToolkitError):
    """Base class for request bodies that could not be decoded."""
    pass

class MalformedJSONError(JSONBodyError):
    pass

class IncorrectJSONTypeError(JSONBodyError):
    pass

class InvalidJSONTargetError(JSONBodyError):
    """Raised when the decode target is not something pydantic can validate."""
    pass

class TruncatedJSONError(JSONBodyError):
    pass

class EmptyBodyError(JSONBodyError):
    pass

class UnknownFieldError(JSONBodyError):
    pass

class MissingFieldError(JSONBodyError):
    pass

class BodyTooLargeError(JSONBodyError):
    pass

class MultipleJSONValuesError(JSONBodyError):
    pass


class JSONEncodeError(ToolkitError):
    """Raised when a payload cannot be serialized to JSON."""
    pass


class RemotePostError(ToolkitError):
    """Raised when posting JSON to a remote service fails."""

    status_code = status.HTTP_400_BAD_REQUEST


def handle_toolkit_exception(e: Exception) -> HTTPException:
    """
    Convert toolkit exceptions to HTTP exceptions.
    This keeps the helpers clean of HTTP concerns.
    """
    if isinstance(e, (UploadTooLargeError, BodyTooLargeError)):
        return HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=str(e))
    elif isinstance(e, FileTypeNotPermittedError):
        return HTTPException(status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, detail=str(e))
    elif isinstance(e, InvalidJSONTargetError):
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    elif isinstance(e, (JSONBodyError, SlugifyError, NoFileUploadedError, RemotePostError)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    else:
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

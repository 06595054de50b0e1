"""
Helpers for web backends: directories, downloads, random strings, slugs,
file uploads and JSON requests/responses.
"""
from .api.dto import JSONEnvelope, UploadedFile
from .api.exceptions import (
    BodyTooLargeError,
    EmptyBodyError,
    EmptyInputError,
    EmptySlugError,
    FileTypeNotPermittedError,
    IncorrectJSONTypeError,
    InvalidJSONTargetError,
    JSONBodyError,
    JSONEncodeError,
    MalformedJSONError,
    MissingFieldError,
    MultipleJSONValuesError,
    NoFileUploadedError,
    RemotePostError,
    SlugifyError,
    ToolkitError,
    TruncatedJSONError,
    UnknownFieldError,
    UploadError,
    UploadPersistError,
    UploadTooLargeError,
    handle_toolkit_exception,
)
from .core.logging_config import get_logger, setup_logging
from .services import error_json, new_file_name, post_json, write_json
from .tools import Tools
from .utils import detect_content_type, ensure_directory, random_string, serve_as_attachment, slugify

__version__ = "2.0.0"

__all__ = [
    "BodyTooLargeError",
    "EmptyBodyError",
    "EmptyInputError",
    "EmptySlugError",
    "FileTypeNotPermittedError",
    "IncorrectJSONTypeError",
    "InvalidJSONTargetError",
    "JSONBodyError",
    "JSONEncodeError",
    "JSONEnvelope",
    "MalformedJSONError",
    "MissingFieldError",
    "MultipleJSONValuesError",
    "NoFileUploadedError",
    "RemotePostError",
    "SlugifyError",
    "ToolkitError",
    "Tools",
    "TruncatedJSONError",
    "UnknownFieldError",
    "UploadError",
    "UploadPersistError",
    "UploadTooLargeError",
    "UploadedFile",
    "detect_content_type",
    "ensure_directory",
    "get_logger",
    "error_json",
    "handle_toolkit_exception",
    "new_file_name",
    "post_json",
    "random_string",
    "serve_as_attachment",
    "setup_logging",
    "slugify",
    "write_json",
]

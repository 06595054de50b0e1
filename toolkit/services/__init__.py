"""
Services - request-level operations built on the utilities.
"""
from .json_service import error_json, read_json, write_json
from .remote import post_json
from .upload_service import check_file_type, new_file_name, upload_file, upload_files

__all__ = [
    "check_file_type",
    "error_json",
    "new_file_name",
    "post_json",
    "read_json",
    "upload_file",
    "upload_files",
    "write_json",
]

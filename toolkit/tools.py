"""
Tools - configuration record and the operations that depend on it.
"""
from dataclasses import dataclass, field
from typing import List, Type, TypeVar

from starlette.datastructures import UploadFile
from starlette.requests import Request

from .api.dto import UploadedFile
from .core import config
from .services import json_service, upload_service
from .utils.filesystem import PathLike

T = TypeVar("T")


@dataclass
class Tools:
    """
    Upload and JSON limits shared by the request helpers.

    Zero values are replaced by the defaults when the instance is created,
    so an instance can be shared between concurrent requests.
    """
    max_file_size: int = 0
    allowed_file_types: List[str] = field(default_factory=list)
    max_json_size: int = 0
    allow_unknown_fields: bool = False

    def __post_init__(self):
        if not self.max_file_size:
            self.max_file_size = config.DEFAULT_MAX_FILE_SIZE
        if not self.allowed_file_types:
            self.allowed_file_types = list(config.DEFAULT_ALLOWED_FILE_TYPES)
        if not self.max_json_size:
            self.max_json_size = config.DEFAULT_MAX_JSON_SIZE

    @classmethod
    def from_env(cls) -> "Tools":
        """Build a Tools instance from the TOOLKIT_* environment settings."""
        return cls(
            max_file_size=config.MAX_FILE_SIZE,
            allowed_file_types=list(config.ALLOWED_FILE_TYPES),
            max_json_size=config.MAX_JSON_SIZE,
            allow_unknown_fields=config.ALLOW_UNKNOWN_FIELDS,
        )

    def check_file_type(self, file_type: str) -> bool:
        """Check if a file type is allowed."""
        return upload_service.check_file_type(file_type, self.allowed_file_types)

    async def handle_file(self, upload: UploadFile, upload_dir: PathLike, rename: bool = True) -> UploadedFile:
        return await upload_service.handle_file(upload, upload_dir, rename, self.allowed_file_types)

    async def upload_files(self, request: Request, upload_dir: PathLike, rename: bool = True) -> List[UploadedFile]:
        """
        Upload one or more files to upload_dir.

        Files get a random name unless rename is False.
        """
        return await upload_service.upload_files(
            request, upload_dir, rename, self.max_file_size, self.allowed_file_types
        )

    async def upload_file(self, request: Request, upload_dir: PathLike, rename: bool = True) -> UploadedFile:
        """Upload exactly one file to upload_dir."""
        return await upload_service.upload_file(
            request, upload_dir, rename, self.max_file_size, self.allowed_file_types
        )

    async def read_json(self, request: Request, target: Type[T]) -> T:
        """Decode the request's JSON body into target."""
        return await json_service.read_json(
            request, target, self.max_json_size, self.allow_unknown_fields
        )

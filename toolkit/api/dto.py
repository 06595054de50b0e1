"""
Data Transfer Objects (DTOs) returned by the toolkit.
"""
from pydantic import BaseModel, ConfigDict
from typing import Any, Dict


class UploadedFile(BaseModel):
    """Information about one file written to disk by an upload."""
    model_config = ConfigDict(frozen=True)

    original_file_name: str
    new_file_name: str
    file_size: int


class JSONEnvelope(BaseModel):
    """Fixed-shape wrapper for JSON responses."""
    error: bool = False
    message: str = ""
    data: Any = None

    def to_payload(self) -> Dict[str, Any]:
        """Wire form of the envelope; data is left out when unset."""
        payload: Dict[str, Any] = {"error": self.error, "message": self.message}
        if self.data is not None:
            payload["data"] = self.data
        return payload

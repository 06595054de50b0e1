from pathlib import Path
from typing import List, Optional

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from pydantic import BaseModel

from toolkit import Tools, ToolkitError, UploadError, error_json, serve_as_attachment, write_json

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"\x00" * 64
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + b"\x01" * 64
GIF_BYTES = b"GIF89a" + b"\x01\x00\x01\x00" + b"\x00" * 64
PDF_BYTES = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj\n<< /Type /Catalog >>\nendobj\n"
TEXT_BYTES = b"just a plain text file\n"


class Address(BaseModel):
    city: str


class Person(BaseModel):
    name: str
    address: Optional[Address] = None


class NotAModel:
    pass


def build_app(tools: Tools, upload_dir: Path, files_dir: Optional[Path] = None) -> FastAPI:
    """Small application wiring the helpers the way a backend would."""
    app = FastAPI()

    @app.post("/upload")
    async def upload(request: Request, rename: bool = True):
        try:
            files = await tools.upload_files(request, upload_dir, rename)
        except UploadError as e:
            return write_json(400, {
                "error": True,
                "message": str(e),
                "data": [f.model_dump() for f in e.uploaded_files],
            })
        return write_json(200, {"error": False, "message": "uploaded", "data": [f.model_dump() for f in files]})

    @app.post("/upload-one")
    async def upload_one(request: Request, rename: bool = True):
        try:
            uploaded = await tools.upload_file(request, upload_dir, rename)
        except UploadError as e:
            return error_json(e)
        return write_json(200, uploaded)

    @app.post("/person")
    async def person(request: Request):
        try:
            body = await tools.read_json(request, Person)
        except ToolkitError as e:
            return error_json(e)
        return write_json(200, body)

    @app.post("/numbers")
    async def numbers(request: Request):
        try:
            body = await tools.read_json(request, List[int])
        except ToolkitError as e:
            return error_json(e)
        return write_json(200, {"total": sum(body)})

    @app.post("/broken-target")
    async def broken_target(request: Request):
        try:
            await tools.read_json(request, NotAModel)
        except ToolkitError as e:
            return error_json(e, 500)
        return write_json(200, {})

    @app.get("/download/{name}")
    async def download(name: str):
        return serve_as_attachment((files_dir or upload_dir) / name, f"display-{name}")

    return app


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "nested" / "uploads"


@pytest.fixture
def make_client(upload_dir):
    def _make(tools: Optional[Tools] = None, files_dir: Optional[Path] = None) -> TestClient:
        return TestClient(build_app(tools or Tools(), upload_dir, files_dir))
    return _make


@pytest.fixture
def client(make_client):
    return make_client()

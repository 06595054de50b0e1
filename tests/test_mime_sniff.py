import pytest

from toolkit import detect_content_type
from tests.conftest import GIF_BYTES, JPEG_BYTES, PDF_BYTES, PNG_BYTES, TEXT_BYTES


@pytest.mark.parametrize("data, expected", [
    (PNG_BYTES, "image/png"),
    (JPEG_BYTES, "image/jpeg"),
    (GIF_BYTES, "image/gif"),
    (b"GIF87a" + b"\x00" * 8, "image/gif"),
    (PDF_BYTES, "application/pdf"),
    (b"BM" + b"\x00" * 20, "image/bmp"),
    (b"RIFF\x00\x00\x00\x00WEBPVP8 ", "image/webp"),
    (b"RIFF\x00\x00\x00\x00WAVEfmt ", "audio/wave"),
    (b"PK\x03\x04" + b"\x00" * 20, "application/zip"),
    (b"\x1f\x8b\x08\x00" + b"\x00" * 8, "application/x-gzip"),
    (b"\x00\x00\x00\x18ftypmp42\x00\x00\x00\x00mp42isom", "video/mp4"),
    (b"  <!DOCTYPE html><html></html>", "text/html; charset=utf-8"),
    (b"<html>", "text/html; charset=utf-8"),
    (b"<?xml version='1.0'?><a/>", "text/xml; charset=utf-8"),
    (b"\xef\xbb\xbfhello", "text/plain; charset=utf-8"),
    (TEXT_BYTES, "text/plain; charset=utf-8"),
    (b"", "text/plain; charset=utf-8"),
    (b"\x00\x01\x02\x03binary", "application/octet-stream"),
])
def test_detect_content_type(data, expected):
    assert detect_content_type(data) == expected


def test_html_signature_needs_terminator():
    assert detect_content_type(b"<bodyguard") == "text/plain; charset=utf-8"


def test_only_leading_bytes_are_inspected():
    data = b"a" * 512 + b"\x00"
    assert detect_content_type(data) == "text/plain; charset=utf-8"

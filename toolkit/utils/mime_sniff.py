"""
Content type sniffing from the leading bytes of a file.

Follows the signature tables of the WHATWG MIME Sniffing standard for the
types a web backend commonly receives.
"""
from typing import Callable, List, Optional, Tuple

from ..core.config import SNIFF_LENGTH

TEXT_PLAIN = "text/plain; charset=utf-8"
OCTET_STREAM = "application/octet-stream"

_WHITESPACE = b"\t\n\x0c\r "

# Markup signatures, matched case-insensitively after leading whitespace and
# followed by a tag-terminating byte
_HTML_SIGNATURES = [
    b"<!DOCTYPE HTML", b"<HTML", b"<HEAD", b"<SCRIPT", b"<IFRAME", b"<H1",
    b"<DIV", b"<FONT", b"<TABLE", b"<A", b"<STYLE", b"<TITLE", b"<B",
    b"<BODY", b"<BR", b"<P", b"<!--",
]

# (prefix, content type), matched exactly at offset 0
_EXACT_SIGNATURES: List[Tuple[bytes, str]] = [
    (b"%PDF-", "application/pdf"),
    (b"%!PS-Adobe-", "application/postscript"),
    (b"\xfe\xff", "text/plain; charset=utf-16be"),
    (b"\xff\xfe", "text/plain; charset=utf-16le"),
    (b"\xef\xbb\xbf", TEXT_PLAIN),
    (b"\x00\x00\x01\x00", "image/x-icon"),
    (b"\x00\x00\x02\x00", "image/x-icon"),
    (b"BM", "image/bmp"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"OggS\x00", "application/ogg"),
    (b"MThd\x00\x00\x00\x06", "audio/midi"),
    (b"ID3", "audio/mpeg"),
    (b"\x1a\x45\xdf\xa3", "video/webm"),
    (b"\x1f\x8b\x08", "application/x-gzip"),
    (b"PK\x03\x04", "application/zip"),
    (b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    (b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    (b"\x00asm", "application/wasm"),
]


def _sniff_markup(data: bytes) -> Optional[str]:
    stripped = data.lstrip(_WHITESPACE)
    if stripped.startswith(b"<?xml"):
        return "text/xml; charset=utf-8"

    upper = stripped.upper()
    for signature in _HTML_SIGNATURES:
        if not upper.startswith(signature):
            continue
        terminator = stripped[len(signature):len(signature) + 1]
        if terminator in (b" ", b">"):
            return "text/html; charset=utf-8"
    return None


def _sniff_riff(data: bytes) -> Optional[str]:
    if len(data) < 12 or not data.startswith(b"RIFF"):
        return None
    if data[8:14] == b"WEBPVP":
        return "image/webp"
    if data[8:12] == b"WAVE":
        return "audio/wave"
    if data[8:12] == b"AVI ":
        return "video/avi"
    return None


def _sniff_mp4(data: bytes) -> Optional[str]:
    if len(data) < 12:
        return None
    box_size = int.from_bytes(data[:4], "big")
    if box_size % 4 != 0 or len(data) < box_size:
        return None
    if data[4:8] != b"ftyp":
        return None
    for start in range(8, box_size, 4):
        if start == 12:
            # Bytes 12-15 hold the minor version
            continue
        if data[start:start + 3] == b"mp4":
            return "video/mp4"
    return None


def _is_binary(data: bytes) -> bool:
    return any(
        b <= 0x08 or b == 0x0B or 0x0E <= b <= 0x1A or 0x1C <= b <= 0x1F
        for b in data
    )


def _sniff_exact(data: bytes) -> Optional[str]:
    for prefix, content_type in _EXACT_SIGNATURES:
        if data.startswith(prefix):
            return content_type
    return None


_SNIFFERS: List[Callable[[bytes], Optional[str]]] = [
    _sniff_markup,
    _sniff_exact,
    _sniff_riff,
    _sniff_mp4,
]


def detect_content_type(data: bytes) -> str:
    """
    Determine the MIME type of data from at most its first SNIFF_LENGTH bytes.

    Always returns a valid MIME type: text/plain when no binary bytes are
    present and application/octet-stream when nothing else matches.
    """
    data = data[:SNIFF_LENGTH]

    for sniff in _SNIFFERS:
        content_type = sniff(data)
        if content_type:
            return content_type

    return OCTET_STREAM if _is_binary(data) else TEXT_PLAIN

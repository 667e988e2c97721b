"""
=============================================================================
MIME TYPE DETECTION
=============================================================================

Two ways of deciding what a response body is:

    1. BY NAME     - the file extension ("logo.png" → image/png)
    2. BY CONTENT  - the leading bytes ("\\x89PNG\\r\\n\\x1a\\n..." → image/png)

Responses built from raw bytes only have the content to go on. Responses
built from a file have both: a known extension wins, the bytes are the
fallback when the name says nothing useful ("README", "data.bin").

=============================================================================
CONTENT SNIFFING ORDER
=============================================================================

    ┌────────────────────────────────────────────────────────────────────┐
    │  empty?            → application/x-zerosize                        │
    │  magic signature?  → the signature's type (PNG, PDF, ZIP, ...)     │
    │  looks like markup → text/html, image/svg+xml, application/xml     │
    │  decodes as text?  → text/plain                                    │
    │  otherwise         → application/octet-stream                      │
    └────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from pathlib import Path
from typing import Optional, Union


# =============================================================================
# EXTENSION TABLE
# =============================================================================

MIME_TYPES = {
    # Text and markup
    ".html": "text/html",
    ".htm": "text/html",
    ".css": "text/css",
    ".js": "text/javascript",
    ".mjs": "text/javascript",
    ".json": "application/json",
    ".xml": "application/xml",
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".csv": "text/csv",

    # Images
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".ico": "image/vnd.microsoft.icon",
    ".webp": "image/webp",
    ".bmp": "image/bmp",

    # Fonts
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".otf": "font/otf",

    # Audio / video
    ".mp3": "audio/mpeg",
    ".wav": "audio/x-wav",
    ".ogg": "audio/ogg",
    ".flac": "audio/flac",
    ".mp4": "video/mp4",
    ".webm": "video/webm",

    # Documents and archives
    ".pdf": "application/pdf",
    ".zip": "application/zip",
    ".gz": "application/gzip",
    ".tar": "application/x-tar",
    ".7z": "application/x-7z-compressed",

    # Misc
    ".wasm": "application/wasm",
    ".py": "text/x-python",
    ".sh": "application/x-shellscript",
    ".yaml": "application/yaml",
    ".yml": "application/yaml",
    ".toml": "application/toml",
}

DEFAULT_MIME_TYPE = "application/octet-stream"
EMPTY_MIME_TYPE = "application/x-zerosize"
TEXT_MIME_TYPE = "text/plain"


# =============================================================================
# MAGIC SIGNATURES
# =============================================================================
#
# (offset, signature, mime type), checked in order. RIFF containers share
# their first four bytes, so their format tag at offset 8 is matched
# separately below.
#

MAGIC_SIGNATURES = [
    (0, b"\x89PNG\r\n\x1a\n", "image/png"),
    (0, b"\xff\xd8\xff", "image/jpeg"),
    (0, b"GIF87a", "image/gif"),
    (0, b"GIF89a", "image/gif"),
    (0, b"%PDF-", "application/pdf"),
    (0, b"PK\x03\x04", "application/zip"),
    (0, b"PK\x05\x06", "application/zip"),
    (0, b"\x1f\x8b", "application/gzip"),
    (0, b"7z\xbc\xaf\x27\x1c", "application/x-7z-compressed"),
    (0, b"\x00asm", "application/wasm"),
    (0, b"wOFF", "font/woff"),
    (0, b"wOF2", "font/woff2"),
    (0, b"OggS", "audio/ogg"),
    (0, b"fLaC", "audio/flac"),
    (0, b"ID3", "audio/mpeg"),
    (0, b"\x1aE\xdf\xa3", "video/webm"),
    (4, b"ftyp", "video/mp4"),
    (257, b"ustar", "application/x-tar"),
]

RIFF_FORMATS = {
    b"WEBP": "image/webp",
    b"WAVE": "audio/x-wav",
    b"AVI ": "video/x-msvideo",
}

# Byte order marks: if present the data is text in that encoding
_BOMS = (b"\xef\xbb\xbf", b"\xff\xfe", b"\xfe\xff")

# Only the head of the data is inspected
SNIFF_LENGTH = 2048


def _match_magic(data: bytes) -> Optional[str]:
    if data[:4] == b"RIFF" and len(data) >= 12:
        riff = RIFF_FORMATS.get(data[8:12])
        if riff:
            return riff

    for offset, signature, mime_type in MAGIC_SIGNATURES:
        if data[offset:offset + len(signature)] == signature:
            return mime_type
    return None


def _match_markup(head: bytes) -> Optional[str]:
    text = head.lstrip(b"\xef\xbb\xbf \t\r\n").lower()
    if not text.startswith(b"<"):
        return None
    if text.startswith((b"<!doctype html", b"<html", b"<head", b"<body")):
        return "text/html"
    if b"<svg" in text:
        return "image/svg+xml"
    if text.startswith(b"<?xml"):
        return "application/xml"
    return None


def _looks_like_text(head: bytes, truncated: bool) -> bool:
    if head.startswith(_BOMS):
        return True
    if b"\x00" in head:
        return False
    try:
        head.decode("utf-8")
    except UnicodeDecodeError as e:
        # A multi-byte sequence cut off by SNIFF_LENGTH is still text
        if not truncated or e.start < len(head) - 3:
            return False
    control = sum(1 for byte in head if byte < 0x20 and byte not in b"\t\n\r\f\b\x1b")
    return control * 10 <= len(head)


# =============================================================================
# PUBLIC FUNCTIONS
# =============================================================================

def get_mime_type(path: Union[str, Path], default: Optional[str] = None) -> str:
    """
    Look a file name up in the extension table.

        >>> get_mime_type("style.css")
        'text/css'
        >>> get_mime_type("unknown.xyz")
        'application/octet-stream'
    """
    extension = Path(path).suffix.lower()
    return MIME_TYPES.get(extension, default or DEFAULT_MIME_TYPE)


def mime_from_bytes(data: bytes) -> str:
    """
    Infer a MIME type from content alone.

    Args:
        data: The body bytes.

    Returns:
        The detected type; application/x-zerosize for empty data and
        application/octet-stream for unrecognised binary.
    """
    if not data:
        return EMPTY_MIME_TYPE

    head = bytes(data[:SNIFF_LENGTH])

    magic = _match_magic(head)
    if magic:
        return magic

    markup = _match_markup(head)
    if markup:
        return markup

    if _looks_like_text(head, len(data) > SNIFF_LENGTH):
        return TEXT_MIME_TYPE

    return DEFAULT_MIME_TYPE


def mime_from_name_and_bytes(path: Union[str, Path], data: bytes) -> str:
    """
    Infer a MIME type from a file name, falling back to its content.

        >>> mime_from_name_and_bytes("page.html", b"")
        'text/html'
        >>> mime_from_name_and_bytes("README", b"hello")
        'text/plain'
    """
    by_name = get_mime_type(path)
    if by_name != DEFAULT_MIME_TYPE:
        return by_name
    return mime_from_bytes(data)


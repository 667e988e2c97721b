"""
=============================================================================
HTTP RESPONSE COMPONENTS
=============================================================================

    status_codes.py   HTTPStatus enum with reason phrases
    headers.py        HeaderList, the ordered header multimap
    mime_types.py     MIME detection from file names and from bytes
    response.py       HTTPResponse and the convenience constructors

=============================================================================
"""

# Import order matters: core.responder imports headers and status_codes,
# and response imports core.responder.
from .status_codes import HTTPStatus
from .headers import HeaderList
from .mime_types import get_mime_type, mime_from_bytes, mime_from_name_and_bytes
from .response import (
    HTTPResponse,
    make_response,
    ok,
    no_content,
    redirect,
    not_found,
    internal_error,
)

__all__ = [
    "HTTPStatus",
    "HeaderList",
    "get_mime_type",
    "mime_from_bytes",
    "mime_from_name_and_bytes",
    "HTTPResponse",
    "make_response",
    "ok",
    "no_content",
    "redirect",
    "not_found",
    "internal_error",
]

"""
=============================================================================
HTTP RESPONSE MODEL
=============================================================================

HTTPResponse holds one outgoing HTTP message - status, headers, body - and
knows how to put itself on the wire through a Responder.

=============================================================================
CONSTRUCTION
=============================================================================

Every constructor boils down to the same three pieces:

    ┌───────────────────────────────┬────────────────────┬─────────────┐
    │ constructor                   │ Content-Type       │ status      │
    ├───────────────────────────────┼────────────────────┼─────────────┤
    │ HTTPResponse(mime, data, st)  │ mime (if not "")   │ st (200)    │
    │ HTTPResponse.from_status(st)  │ application/x-empty│ st          │
    │ HTTPResponse.from_data(data)  │ sniffed from bytes │ 200         │
    │ HTTPResponse.from_json(doc)   │ application/json   │ 200         │
    │ HTTPResponse.from_file(path)  │ name + bytes       │ 200 / 404   │
    └───────────────────────────────┴────────────────────┴─────────────┘

application/x-empty marks a response that is typeless on purpose. It is
still written on the wire, but mime_type reports the text/html fallback
for it, exactly as for a response with no Content-Type at all.

=============================================================================
WIRE FORMAT
=============================================================================

    HTTP/1.1 200 OK\r\n                 ← status line
    Content-Type: application/json\r\n  ← stored headers, in order,
    X-Count: 1\r\n                        duplicates included
    X-Count: 2\r\n
    Content-Length: 9\r\n               ← always computed from the body
    \r\n
    {"X":"1"}                           ← body, verbatim

The HTTP version comes from the response's WireConfig, so status_line,
to_bytes() and write() always agree.

Content-Length is never taken from the stored headers. If the caller
stored one, it is written too (earlier), and the computed one follows it.

=============================================================================
"""

import json
import logging
import math
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from ..config import DEFAULT_CONFIG, WireConfig
from ..core.connection import BufferTransport
from ..core.responder import Responder
from .headers import HeaderList, HeaderPair, HeaderValue, iter_header_pairs
from .mime_types import mime_from_bytes, mime_from_name_and_bytes
from .status_codes import HTTPStatus


logger = logging.getLogger(__name__)

CONTENT_TYPE = b"Content-Type"
CONTENT_LENGTH = b"Content-Length"

CONTENT_TYPE_EMPTY = b"application/x-empty"
CONTENT_TYPE_JSON = b"application/json"
CONTENT_TYPE_FALLBACK = b"text/html"

Body = Union[str, bytes, bytearray, memoryview]
HeaderSource = Union[Mapping[HeaderValue, HeaderValue], Iterable[Tuple[HeaderValue, HeaderValue]]]


def _body_bytes(data: Body) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"Response body must be str or bytes, not {type(data).__name__}")


def _null_non_finite(value: Any) -> Any:
    # NaN and the infinities have no JSON form; they are written as null
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _null_non_finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_null_non_finite(item) for item in value]
    return value


class HTTPResponse:
    """
    An outgoing HTTP response.

    Args:
        mime_type: Value for the Content-Type header. An empty value leaves
            Content-Type unset.
        data: Body; str is encoded as UTF-8.
        status: Status code, 200 by default.
        config: Header encoding and status-line settings.

    Example:
        response = HTTPResponse("text/plain", "hello", HTTPStatus.OK)
        response.add_header("Set-Cookie", "a=1")
        response.add_header("Set-Cookie", "b=2")
        response.write(Responder(transport))
    """

    def __init__(
        self,
        mime_type: HeaderValue = b"",
        data: Body = b"",
        status: Union[HTTPStatus, int] = HTTPStatus.OK,
        config: Optional[WireConfig] = None,
    ):
        self._config = config or DEFAULT_CONFIG
        self._status = HTTPStatus.coerce(status)
        self._data = _body_bytes(data)
        self._headers = HeaderList(self._config.header_encoding)

        if mime_type:
            self.set_header(CONTENT_TYPE, mime_type)

    # =========================================================================
    # ALTERNATE CONSTRUCTORS
    # =========================================================================

    @classmethod
    def from_status(
        cls,
        status: Union[HTTPStatus, int],
        config: Optional[WireConfig] = None,
    ) -> "HTTPResponse":
        """Empty response carrying only a status code."""
        return cls(CONTENT_TYPE_EMPTY, b"", status, config)

    @classmethod
    def from_data(
        cls,
        data: Body,
        status: Union[HTTPStatus, int] = HTTPStatus.OK,
        config: Optional[WireConfig] = None,
    ) -> "HTTPResponse":
        """Response whose Content-Type is sniffed from the body bytes."""
        body = _body_bytes(data)
        return cls(mime_from_bytes(body), body, status, config)

    @classmethod
    def from_json(
        cls,
        document: Union[dict, list],
        status: Union[HTTPStatus, int] = HTTPStatus.OK,
        config: Optional[WireConfig] = None,
    ) -> "HTTPResponse":
        """
        Response carrying a JSON object or array, compactly serialized.

        Non-finite floats (NaN, Infinity) are written as null so the body
        is always valid JSON.

        Raises:
            TypeError: If document is neither a dict nor a list.
        """
        if not isinstance(document, (dict, list)):
            raise TypeError(
                f"JSON responses take an object or an array, not {type(document).__name__}"
            )
        body = json.dumps(
            _null_non_finite(document),
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        ).encode("utf-8")
        return cls(CONTENT_TYPE_JSON, body, status, config)

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        config: Optional[WireConfig] = None,
    ) -> "HTTPResponse":
        """
        Response with the whole content of a file as body.

        A file that cannot be opened or read - missing, unreadable, a
        directory - gives a 404 response instead of an exception.
        Checking that path is one the server should expose is up to the
        caller.
        """
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            logger.debug(f"Cannot read {path}: {e}")
            return cls.from_status(HTTPStatus.NOT_FOUND, config)

        return cls(mime_from_name_and_bytes(path, data), data, HTTPStatus.OK, config)

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    @property
    def data(self) -> bytes:
        """The response body."""
        return self._data

    @property
    def status_code(self) -> HTTPStatus:
        return self._status

    @property
    def mime_type(self) -> bytes:
        """
        The Content-Type value, or text/html when none is stored.

        The application/x-empty marker set by from_status() also reports
        text/html.
        """
        value = self._headers.first(CONTENT_TYPE)
        if value is None or value == CONTENT_TYPE_EMPTY:
            return CONTENT_TYPE_FALLBACK
        return value

    @property
    def status_line(self) -> str:
        return f"{self._config.http_version} {int(self._status)} {self._status.phrase}"

    @property
    def header_list(self) -> List[HeaderPair]:
        """Every stored (name, value) pair in write order."""
        return self._headers.items()

    # =========================================================================
    # HEADERS
    # =========================================================================

    def add_header(self, name: HeaderValue, value: HeaderValue) -> None:
        """Add a header; earlier headers with the same name are kept."""
        self._headers.add(name, value)

    def add_headers(self, headers: HeaderSource) -> None:
        """add_header() for each (name, value) pair, in order."""
        for name, value in iter_header_pairs(headers):
            self.add_header(name, value)

    def set_header(self, name: HeaderValue, value: HeaderValue) -> None:
        """Replace every header named name with a single value."""
        self._headers.set(name, value)

    def set_headers(self, headers: HeaderSource) -> None:
        """
        set_header() for each (name, value) pair, in order.

        When a name repeats in headers, the last pair wins.
        """
        for name, value in iter_header_pairs(headers):
            self.set_header(name, value)

    def clear_header(self, name: HeaderValue) -> None:
        self._headers.remove(name)

    def clear_headers(self) -> None:
        self._headers.clear()

    def has_header(self, name: HeaderValue, value: Optional[HeaderValue] = None) -> bool:
        """
        True if a header named name is stored; when value is given, only
        a header with exactly that value counts.
        """
        return self._headers.contains(name, value)

    def headers(self, name: HeaderValue) -> List[bytes]:
        """All values stored for name, oldest first. Empty if none."""
        return self._headers.get_all(name)

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def write(self, responder: Responder) -> None:
        """
        Write this response through responder, consuming it.

        The status line carries this response's configured http_version,
        whatever the responder's own config says. If the peer is already
        gone nothing is written and nothing is raised. The response itself
        is left untouched and can be written again through another
        Responder.

        Raises:
            ResponderConsumedError: If responder was already used or detached.
        """
        if not responder.is_connected():
            responder.consume()
            return

        responder.write_status_line(self._status, self._config.http_version)

        for name, value in self._headers:
            responder.write_header(name, value)

        responder.write_header(CONTENT_LENGTH, str(len(self._data)).encode("ascii"))

        responder.write_body(self._data)

    def to_bytes(self) -> bytes:
        """The exact bytes write() would send over a live connection."""
        transport = BufferTransport()
        self.write(Responder(transport, self._config))
        return transport.getvalue()

    def __repr__(self) -> str:
        return (
            f"<HTTPResponse {int(self._status)} {self._status.phrase} "
            f"{self.mime_type.decode('latin-1')} {len(self._data)} bytes>"
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def make_response(
    content: Any,
    status: Optional[Union[HTTPStatus, int]] = None,
    config: Optional[WireConfig] = None,
) -> HTTPResponse:
    """
    Build a response from whatever a handler returned.

        HTTPStatus / int   → from_status()
        dict / list        → from_json()
        str / bytes        → from_data()
        HTTPResponse       → returned unchanged

    Args:
        content: The value to turn into a response.
        status: Status for JSON and data bodies (default 200).

    Raises:
        TypeError: For any other type.
    """
    if isinstance(content, HTTPResponse):
        return content
    # bool is an int subclass but never a status code
    if isinstance(content, int) and not isinstance(content, bool):
        return HTTPResponse.from_status(content, config)
    if isinstance(content, (dict, list)):
        return HTTPResponse.from_json(content, status or HTTPStatus.OK, config)
    if isinstance(content, (str, bytes, bytearray, memoryview)):
        return HTTPResponse.from_data(content, status or HTTPStatus.OK, config)
    raise TypeError(f"Cannot build a response from {type(content).__name__}")


def ok(content: Union[Body, dict, list] = b"") -> HTTPResponse:
    """200 OK with a JSON or sniffed body."""
    return make_response(content, HTTPStatus.OK)


def no_content() -> HTTPResponse:
    return HTTPResponse.from_status(HTTPStatus.NO_CONTENT)


def redirect(location: HeaderValue, permanent: bool = False) -> HTTPResponse:
    """301 (permanent) or 302 redirect to location."""
    response = HTTPResponse.from_status(
        HTTPStatus.MOVED_PERMANENTLY if permanent else HTTPStatus.FOUND
    )
    response.set_header(b"Location", location)
    return response


def not_found(message: str = "Not Found") -> HTTPResponse:
    return HTTPResponse.from_json({"error": message}, HTTPStatus.NOT_FOUND)


def internal_error(message: str = "Internal Server Error") -> HTTPResponse:
    return HTTPResponse.from_json({"error": message}, HTTPStatus.INTERNAL_SERVER_ERROR)

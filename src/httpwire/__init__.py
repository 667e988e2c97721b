"""
=============================================================================
HTTPWIRE - HTTP Response Model and Wire Serialization
=============================================================================

Build an HTTP/1.x response in memory, then write it onto a connection:

    from httpwire import HTTPResponse, Responder, SocketTransport

    response = HTTPResponse.from_json({"message": "hello"})
    response.add_header("Set-Cookie", "session=abc")
    response.add_header("Set-Cookie", "theme=dark")

    with SocketTransport(client_socket) as transport:
        response.write(Responder(transport))

Package layout:

    httpwire/
    ├── __init__.py        # This file - package exports
    ├── __main__.py        # CLI (python -m httpwire)
    ├── config.py          # WireConfig dataclass, logging setup
    ├── http/
    │   ├── status_codes.py
    │   ├── headers.py
    │   ├── mime_types.py
    │   └── response.py
    └── core/
        ├── connection.py
        └── responder.py

=============================================================================
"""

__version__ = "1.0.0"

from .config import WireConfig, configure_logging
from .http import HTTPResponse, HTTPStatus, HeaderList, make_response
from .core import (
    BufferTransport,
    Responder,
    ResponderConsumedError,
    ResponderError,
    ResponderStateError,
    SocketTransport,
    Transport,
)

__all__ = [
    "WireConfig",
    "configure_logging",
    "HTTPResponse",
    "HTTPStatus",
    "HeaderList",
    "make_response",
    "Responder",
    "ResponderError",
    "ResponderConsumedError",
    "ResponderStateError",
    "Transport",
    "SocketTransport",
    "BufferTransport",
    "__version__",
]

"""
=============================================================================
WIRE LAYER
=============================================================================

    connection.py   Transport protocol, SocketTransport, BufferTransport
    responder.py    Responder, the one-shot session a response is written to

    HTTPResponse ──write()──► Responder ──write_bytes()──► Transport ──► peer

=============================================================================
"""

from .connection import Transport, SocketTransport, BufferTransport, ConnectionState
from .responder import (
    Responder,
    ResponderError,
    ResponderConsumedError,
    ResponderStateError,
)

__all__ = [
    "Transport",
    "SocketTransport",
    "BufferTransport",
    "ConnectionState",
    "Responder",
    "ResponderError",
    "ResponderConsumedError",
    "ResponderStateError",
]

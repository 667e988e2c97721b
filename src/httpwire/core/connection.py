"""
=============================================================================
TRANSPORTS
=============================================================================

A transport is the outgoing side of a client connection. The response
writer needs exactly two things from it:

    is_connected() -> bool     may bytes still be written?
    write_bytes(buf) -> None   hand bytes to the peer

Two implementations live here:

    SocketTransport   wraps an accepted/connected TCP socket
    BufferTransport   collects bytes in memory (rendering, tests)

=============================================================================
CONNECTION STATE MACHINE (SocketTransport)
=============================================================================

    OPEN ──────► WRITING ──────► OPEN ───► ... ───► CLOSING ──► CLOSED
                   │                                   ▲
                   │  send failed (peer went away)     │
                   └──────────► DISCONNECTED ──────────┘

Only OPEN and WRITING count as connected. Once a send fails the transport
stays DISCONNECTED; later writes are dropped without touching the socket.

=============================================================================
"""

import io
import logging
import socket
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """The connection interface a Responder writes onto."""

    def is_connected(self) -> bool:
        ...

    def write_bytes(self, data: bytes) -> None:
        ...


class ConnectionState(Enum):
    """Socket transport lifecycle states."""
    OPEN = "open"                  # Connected, idle
    WRITING = "writing"            # Inside sendall()
    DISCONNECTED = "disconnected"  # Peer went away; socket still held
    CLOSING = "closing"            # Shutdown sequence in progress
    CLOSED = "closed"              # Socket released


@dataclass
class SocketTransport:
    """
    Transport over a connected TCP socket.

    Attributes:
        socket: The connected socket.
        address: Peer (ip, port), used in log messages.
        id: Short identifier for log correlation.
        state: Current connection state.
        bytes_sent: Total bytes handed to sendall() successfully.
        timeout: Socket timeout applied on construction (None = blocking).
    """

    socket: socket.socket
    address: Optional[tuple] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.OPEN
    bytes_sent: int = 0
    timeout: Optional[float] = 30.0

    def __post_init__(self):
        self.socket.settimeout(self.timeout)

    def is_connected(self) -> bool:
        return self.state in (ConnectionState.OPEN, ConnectionState.WRITING)

    def write_bytes(self, data: bytes) -> None:
        """
        Send all of data to the peer.

        Send failures are not raised: the peer closing its end mid-response
        is an ordinary event. The transport logs it and switches to
        DISCONNECTED so the remaining writes of the response are skipped.
        """
        if not self.is_connected():
            return

        self.state = ConnectionState.WRITING
        try:
            self.socket.sendall(data)
        except (ConnectionResetError, BrokenPipeError, OSError) as e:
            logger.warning(f"[{self.id}] Send failed: {e}")
            self.state = ConnectionState.DISCONNECTED
            return

        self.bytes_sent += len(data)
        self.state = ConnectionState.OPEN

    def close(self):
        """Shut down the write side, then release the socket."""
        if self.state == ConnectionState.CLOSED:
            return

        self.state = ConnectionState.CLOSING

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # already disconnected

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Transport closed after {self.bytes_sent} bytes")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class BufferTransport:
    """
    In-memory transport.

    Everything written is appended to an internal buffer, readable with
    getvalue(). Setting connected to False makes it behave like a
    connection whose peer has hung up.
    """

    def __init__(self, connected: bool = True):
        self.connected = connected
        self.writes = 0
        self._buffer = io.BytesIO()

    def is_connected(self) -> bool:
        return self.connected

    def write_bytes(self, data: bytes) -> None:
        if not self.connected:
            return
        self._buffer.write(data)
        self.writes += 1

    def getvalue(self) -> bytes:
        return self._buffer.getvalue()

"""
pytest configuration and fixtures.
"""

import socket
from typing import Generator, Tuple
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from httpwire import WireConfig
from httpwire.core import BufferTransport, Responder, SocketTransport


@pytest.fixture
def transport() -> BufferTransport:
    """Connected in-memory transport."""
    return BufferTransport()


@pytest.fixture
def disconnected_transport() -> BufferTransport:
    """In-memory transport whose peer has already gone away."""
    return BufferTransport(connected=False)


@pytest.fixture
def responder(transport: BufferTransport) -> Responder:
    """Fresh responder bound to the in-memory transport."""
    return Responder(transport)


@pytest.fixture
def config() -> WireConfig:
    """Default rendering configuration."""
    return WireConfig()


@pytest.fixture
def socket_pair() -> Generator[Tuple[SocketTransport, socket.socket], None, None]:
    """A SocketTransport and the peer socket reading from it."""
    server_side, client_side = socket.socketpair()
    transport = SocketTransport(server_side, timeout=5.0)
    client_side.settimeout(5.0)

    yield transport, client_side

    transport.close()
    client_side.close()


@pytest.fixture
def html_file(tmp_path: Path) -> Path:
    path = tmp_path / "index.html"
    path.write_bytes(b"<!DOCTYPE html><html><body>Hello</body></html>")
    return path

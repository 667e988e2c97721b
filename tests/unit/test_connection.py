"""
Unit tests for transports.
"""

import socket

from httpwire.core import (
    BufferTransport,
    ConnectionState,
    Responder,
    SocketTransport,
    Transport,
)
from httpwire.http import HTTPResponse


def read_until_eof(sock: socket.socket) -> bytes:
    chunks = []
    while True:
        chunk = sock.recv(4096)
        if not chunk:
            return b"".join(chunks)
        chunks.append(chunk)


class TestBufferTransport:
    """Tests for the in-memory transport."""

    def test_collects_writes(self):
        """Writes accumulate in the buffer."""
        transport = BufferTransport()
        transport.write_bytes(b"ab")
        transport.write_bytes(b"cd")

        assert transport.getvalue() == b"abcd"
        assert transport.writes == 2

    def test_disconnected_drops_writes(self):
        """A hung-up buffer transport keeps nothing."""
        transport = BufferTransport(connected=False)
        transport.write_bytes(b"ab")

        assert not transport.is_connected()
        assert transport.getvalue() == b""
        assert transport.writes == 0

    def test_implements_protocol(self):
        """BufferTransport satisfies the Transport protocol."""
        assert isinstance(BufferTransport(), Transport)


class TestSocketTransport:
    """Tests for the socket transport."""

    def test_initial_state(self, socket_pair):
        """A new socket transport is open and connected."""
        transport, _ = socket_pair

        assert transport.state == ConnectionState.OPEN
        assert transport.is_connected()
        assert len(transport.id) == 8
        assert isinstance(transport, Transport)

    def test_response_reaches_peer(self, socket_pair):
        """The peer receives exactly the rendered bytes."""
        transport, client = socket_pair
        response = HTTPResponse.from_json({"hello": "world"})
        expected = response.to_bytes()

        response.write(Responder(transport))
        transport.close()

        assert read_until_eof(client) == expected
        assert transport.bytes_sent == len(expected)
        assert transport.state == ConnectionState.CLOSED

    def test_peer_gone_marks_disconnected(self, socket_pair):
        """A failed send is swallowed and the transport stops writing."""
        transport, client = socket_pair
        client.close()

        for _ in range(10):
            transport.write_bytes(b"x" * 65536)
            if not transport.is_connected():
                break

        assert transport.state == ConnectionState.DISCONNECTED
        assert not transport.is_connected()

    def test_response_after_disconnect_is_silent(self, socket_pair):
        """A response on a dead socket sends nothing."""
        transport, client = socket_pair
        client.close()
        transport.state = ConnectionState.DISCONNECTED
        responder = Responder(transport)

        HTTPResponse.from_data(b"lost").write(responder)

        assert responder.is_consumed
        assert transport.bytes_sent == 0

    def test_close_is_idempotent(self, socket_pair):
        """Closing twice is harmless."""
        transport, _ = socket_pair
        transport.close()
        transport.close()

        assert transport.state == ConnectionState.CLOSED
        assert not transport.is_connected()

    def test_context_manager(self):
        """Leaving the with block closes the socket."""
        server_side, client_side = socket.socketpair()
        with client_side:
            with SocketTransport(server_side, timeout=5.0) as transport:
                transport.write_bytes(b"ping")

            assert transport.state == ConnectionState.CLOSED
            assert read_until_eof(client_side) == b"ping"

"""
Unit tests for the one-shot Responder.
"""

import pytest

from httpwire import WireConfig
from httpwire.core import (
    BufferTransport,
    Responder,
    ResponderConsumedError,
    ResponderStateError,
)
from httpwire.core.responder import ResponderPhase
from httpwire.http import HTTPStatus


class TestWritePrimitives:
    """Tests for the ordered write primitives."""

    def test_full_sequence(self, transport, responder):
        """Status line, headers and body in one session."""
        responder.write_status_line(HTTPStatus.OK)
        responder.write_header("Content-Type", "text/plain")
        responder.write_header(b"X-Raw", b"\x01")
        responder.write_body(b"hi")

        assert transport.getvalue() == (
            b"HTTP/1.1 200 OK\r\n"
            b"Content-Type: text/plain\r\n"
            b"X-Raw: \x01\r\n"
            b"\r\n"
            b"hi"
        )
        assert responder.is_consumed

    def test_version_override(self, transport, responder):
        """An explicit version beats the configured one."""
        responder.write_status_line(404, "HTTP/1.0")
        assert transport.getvalue() == b"HTTP/1.0 404 Not Found\r\n"

    def test_configured_version(self, transport):
        """The config supplies the default version."""
        responder = Responder(transport, WireConfig(http_version="HTTP/1.0"))
        responder.write_status_line(HTTPStatus.CREATED)
        assert transport.getvalue() == b"HTTP/1.0 201 Created\r\n"

    def test_header_encoding(self, transport):
        """str headers use the configured encoding."""
        responder = Responder(transport, WireConfig(header_encoding="latin-1"))
        responder.write_status_line(200)
        responder.write_header("X-City", "café")

        assert transport.getvalue().endswith(b"X-City: caf\xe9\r\n")

    def test_write_headers_keeps_duplicates(self, transport, responder):
        """Bulk header writes keep repeated names."""
        responder.write_status_line(200)
        responder.write_headers([("X-A", "1"), ("X-A", "2")])

        assert transport.getvalue().endswith(b"X-A: 1\r\nX-A: 2\r\n")

    def test_empty_body_writes_only_separator(self, transport, responder):
        """An empty body writes just the blank line."""
        responder.write_status_line(204)
        responder.write_body(b"")

        assert transport.getvalue() == b"HTTP/1.1 204 No Content\r\n\r\n"
        assert transport.writes == 2


class TestOrdering:
    """Tests for out-of-order use."""

    def test_header_before_status_line(self, responder):
        """Headers cannot come first."""
        with pytest.raises(ResponderStateError):
            responder.write_header("X-A", "1")

    def test_body_before_status_line(self, responder):
        """The body cannot come first."""
        with pytest.raises(ResponderStateError):
            responder.write_body(b"")

    def test_status_line_twice(self, responder):
        """Only one status line per session."""
        responder.write_status_line(200)
        with pytest.raises(ResponderStateError):
            responder.write_status_line(200)

    def test_unknown_status(self, responder):
        """Unregistered codes are rejected."""
        with pytest.raises(ValueError):
            responder.write_status_line(999)


class TestOwnership:
    """Tests for consumption and detaching."""

    def test_done_responder_rejects_everything(self, responder):
        """A finished session refuses further use."""
        responder.write_status_line(200)
        responder.write_body(b"")

        with pytest.raises(ResponderConsumedError):
            responder.write_header("X-A", "1")
        with pytest.raises(ResponderConsumedError):
            responder.is_connected()
        with pytest.raises(ResponderConsumedError):
            responder.detach()

    def test_consume(self, transport, responder):
        """consume() ends the session without writing."""
        responder.consume()

        assert responder.is_consumed
        assert transport.getvalue() == b""
        with pytest.raises(ResponderConsumedError):
            responder.write_status_line(200)

    def test_detach_invalidates_original(self, transport, responder):
        """The moved-from responder is dead."""
        moved = responder.detach()

        assert responder.is_consumed
        assert not moved.is_consumed
        assert moved.transport is transport
        with pytest.raises(ResponderConsumedError):
            responder.transport
        with pytest.raises(ResponderConsumedError):
            responder.write_status_line(200)

    def test_detach_keeps_progress(self, transport, responder):
        """A detached copy continues where the original stopped."""
        responder.write_status_line(200)
        moved = responder.detach()

        moved.write_header("X-A", "1")
        moved.write_body(b"ok")

        assert transport.getvalue() == b"HTTP/1.1 200 OK\r\nX-A: 1\r\n\r\nok"

    def test_detach_keeps_config(self, transport):
        """A detached copy keeps the config."""
        config = WireConfig(http_version="HTTP/1.0")
        moved = Responder(transport, config).detach()
        assert moved.config is config

    def test_is_connected_follows_transport(self, disconnected_transport):
        """is_connected() asks the transport."""
        assert not Responder(disconnected_transport).is_connected()
        assert Responder(BufferTransport()).is_connected()

    def test_repr(self, responder):
        """repr shows the phase, or that the responder was detached."""
        assert ResponderPhase.STATUS_LINE.value in repr(responder)
        responder.detach()
        assert "detached" in repr(responder)

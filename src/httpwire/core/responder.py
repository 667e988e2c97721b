"""
=============================================================================
RESPONDER (WIRE WRITER SESSION)
=============================================================================

A Responder is bound to one transport and writes exactly one HTTP response
onto it, in a fixed order:

    ┌──────────────┐   ┌──────────────────┐   ┌──────────────────────┐
    │ STATUS LINE  │──►│ HEADERS (0..n)   │──►│ BLANK LINE + BODY    │──► done
    │ write_status │   │ write_header     │   │ write_body           │
    └──────────────┘   └──────────────────┘   └──────────────────────┘

Calling a primitive out of that order raises ResponderStateError.

=============================================================================
ONE SHOT, ONE OWNER
=============================================================================

A session is used up by the response written through it. Passing it on
is done with detach(), which returns a fresh Responder for the same
transport and leaves the original unusable:

    responder = Responder(transport)
    handed_off = responder.detach()     # responder is now dead
    response.write(handed_off)          # handed_off is now consumed
    response.write(handed_off)          # ResponderConsumedError

This guarantees one connection never receives two responses from the
same session.

=============================================================================
"""

import logging
from enum import Enum
from typing import Iterable, Optional, Tuple, Union

from ..config import DEFAULT_CONFIG, WireConfig
from ..http.headers import HeaderValue, iter_header_pairs, to_header_bytes
from ..http.status_codes import HTTPStatus
from .connection import Transport


logger = logging.getLogger(__name__)

CRLF = b"\r\n"


class ResponderError(Exception):
    """Base class for misuse of a Responder."""


class ResponderConsumedError(ResponderError):
    """Raised when a consumed or detached Responder is used again."""


class ResponderStateError(ResponderError):
    """Raised when write primitives are called out of order."""


class ResponderPhase(Enum):
    STATUS_LINE = "status_line"  # Nothing written yet
    HEADERS = "headers"          # Status line written, headers may follow
    DONE = "done"                # Body written, or the session was consumed


class Responder:
    """
    One-shot writer of a single HTTP response onto a transport.

    Args:
        transport: Anything implementing is_connected() and write_bytes().
        config: Rendering settings (HTTP version, header encoding).
    """

    def __init__(self, transport: Transport, config: Optional[WireConfig] = None):
        self._transport = transport
        self._config = config or DEFAULT_CONFIG
        self._phase = ResponderPhase.STATUS_LINE
        self._detached = False

    # =========================================================================
    # OWNERSHIP
    # =========================================================================

    @property
    def transport(self) -> Transport:
        self._check_alive()
        return self._transport

    @property
    def config(self) -> WireConfig:
        return self._config

    @property
    def is_consumed(self) -> bool:
        return self._detached or self._phase is ResponderPhase.DONE

    def is_connected(self) -> bool:
        """True if the bound transport can still take bytes."""
        self._check_alive()
        return self._transport.is_connected()

    def detach(self) -> "Responder":
        """
        Move the session into a new Responder.

        The new object takes over the transport and the write progress;
        this one can no longer be used.
        """
        self._check_alive()
        moved = Responder(self._transport, self._config)
        moved._phase = self._phase
        self._detached = True
        self._transport = None
        return moved

    def consume(self) -> None:
        """Mark the session as used without writing anything further."""
        self._check_alive()
        self._phase = ResponderPhase.DONE

    def _check_alive(self) -> None:
        if self._detached:
            raise ResponderConsumedError("Responder was detached; use the detached copy")
        if self._phase is ResponderPhase.DONE:
            raise ResponderConsumedError("Responder has already written a response")

    # =========================================================================
    # WRITE PRIMITIVES
    # =========================================================================

    def write_status_line(
        self,
        status: Union[HTTPStatus, int],
        version: Optional[str] = None,
    ) -> None:
        """
        Write "HTTP/1.1 200 OK\\r\\n".

        Args:
            status: Status code to report.
            version: Protocol token; defaults to the configured http_version.
        """
        self._check_alive()
        if self._phase is not ResponderPhase.STATUS_LINE:
            raise ResponderStateError("Status line already written")

        status = HTTPStatus.coerce(status)
        line = f"{version or self._config.http_version} {int(status)} {status.phrase}"
        self._transport.write_bytes(line.encode("ascii") + CRLF)
        self._phase = ResponderPhase.HEADERS

    def write_header(self, name: HeaderValue, value: HeaderValue) -> None:
        """Write one "Name: Value\\r\\n" line. Nothing is validated."""
        self._check_alive()
        if self._phase is not ResponderPhase.HEADERS:
            raise ResponderStateError("Headers must follow the status line")

        encoding = self._config.header_encoding
        self._transport.write_bytes(
            to_header_bytes(name, encoding) + b": " + to_header_bytes(value, encoding) + CRLF
        )

    def write_headers(self, headers: Iterable[Tuple[HeaderValue, HeaderValue]]) -> None:
        """Write each (name, value) pair in order; accepts a mapping too."""
        for name, value in iter_header_pairs(headers):
            self.write_header(name, value)

    def write_body(self, body: bytes) -> None:
        """
        End the header section and write the body verbatim.

        This completes the session.
        """
        self._check_alive()
        if self._phase is not ResponderPhase.HEADERS:
            raise ResponderStateError("Body must follow the status line and headers")

        self._transport.write_bytes(CRLF)
        if body:
            self._transport.write_bytes(bytes(body))
        self._phase = ResponderPhase.DONE

    def __repr__(self) -> str:
        state = "detached" if self._detached else self._phase.value
        return f"<Responder {state} transport={self._transport!r}>"

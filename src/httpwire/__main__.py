"""
=============================================================================
COMMAND LINE INTERFACE
=============================================================================

Print the exact bytes a response would put on the wire.

    python -m httpwire index.html
    python -m httpwire --status 404
    python -m httpwire data.json --header "Cache-Control: no-store"
    python -m httpwire missing.txt              # prints a 404 response

Handy for checking what Content-Type a file is given, or how duplicate
headers come out.

=============================================================================
"""

import argparse
import sys
from typing import List, Optional, Tuple

from . import __version__
from .config import LOG_LEVELS, SUPPORTED_HTTP_VERSIONS, WireConfig, configure_logging
from .core import BufferTransport, Responder
from .http import HTTPResponse, HTTPStatus


def parse_header(raw: str) -> Tuple[str, str]:
    """Split "Name: Value" into its parts (argparse type callback)."""
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"Header must look like 'Name: Value', got {raw!r}")
    return name.strip(), value.strip()


def parse_status(raw: str) -> HTTPStatus:
    try:
        return HTTPStatus.coerce(raw)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="httpwire",
        description="Render an HTTP response to stdout",
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "file",
        nargs="?",
        help="File to serve as the response body (404 if unreadable)",
    )
    source.add_argument(
        "--status", "-s",
        type=parse_status,
        help="Render an empty response with this status code",
    )

    parser.add_argument(
        "--header", "-H",
        action="append",
        type=parse_header,
        default=[],
        metavar="'NAME: VALUE'",
        help="Extra header; repeat to add several (duplicates are kept)",
    )
    parser.add_argument(
        "--http-version",
        choices=SUPPORTED_HTTP_VERSIONS,
        default="HTTP/1.1",
        help="Protocol version on the status line (default: HTTP/1.1)",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"httpwire {__version__}",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = WireConfig(http_version=args.http_version, log_level=args.log_level)
    config.validate()
    configure_logging(config)

    if args.status is not None:
        response = HTTPResponse.from_status(args.status, config)
    else:
        response = HTTPResponse.from_file(args.file, config)

    response.add_headers(args.header)

    transport = BufferTransport()
    response.write(Responder(transport, config))

    sys.stdout.buffer.write(transport.getvalue())
    sys.stdout.buffer.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())

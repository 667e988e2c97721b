"""
=============================================================================
CONFIGURATION
=============================================================================

Settings that shape how responses are rendered and how the package logs.

    ┌─────────────────────┬──────────────────────────────┬───────────────┐
    │ field               │ environment variable         │ default       │
    ├─────────────────────┼──────────────────────────────┼───────────────┤
    │ http_version        │ HTTPWIRE_HTTP_VERSION        │ HTTP/1.1      │
    │ header_encoding     │ HTTPWIRE_HEADER_ENCODING     │ utf-8         │
    │ log_level           │ HTTPWIRE_LOG_LEVEL           │ INFO          │
    │ log_format          │ HTTPWIRE_LOG_FORMAT          │ text          │
    └─────────────────────┴──────────────────────────────┴───────────────┘

Usage:

    config = WireConfig.from_env()
    config.validate()
    configure_logging(config)

=============================================================================
"""

import codecs
import json
import logging
import os
from dataclasses import dataclass


SUPPORTED_HTTP_VERSIONS = ("HTTP/1.0", "HTTP/1.1")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class WireConfig:
    """
    Response rendering configuration.

    Attributes:
        http_version: Protocol token written at the start of the status line.
        header_encoding: Codec applied to header names and values given as str.
        log_level: Level for the "httpwire" logger.
        log_format: "text" for human-readable lines, "json" for one JSON
            object per record.
    """

    http_version: str = "HTTP/1.1"
    header_encoding: str = "utf-8"
    log_level: str = "INFO"
    log_format: str = "text"

    @classmethod
    def from_env(cls) -> "WireConfig":
        """Build a configuration from HTTPWIRE_* environment variables."""
        return cls(
            http_version=os.getenv("HTTPWIRE_HTTP_VERSION", "HTTP/1.1"),
            header_encoding=os.getenv("HTTPWIRE_HEADER_ENCODING", "utf-8"),
            log_level=os.getenv("HTTPWIRE_LOG_LEVEL", "INFO"),
            log_format=os.getenv("HTTPWIRE_LOG_FORMAT", "text"),
        )

    def validate(self) -> None:
        """
        Fail fast on values that would produce a broken wire format.

        Raises:
            ValueError: On the first invalid field.
        """
        if self.http_version not in SUPPORTED_HTTP_VERSIONS:
            raise ValueError(
                f"Unsupported http_version: {self.http_version!r}. "
                f"Must be one of {', '.join(SUPPORTED_HTTP_VERSIONS)}."
            )

        try:
            codecs.lookup(self.header_encoding)
        except LookupError:
            raise ValueError(f"Unknown header_encoding: {self.header_encoding!r}") from None

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level!r}")

        if self.log_format not in ("text", "json"):
            raise ValueError(f"log_format must be 'text' or 'json', not {self.log_format!r}")


DEFAULT_CONFIG = WireConfig()


class JSONLogFormatter(logging.Formatter):
    """One JSON object per log record, for log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def configure_logging(config: WireConfig = DEFAULT_CONFIG) -> None:
    """Configure the root handler and the "httpwire" logger level."""
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    if config.log_format == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(JSONLogFormatter())
        logging.basicConfig(level=level, handlers=[handler])
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    logging.getLogger("httpwire").setLevel(level)

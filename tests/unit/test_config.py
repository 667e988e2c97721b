"""
Unit tests for configuration and logging setup.
"""

import json
import logging

import pytest

from httpwire.config import JSONLogFormatter, WireConfig, configure_logging


class TestWireConfig:
    """Tests for WireConfig."""

    def test_defaults(self, config):
        """A fresh config is valid and uses HTTP/1.1."""
        assert config.http_version == "HTTP/1.1"
        assert config.header_encoding == "utf-8"
        assert config.log_level == "INFO"
        assert config.log_format == "text"
        config.validate()

    def test_from_env(self, monkeypatch):
        """Every field can come from the environment."""
        monkeypatch.setenv("HTTPWIRE_HTTP_VERSION", "HTTP/1.0")
        monkeypatch.setenv("HTTPWIRE_HEADER_ENCODING", "latin-1")
        monkeypatch.setenv("HTTPWIRE_LOG_LEVEL", "debug")
        monkeypatch.setenv("HTTPWIRE_LOG_FORMAT", "json")

        config = WireConfig.from_env()

        assert config == WireConfig("HTTP/1.0", "latin-1", "debug", "json")
        config.validate()

    def test_from_env_defaults(self, monkeypatch):
        """Unset variables fall back to the defaults."""
        for name in ("HTTP_VERSION", "HEADER_ENCODING", "LOG_LEVEL", "LOG_FORMAT"):
            monkeypatch.delenv(f"HTTPWIRE_{name}", raising=False)

        assert WireConfig.from_env() == WireConfig()

    @pytest.mark.parametrize("field,value", [
        ("http_version", "HTTP/2"),
        ("header_encoding", "no-such-codec"),
        ("log_level", "LOUD"),
        ("log_format", "xml"),
    ])
    def test_validate_rejects(self, field, value):
        """Each invalid field is reported."""
        config = WireConfig(**{field: value})
        with pytest.raises(ValueError):
            config.validate()


class TestLogging:
    """Tests for logging setup."""

    def test_sets_package_level(self):
        """The package logger follows the configured level."""
        configure_logging(WireConfig(log_level="DEBUG"))
        assert logging.getLogger("httpwire").level == logging.DEBUG

        configure_logging(WireConfig(log_level="warning"))
        assert logging.getLogger("httpwire").level == logging.WARNING

    def test_json_formatter(self):
        """JSON log lines carry level, logger and message."""
        record = logging.LogRecord(
            "httpwire.core", logging.WARNING, __file__, 1, "Send failed: %s", ("EPIPE",), None
        )
        entry = json.loads(JSONLogFormatter().format(record))

        assert entry["level"] == "WARNING"
        assert entry["logger"] == "httpwire.core"
        assert entry["message"] == "Send failed: EPIPE"

"""
Tests for configuration and logging setup.
"""

import io
import json
import logging

import pytest

from bucko import Config, setup_structured_logger
from bucko.logging_setup import REDACTED, sanitize_headers


class TestConfig:
    """Test configuration."""

    def test_defaults(self, monkeypatch):
        """Test default values."""
        for name in (
            "BUCKO_TIMEOUT",
            "BUCKO_VERIFY_SSL",
            "BUCKO_MAX_WORKERS",
            "BUCKO_MAX_RETRIES",
            "BUCKO_LOG_REQUESTS",
        ):
            monkeypatch.delenv(name, raising=False)

        config = Config()

        assert config.timeout == 30.0
        assert config.verify_ssl is True
        assert config.max_workers == 8
        assert config.max_retries == 0
        assert config.log_requests is True
        assert config.default_headers["User-Agent"].startswith("Bucko-Python/")

    def test_config_from_env(self, monkeypatch):
        """Test configuration from environment variables."""
        monkeypatch.setenv("BUCKO_TIMEOUT", "4.5")
        monkeypatch.setenv("BUCKO_VERIFY_SSL", "false")
        monkeypatch.setenv("BUCKO_MAX_WORKERS", "3")
        monkeypatch.setenv("BUCKO_MAX_RETRIES", "2")
        monkeypatch.setenv("BUCKO_LOG_REQUESTS", "no")

        config = Config()

        assert config.timeout == 4.5
        assert config.verify_ssl is False
        assert config.max_workers == 3
        assert config.max_retries == 2
        assert config.log_requests is False

    def test_arguments_override_env(self, monkeypatch):
        """Test explicit arguments win over the environment."""
        monkeypatch.setenv("BUCKO_TIMEOUT", "4.5")

        assert Config(timeout=10).timeout == 10

    def test_invalid_values(self, monkeypatch):
        """Test validation of configuration values."""
        with pytest.raises(ValueError, match="timeout must be positive"):
            Config(timeout=0)

        with pytest.raises(ValueError, match="max_workers"):
            Config(max_workers=0)

        with pytest.raises(ValueError, match="max_retries"):
            Config(max_retries=-1)

        monkeypatch.setenv("BUCKO_VERIFY_SSL", "maybe")
        with pytest.raises(ValueError, match="BUCKO_VERIFY_SSL"):
            Config()

        monkeypatch.delenv("BUCKO_VERIFY_SSL")
        monkeypatch.setenv("BUCKO_TIMEOUT", "soon")
        with pytest.raises(ValueError, match="BUCKO_TIMEOUT"):
            Config()

    def test_repr_redacts_headers(self):
        """Test credentials are not shown in repr."""
        config = Config(default_headers={"Authorization": "Bearer secret"})

        assert "secret" not in repr(config)
        assert REDACTED in repr(config)


class TestLogging:
    """Test structured logging."""

    def test_sanitize_headers(self):
        """Test sensitive headers are redacted."""
        headers = {"Authorization": "Bearer x", "X-Api-Key": "k", "Accept": "*/*"}

        assert sanitize_headers(headers) == {
            "Authorization": REDACTED,
            "X-Api-Key": REDACTED,
            "Accept": "*/*",
        }
        assert sanitize_headers(None) == {}

    def test_setup_structured_logger(self):
        """Test records are written as JSON lines."""
        stream = io.StringIO()
        bucko_logger = logging.getLogger("bucko")
        saved_handlers = bucko_logger.handlers[:]
        saved_level = bucko_logger.level
        saved_propagate = bucko_logger.propagate

        try:
            setup_structured_logger(logging.DEBUG, stream=stream)
            bucko_logger.info("GET https://api.example.com", extra={"status_code": 200})
        finally:
            bucko_logger.handlers = saved_handlers
            bucko_logger.setLevel(saved_level)
            bucko_logger.propagate = saved_propagate

        record = json.loads(stream.getvalue().strip())
        assert record["name"] == "bucko"
        assert record["level"] == "INFO"
        assert record["msg"] == "GET https://api.example.com"
        assert record["status_code"] == 200


class TestDeprecatedAliases:
    """Test old names still resolve."""

    def test_alias_warns(self):
        """Test deprecated names emit a warning."""
        import bucko

        with pytest.warns(DeprecationWarning, match="HTTPMethod"):
            assert bucko.HttpMethod is bucko.HTTPMethod

        with pytest.warns(DeprecationWarning):
            assert bucko.JsonEncoding is bucko.ParameterEncoding.JSON

        with pytest.warns(DeprecationWarning, match="Response.json"):
            assert bucko.Json is dict

    def test_unknown_name(self):
        """Test unknown attributes still raise."""
        import bucko

        with pytest.raises(AttributeError):
            bucko.NoSuchThing

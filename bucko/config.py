"""
Configuration module for Bucko.
"""

from typing import Dict, Optional
import os

from .__version__ import __version__
from .logging_setup import sanitize_headers

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


class Config:
    """
    Dispatcher configuration.

    Supports environment variables for easy configuration:
    - BUCKO_TIMEOUT: Request timeout in seconds (default: 30)
    - BUCKO_VERIFY_SSL: Verify TLS certificates (default: true)
    - BUCKO_MAX_WORKERS: Worker threads for the threaded client (default: 8)
    - BUCKO_MAX_RETRIES: Retries handed to urllib3 (default: 0)
    - BUCKO_LOG_REQUESTS: Log outgoing request descriptions (default: true)
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        verify_ssl: Optional[bool] = None,
        max_workers: Optional[int] = None,
        max_retries: Optional[int] = None,
        default_headers: Optional[Dict[str, str]] = None,
        log_requests: Optional[bool] = None,
    ):
        """
        Initialize configuration.

        Args:
            timeout: Request timeout in seconds
            verify_ssl: Whether TLS certificates are verified
            max_workers: Size of the threaded client's worker pool
            max_retries: Retry count passed through to urllib3
            default_headers: Headers sent with every request; endpoint
                headers take precedence
            log_requests: Log a description of every outgoing request
        """
        self.timeout = (
            timeout if timeout is not None else _env_number("BUCKO_TIMEOUT", 30.0, float)
        )
        self.verify_ssl = (
            verify_ssl if verify_ssl is not None else _env_bool("BUCKO_VERIFY_SSL", True)
        )
        self.max_workers = (
            max_workers
            if max_workers is not None
            else _env_number("BUCKO_MAX_WORKERS", 8, int)
        )
        self.max_retries = (
            max_retries
            if max_retries is not None
            else _env_number("BUCKO_MAX_RETRIES", 0, int)
        )
        self.log_requests = (
            log_requests
            if log_requests is not None
            else _env_bool("BUCKO_LOG_REQUESTS", True)
        )
        self.default_headers = {"User-Agent": f"Bucko-Python/{__version__}"}
        if default_headers:
            self.default_headers.update(default_headers)

        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")

        if self.max_retries < 0:
            raise ValueError("max_retries cannot be negative")

    def __repr__(self) -> str:
        return (
            f"Config(timeout={self.timeout!r}, "
            f"verify_ssl={self.verify_ssl!r}, "
            f"max_workers={self.max_workers!r}, "
            f"max_retries={self.max_retries!r}, "
            f"default_headers={sanitize_headers(self.default_headers)!r})"
        )

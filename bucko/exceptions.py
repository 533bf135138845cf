"""
Exception classes for Bucko.

None of these are raised from ``Bucko.request``; they are delivered through
``Response.error`` and to the registered error delegate.
"""

from typing import Any, Optional


class BuckoError(Exception):
    """Base exception for all Bucko errors."""

    pass


class RequestConstructionError(BuckoError):
    """
    Request construction error.

    Raised when the underlying client cannot build the outgoing request,
    e.g. a malformed URL or unencodable parameters.
    """

    pass


class NetworkError(BuckoError):
    """
    Network connectivity error.

    Raised when the transport fails (connection refused, TLS failure, ...).
    """

    pass


class TimeoutError(NetworkError):
    """
    Request timeout error.

    Raised when requests timeout.
    """

    pass


class RequestCancelledError(BuckoError):
    """Raised when a request handle is cancelled before it completes."""

    pass


class ResponseValidationError(BuckoError):
    """
    Response validation error.

    Raised when the status code or content type is outside the acceptable
    range.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        payload: Optional[Any] = None,
    ):
        """
        Initialize validation error.

        Args:
            message: Error message
            status_code: HTTP status code
            payload: Best-effort JSON payload of the response body
        """
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

    def __repr__(self) -> str:
        return (
            f"ResponseValidationError(message={self.args[0]!r}, "
            f"status_code={self.status_code})"
        )


class ResponseSerializationError(BuckoError):
    """
    Response serialization error.

    Raised when the response body cannot be decoded as JSON.
    """

    pass

"""
Bucko

Endpoint-based request builder and dispatcher on top of requests and aiohttp.
"""

import warnings

from .__version__ import __version__
from .config import Config
from .endpoint import Endpoint, HTTPMethod, ParameterEncoding
from .client import Bucko, ResponseClosure
from .async_client import AsyncBucko
from .delegate import ErrorHandler
from .request import DataRequest
from .response import Response, Result
from .exceptions import (
    BuckoError,
    NetworkError,
    RequestCancelledError,
    RequestConstructionError,
    ResponseSerializationError,
    ResponseValidationError,
    TimeoutError,
)
from .logging_setup import setup_structured_logger

__all__ = [
    "Config",
    "Endpoint",
    "HTTPMethod",
    "ParameterEncoding",
    "Bucko",
    "AsyncBucko",
    "ResponseClosure",
    "ErrorHandler",
    "DataRequest",
    "Response",
    "Result",
    "BuckoError",
    "NetworkError",
    "RequestCancelledError",
    "RequestConstructionError",
    "ResponseSerializationError",
    "ResponseValidationError",
    "TimeoutError",
    "setup_structured_logger",
    "__version__",
]

# Old public names, kept importable for existing callers.
_DEPRECATED_ALIASES = {
    "HttpMethod": ("HTTPMethod", lambda: HTTPMethod),
    "HttpHeaders": ("dict", lambda: dict),
    "Encoding": ("ParameterEncoding", lambda: ParameterEncoding),
    "UrlEncoding": ("ParameterEncoding.URL", lambda: ParameterEncoding.URL),
    "JsonEncoding": ("ParameterEncoding.JSON", lambda: ParameterEncoding.JSON),
    "Body": ("dict", lambda: dict),
    "Json": ("Response.json", lambda: dict),
}


def __getattr__(name):
    if name in _DEPRECATED_ALIASES:
        replacement, resolve = _DEPRECATED_ALIASES[name]
        warnings.warn(
            f"bucko.{name} is deprecated, use {replacement} instead",
            DeprecationWarning,
            stacklevel=2,
        )
        return resolve()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

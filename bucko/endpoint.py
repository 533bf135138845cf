"""
Endpoint descriptors.

An ``Endpoint`` describes one API call: where it goes, how it is sent and
what it carries. Applications usually expose their routes as small factory
functions or classmethods returning endpoints::

    API = "https://api.example.com"

    def get_user(user_id: str) -> Endpoint:
        return Endpoint(API, f"/users/{user_id}")

    def create_user(name: str) -> Endpoint:
        return Endpoint(API, "/users", method="POST", parameters={"name": name})
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from requests.structures import CaseInsensitiveDict


class HTTPMethod(str, Enum):
    """HTTP request methods."""

    OPTIONS = "OPTIONS"
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    TRACE = "TRACE"
    CONNECT = "CONNECT"

    def __str__(self) -> str:
        return self.value


class ParameterEncoding(str, Enum):
    """
    How an endpoint's parameters are attached to the request.

    ``URL`` puts them in the query string for GET, HEAD and DELETE and in a
    form-urlencoded body otherwise. ``QUERY_STRING`` and ``HTTP_BODY`` pin the
    destination regardless of method. ``JSON`` sends them as a JSON body.
    """

    URL = "url"
    QUERY_STRING = "query_string"
    HTTP_BODY = "http_body"
    JSON = "json"

    def __str__(self) -> str:
        return self.value


_QUERY_METHODS = frozenset({HTTPMethod.GET, HTTPMethod.HEAD, HTTPMethod.DELETE})
_JSON_METHODS = frozenset({HTTPMethod.POST, HTTPMethod.PUT, HTTPMethod.PATCH})


def default_encoding(method: HTTPMethod) -> ParameterEncoding:
    """Encoding used when an endpoint does not name one."""
    if method in _JSON_METHODS:
        return ParameterEncoding.JSON
    return ParameterEncoding.URL


def encodes_in_query(method: HTTPMethod, encoding: ParameterEncoding) -> bool:
    """True when ``encoding`` places parameters in the URL for ``method``."""
    if encoding is ParameterEncoding.QUERY_STRING:
        return True
    if encoding is ParameterEncoding.URL:
        return method in _QUERY_METHODS
    return False


@dataclass(frozen=True)
class Endpoint:
    """
    Immutable description of a single HTTP call.

    Args:
        base_url: Scheme and host, optionally with a path prefix
        path: Route appended verbatim to ``base_url``
        method: HTTP method; strings are accepted and coerced
        parameters: Request parameters, encoded according to ``encoding``
        headers: Request headers; lookups are case-insensitive
        encoding: Parameter encoding; derived from ``method`` when omitted

    Nothing is validated here. A malformed URL or parameter surfaces as a
    request error once the endpoint is sent.
    """

    base_url: str
    path: str = ""
    method: HTTPMethod = HTTPMethod.GET
    parameters: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    encoding: Optional[ParameterEncoding] = None

    def __post_init__(self) -> None:
        method = HTTPMethod(str(self.method).upper())
        encoding = (
            ParameterEncoding(self.encoding)
            if self.encoding is not None
            else default_encoding(method)
        )
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "encoding", encoding)
        object.__setattr__(
            self, "parameters", MappingProxyType(dict(self.parameters or {}))
        )
        object.__setattr__(
            self, "headers", MappingProxyType(CaseInsensitiveDict(self.headers or {}))
        )

    def __hash__(self) -> int:
        return hash((self.base_url, self.path, self.method, self.encoding))

    @property
    def full_url(self) -> str:
        """``base_url`` followed by ``path``."""
        return self.base_url + self.path

    def replace(self, **changes: Any) -> "Endpoint":
        """
        Return a copy with ``changes`` applied.

        Changing ``method`` re-derives the encoding unless one is given.
        """
        if "method" in changes and "encoding" not in changes:
            changes["encoding"] = None
        return dataclasses.replace(self, **changes)

    def with_path(self, path: str) -> "Endpoint":
        return self.replace(path=path)

    def __repr__(self) -> str:
        return f"Endpoint({self.method.value} {self.full_url})"


"""
Response objects handed to completion callbacks.
"""

from typing import Any, Mapping, NamedTuple, Optional
import json

import requests
from requests.structures import CaseInsensitiveDict


class RawResponse(NamedTuple):
    """What an HTTP adapter produces for a completed exchange."""

    status_code: int
    headers: Mapping[str, str]
    data: bytes
    raw: Any = None


class Result:
    """
    Outcome of a request: a value on success, an error on failure.

    ``value`` may legitimately be None on success (e.g. a 204 response).
    """

    __slots__ = ("value", "error")

    def __init__(self, value: Any = None, error: Optional[BaseException] = None):
        self.value = value
        self.error = error

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    @property
    def description(self) -> str:
        if self.is_success:
            return f"SUCCESS: {self.value!r}"
        return f"FAILURE: {self.error!r}"

    def __repr__(self) -> str:
        return f"Result({self.description})"


class Response:
    """
    A completed request as seen by the caller.

    Attributes:
        request: The prepared outgoing request, None if it could not be built
        response: The underlying library's response object, if any
        status_code: HTTP status code, None when no response arrived
        headers: Response headers (case-insensitive)
        data: Raw response body
        result: Serialized ``Result``
    """

    def __init__(
        self,
        request: Optional[requests.PreparedRequest],
        result: Result,
        raw: Optional[RawResponse] = None,
    ):
        self.request = request
        self.result = result
        self.response = raw.raw if raw is not None else None
        self.status_code = raw.status_code if raw is not None else None
        self.headers = CaseInsensitiveDict(raw.headers if raw is not None else {})
        self.data = raw.data if raw is not None else None

    @property
    def is_success(self) -> bool:
        return self.result.is_success

    @property
    def value(self) -> Any:
        return self.result.value

    @property
    def error(self) -> Optional[BaseException]:
        return self.result.error

    @property
    def json(self) -> Any:
        """Parsed JSON body on success, None on failure."""
        return self.result.value if self.result.is_success else None

    @property
    def server_error(self) -> Any:
        """
        Best-effort JSON view of the body, typically the error payload of a
        failed request. None when there is no body or it is not JSON.
        """
        return parse_json_or_none(self.data)

    @property
    def description(self) -> str:
        method = self.request.method if self.request is not None else "?"
        url = self.request.url if self.request is not None else "?"
        status = self.status_code if self.status_code is not None else "-"
        return f"{method} {url} ({status}) {self.result.description}"

    def __repr__(self) -> str:
        return f"<Response {self.description}>"


def parse_json_or_none(data: Optional[bytes]) -> Any:
    if not data:
        return None
    try:
        return json.loads(data)
    except (ValueError, UnicodeDecodeError):
        return None

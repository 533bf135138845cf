"""
Base HTTP adapter interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

import requests

from ..endpoint import HTTPMethod, ParameterEncoding, encodes_in_query
from ..exceptions import RequestConstructionError
from ..request import DataRequest
from ..utils.query import encode_parameters


def build_request(
    method: HTTPMethod,
    url: str,
    parameters: Optional[Mapping[str, Any]],
    encoding: ParameterEncoding,
    headers: Optional[Mapping[str, str]],
) -> requests.Request:
    """
    Map endpoint fields onto an unprepared ``requests.Request``.

    Args:
        method: HTTP method
        url: Full request URL
        parameters: Request parameters
        encoding: Where and how the parameters are encoded
        headers: Request headers

    Returns:
        Request ready to be prepared by a session
    """
    kwargs: dict = {}

    if parameters:
        if encoding is ParameterEncoding.JSON:
            kwargs["json"] = dict(parameters)
        elif encodes_in_query(method, encoding):
            kwargs["params"] = encode_parameters(parameters)
        else:
            kwargs["data"] = encode_parameters(parameters)

    return requests.Request(
        method=method.value,
        url=url,
        headers=dict(headers or {}),
        **kwargs,
    )


def prepare_request(
    request: requests.Request,
    session: Optional[requests.Session] = None,
) -> requests.PreparedRequest:
    """
    Prepare ``request``, merging ``session`` defaults when given.

    Raises:
        RequestConstructionError: If the URL, headers or body cannot be encoded
    """
    try:
        if session is not None:
            return session.prepare_request(request)
        return request.prepare()
    except (requests.exceptions.RequestException, ValueError, TypeError) as e:
        raise RequestConstructionError(f"Could not build request: {e}") from e


def describe(method: str, url: str) -> str:
    return f"{method} {url}"


class HTTPAdapter(ABC):
    """
    Abstract base class for HTTP adapters.

    An adapter owns the underlying client (session, worker pool, TLS
    settings) and turns endpoint fields into an in-flight request handle.
    """

    @abstractmethod
    def perform(
        self,
        method: HTTPMethod,
        url: str,
        parameters: Optional[Mapping[str, Any]] = None,
        encoding: ParameterEncoding = ParameterEncoding.URL,
        headers: Optional[Mapping[str, str]] = None,
    ) -> DataRequest:
        """
        Issue a request without blocking.

        Args:
            method: HTTP method
            url: Request URL
            parameters: Request parameters
            encoding: Parameter encoding
            headers: Request headers

        Returns:
            In-flight request handle. Construction and transport errors are
            delivered through the handle, never raised.
        """
        raise NotImplementedError

    def close(self) -> None:
        """Release the underlying client."""

    def __enter__(self) -> "HTTPAdapter":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


"""
Pytest configuration and fixtures
"""

from concurrent.futures import Future
from typing import Any, Dict, Mapping, Optional

import pytest

from bucko import Bucko, Config, Endpoint, ErrorHandler
from bucko.endpoint import HTTPMethod, ParameterEncoding
from bucko.exceptions import RequestConstructionError
from bucko.http.adapter import HTTPAdapter, build_request, describe, prepare_request
from bucko.request import DataRequest
from bucko.response import RawResponse

API = "https://api.example.com"


class DummyAdapter(HTTPAdapter):
    """Mock HTTP adapter that answers every request immediately."""

    def __init__(self):
        self.last_request = None
        self.response_status = 200
        self.response_data = b'{"id":"user_1","name":"Ada"}'
        self.response_headers: Dict[str, str] = {"Content-Type": "application/json"}
        self.error: Optional[BaseException] = None
        self.pending = False
        self.closed = False

    def perform(
        self,
        method: HTTPMethod,
        url: str,
        parameters: Optional[Mapping[str, Any]] = None,
        encoding: ParameterEncoding = ParameterEncoding.URL,
        headers: Optional[Mapping[str, str]] = None,
    ) -> DataRequest:
        """Mock perform method."""
        future: Future = Future()
        try:
            prepared = prepare_request(build_request(method, url, parameters, encoding, headers))
        except RequestConstructionError as e:
            future.set_exception(e)
            return DataRequest(None, future, describe(method.value, url))

        self.last_request = prepared
        if self.error is not None:
            future.set_exception(self.error)
        elif not self.pending:
            future.set_result(
                RawResponse(self.response_status, self.response_headers, self.response_data)
            )
        return DataRequest(prepared, future, describe(prepared.method, prepared.url))

    def close(self) -> None:
        self.closed = True


class RecordingHandler(ErrorHandler):
    """Error delegate that remembers what it was told."""

    def __init__(self):
        self.calls = []

    def bucko_request(self, request, error):
        self.calls.append((request, error))


@pytest.fixture
def adapter():
    return DummyAdapter()


@pytest.fixture
def bucko(adapter):
    return Bucko(Config(), manager=adapter)


@pytest.fixture
def user_endpoint():
    return Endpoint(API, "/users/1")


@pytest.fixture(autouse=True)
def reset_shared():
    yield
    Bucko.set_shared(None)

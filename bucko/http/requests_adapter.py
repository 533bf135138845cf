"""
Requests-based HTTP adapter (threaded).
"""

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Mapping, Optional

import requests
from requests.adapters import HTTPAdapter as RequestsHTTPAdapter
from urllib3.util.retry import Retry

from ..config import Config
from ..endpoint import HTTPMethod, ParameterEncoding
from ..exceptions import (
    NetworkError,
    RequestConstructionError,
    TimeoutError as BuckoTimeoutError,
)
from ..request import DataRequest
from ..response import RawResponse
from .adapter import HTTPAdapter, build_request, describe, prepare_request


class RequestsAdapter(HTTPAdapter):
    """
    HTTP adapter using the requests library.

    Requests are sent on a thread pool; ``perform`` returns immediately.

    Features:
    - Connection pooling via one shared session
    - Configurable timeouts and TLS verification
    - urllib3 retries when ``max_retries`` is set
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        executor: Optional[ThreadPoolExecutor] = None,
        max_workers: int = 8,
        max_retries: int = 0,
        timeout: float = 30.0,
        verify_ssl: bool = True,
        default_headers: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize requests adapter.

        Args:
            session: Optional requests.Session instance
            executor: Optional executor the requests are sent on
            max_workers: Worker threads when no executor is given
            max_retries: Retry count handed to urllib3
            timeout: Request timeout in seconds
            verify_ssl: Verify TLS certificates. When True the session's own
                ``verify`` (e.g. a pinned CA bundle) is used as-is
            default_headers: Headers merged into every request
        """
        self.session = session or requests.Session()
        self.executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="bucko"
        )
        self.timeout = timeout
        self.verify_ssl = verify_ssl

        if not verify_ssl:
            self.session.verify = False

        if default_headers:
            self.session.headers.update(default_headers)

        if max_retries:
            retry_strategy = Retry(
                total=max_retries,
                backoff_factor=0.5,
                status_forcelist=[429, 500, 502, 503, 504],
                allowed_methods=None,
            )
            adapter = RequestsHTTPAdapter(max_retries=retry_strategy)
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    @classmethod
    def from_config(cls, config: Config) -> "RequestsAdapter":
        return cls(
            max_workers=config.max_workers,
            max_retries=config.max_retries,
            timeout=config.timeout,
            verify_ssl=config.verify_ssl,
            default_headers=config.default_headers,
        )

    def perform(
        self,
        method: HTTPMethod,
        url: str,
        parameters: Optional[Mapping[str, Any]] = None,
        encoding: ParameterEncoding = ParameterEncoding.URL,
        headers: Optional[Mapping[str, str]] = None,
    ) -> DataRequest:
        request = build_request(method, url, parameters, encoding, headers)

        try:
            prepared = prepare_request(request, self.session)
        except RequestConstructionError as e:
            failed: Future = Future()
            failed.set_exception(e)
            return DataRequest(None, failed, describe(method.value, url))

        future = self.executor.submit(self._send, prepared)
        return DataRequest(prepared, future, describe(prepared.method, prepared.url))

    def _send(self, prepared: requests.PreparedRequest) -> RawResponse:
        """
        Send a prepared request. Runs on a worker thread.

        Raises:
            NetworkError: On network connectivity issues
            TimeoutError: On request timeout
        """
        settings = self.session.merge_environment_settings(
            prepared.url, {}, None, self.session.verify, None
        )

        try:
            response = self.session.send(prepared, timeout=self.timeout, **settings)

        except requests.exceptions.Timeout as e:
            raise BuckoTimeoutError(f"Request timed out: {e}") from e

        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Network request failed: {e}") from e

        return RawResponse(
            status_code=response.status_code,
            headers=response.headers,
            data=response.content,
            raw=response,
        )

    def close(self) -> None:
        """Shut down the worker pool and close the session."""
        self.executor.shutdown(wait=False)
        self.session.close()

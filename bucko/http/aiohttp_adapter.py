"""
Aiohttp-based HTTP adapter (asynchronous).
"""

import asyncio
from typing import Any, Mapping, Optional

import aiohttp
import requests
from yarl import URL

from ..config import Config
from ..endpoint import HTTPMethod, ParameterEncoding
from ..exceptions import NetworkError, TimeoutError as BuckoTimeoutError
from ..response import RawResponse
from .adapter import build_request, prepare_request


class AiohttpAdapter:
    """
    Asynchronous HTTP adapter using aiohttp library.

    Requests are encoded exactly like the threaded adapter (via requests'
    preparation) and sent through one ``aiohttp.ClientSession``.

    Features:
    - Non-blocking requests for async applications
    - Connection pooling
    - Configurable timeouts
    """

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = 30.0,
        verify_ssl: bool = True,
        default_headers: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize aiohttp adapter.

        Args:
            session: Optional aiohttp.ClientSession instance
            timeout: Request timeout in seconds
            verify_ssl: Verify TLS certificates
            default_headers: Headers merged under every request's headers
        """
        self._external_session = session is not None
        self.session = session
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.default_headers = dict(default_headers or {})

    @classmethod
    def from_config(cls, config: Config) -> "AiohttpAdapter":
        return cls(
            timeout=config.timeout,
            verify_ssl=config.verify_ssl,
            default_headers=config.default_headers,
        )

    async def __aenter__(self) -> "AiohttpAdapter":
        """Context manager entry."""
        if self.session is None:
            self.session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        await self.close()

    def prepare(
        self,
        method: HTTPMethod,
        url: str,
        parameters: Optional[Mapping[str, Any]] = None,
        encoding: ParameterEncoding = ParameterEncoding.URL,
        headers: Optional[Mapping[str, str]] = None,
    ) -> requests.PreparedRequest:
        """
        Build the outgoing request.

        Raises:
            RequestConstructionError: If the request cannot be encoded
        """
        merged = dict(self.default_headers)
        merged.update(headers or {})
        return prepare_request(build_request(method, url, parameters, encoding, merged))

    async def send(self, prepared: requests.PreparedRequest) -> RawResponse:
        """
        Send a prepared request using aiohttp library.

        Args:
            prepared: Request built by ``prepare``

        Returns:
            Status, headers and body of the response

        Raises:
            NetworkError: On network connectivity issues
            TimeoutError: On request timeout
        """
        if self.session is None:
            self.session = aiohttp.ClientSession()

        try:
            async with self.session.request(
                method=prepared.method,
                url=URL(prepared.url, encoded=True),
                headers=dict(prepared.headers),
                data=prepared.body,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                ssl=self.verify_ssl,
            ) as response:
                data = await response.read()
                return RawResponse(
                    status_code=response.status,
                    headers=dict(response.headers),
                    data=data,
                    raw=response,
                )

        except asyncio.TimeoutError as e:
            raise BuckoTimeoutError(f"Request timed out: {e}") from e

        except aiohttp.ClientError as e:
            raise NetworkError(f"Network request failed: {e}") from e

    async def close(self) -> None:
        """Close the session."""
        if not self._external_session and self.session:
            await self.session.close()
            self.session = None

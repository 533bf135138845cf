"""
Asynchronous request dispatcher.
"""

from typing import Any, Optional
import asyncio

import requests

from .client import BaseBucko, ResponseClosure
from .config import Config
from .delegate import ErrorHandler
from .endpoint import Endpoint
from .exceptions import BuckoError, RequestCancelledError
from .http.adapter import describe
from .http.aiohttp_adapter import AiohttpAdapter
from .response import Response, Result
from .serialization import run_validators, serialize_data, serialize_json, status_validator


class AsyncBucko(BaseBucko):
    """
    Sends ``Endpoint`` requests on the running asyncio event loop.

    ``request`` schedules the exchange as a task and returns it; await the
    task for the ``Response`` or cancel it. Completion callbacks and the
    delegate run on the event loop.

    Examples:
        >>> async def main():
        ...     async with AsyncBucko() as bucko:
        ...         response = await bucko.request(get_user("1"), print)
        ...         print(response.json)
        >>> asyncio.run(main())
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        manager: Optional[AiohttpAdapter] = None,
        delegate: Optional[ErrorHandler] = None,
    ):
        """
        Initialize async dispatcher.

        Args:
            config: Dispatcher configuration (default: from environment)
            manager: Optional custom aiohttp adapter
            delegate: Optional error handler, held weakly
        """
        super().__init__(config, delegate)
        self.manager = manager or AiohttpAdapter.from_config(self.config)

    async def __aenter__(self) -> "AsyncBucko":
        """Context manager entry."""
        await self.manager.__aenter__()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        await self.manager.__aexit__(exc_type, exc_val, exc_tb)

    def request(
        self,
        endpoint: Endpoint,
        completion: Optional[ResponseClosure] = None,
    ) -> "asyncio.Task[Response]":
        """
        Make an API request.

        Without ``completion`` the task resolves to a data response (no status
        validation). With ``completion`` the status is validated, the body is
        decoded as JSON and ``completion`` runs exactly once before the task
        resolves, including when the task is cancelled.

        Must be called while an event loop is running.

        Args:
            endpoint: The endpoint to use
            completion: Called with the response from the server

        Returns:
            Task resolving to the ``Response``
        """
        loop = asyncio.get_running_loop()

        try:
            prepared: Optional[requests.PreparedRequest] = self.manager.prepare(
                endpoint.method,
                endpoint.full_url,
                parameters=endpoint.parameters,
                encoding=endpoint.encoding,
                headers=endpoint.headers,
            )
        except BuckoError as e:
            prepared, error = None, e
            self._log_request(endpoint.method.value, endpoint.full_url)
        else:
            error = None
            self._log_request(prepared.method, prepared.url)

        task = loop.create_task(self._run(prepared, error, completion))
        if completion is not None:
            task.add_done_callback(
                lambda done: self._finish_cancelled(done, prepared, completion)
            )
        return task

    async def _run(
        self,
        prepared: Optional[requests.PreparedRequest],
        error: Optional[BaseException],
        completion: Optional[ResponseClosure],
    ) -> Response:
        if prepared is None:
            response = Response(None, Result(error=error))
        else:
            response = await self._exchange(prepared, validate=completion is not None)

        if completion is not None:
            self._finish(completion, response)
        return response

    def _finish_cancelled(
        self,
        task: "asyncio.Task[Response]",
        prepared: Optional[requests.PreparedRequest],
        completion: ResponseClosure,
    ) -> None:
        # Covers tasks cancelled before their first step as well as mid-exchange
        if not task.cancelled():
            return
        description = (
            describe(prepared.method, prepared.url) if prepared is not None else "request"
        )
        cancelled = RequestCancelledError(f"Request was cancelled: {description}")
        self._finish(completion, Response(prepared, Result(error=cancelled)))

    async def _exchange(self, prepared: requests.PreparedRequest, validate: bool) -> Response:
        try:
            raw = await self.manager.send(prepared)
        except BuckoError as e:
            return Response(prepared, Result(error=e))

        if not validate:
            return Response(prepared, serialize_data(raw), raw)

        validation_error = run_validators(raw, [status_validator()])
        if validation_error is not None:
            return Response(prepared, Result(error=validation_error), raw)

        return Response(prepared, serialize_json(raw), raw)

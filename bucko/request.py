"""
In-flight request handles for the threaded client.
"""

from concurrent.futures import Future, wait as wait_futures
from typing import Callable, Container, List, Optional, Sequence

import requests

from .exceptions import RequestCancelledError
from .response import Response, Result
from .serialization import (
    ACCEPTABLE_STATUS,
    Serializer,
    Validator,
    content_type_validator,
    run_validators,
    serialize_data,
    serialize_json,
    status_validator,
)

ResponseCallback = Callable[[Response], None]


class DataRequest:
    """
    Handle for a request running on the adapter's worker pool.

    Response callbacks are attached with ``response_data`` or
    ``response_json``. Each callback runs exactly once: on the worker thread
    that finished the request, or immediately on the calling thread when the
    request had already finished.

    Examples:
        >>> handle = bucko.request(get_user("1"))
        >>> handle.validate().response_json(lambda response: print(response.json))
    """

    def __init__(
        self,
        request: Optional[requests.PreparedRequest],
        future: Future,
        description: str,
    ):
        self.request = request
        self.future = future
        self.description = description
        self._validators: List[Validator] = []

    def validate(
        self,
        acceptable_status: Container[int] = ACCEPTABLE_STATUS,
        acceptable_content_types: Optional[Sequence[str]] = None,
    ) -> "DataRequest":
        """
        Fail responses whose status (and optionally content type) is not
        acceptable. Applies to callbacks attached after this call.
        """
        self._validators.append(status_validator(acceptable_status))
        if acceptable_content_types is not None:
            self._validators.append(content_type_validator(acceptable_content_types))
        return self

    def response_data(self, callback: ResponseCallback) -> "DataRequest":
        """Deliver the raw body bytes as ``response.value``."""
        return self._response(serialize_data, callback)

    def response_json(self, callback: ResponseCallback) -> "DataRequest":
        """Deliver the decoded JSON body as ``response.value``."""
        return self._response(serialize_json, callback)

    def _response(self, serializer: Serializer, callback: ResponseCallback) -> "DataRequest":
        # Validators registered after this callback do not apply to it
        validators = list(self._validators)

        def on_done(future: Future) -> None:
            callback(self._build_response(future, serializer, validators))

        self.future.add_done_callback(on_done)
        return self

    def _build_response(
        self, future: Future, serializer: Serializer, validators: List[Validator]
    ) -> Response:
        if future.cancelled():
            error = RequestCancelledError(f"Request was cancelled: {self.description}")
            return Response(self.request, Result(error=error))

        error = future.exception()
        if error is not None:
            return Response(self.request, Result(error=error))

        raw = future.result()
        validation_error = run_validators(raw, validators)
        if validation_error is not None:
            return Response(self.request, Result(error=validation_error), raw)

        return Response(self.request, serializer(raw), raw)

    def cancel(self) -> bool:
        """
        Cancel the request if it has not started yet.

        Returns:
            True if it was cancelled; callbacks then receive a
            ``RequestCancelledError``
        """
        return self.future.cancel()

    @property
    def cancelled(self) -> bool:
        return self.future.cancelled()

    @property
    def done(self) -> bool:
        return self.future.done()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the transport finishes.

        Callbacks may still be running when this returns.
        """
        finished, _ = wait_futures([self.future], timeout=timeout)
        return bool(finished)

    def __repr__(self) -> str:
        return f"<DataRequest {self.description}>"

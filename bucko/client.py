"""
Threaded request dispatcher.
"""

from typing import Callable, Optional
import logging
import weakref

from .config import Config
from .delegate import ErrorHandler
from .endpoint import Endpoint
from .http.adapter import HTTPAdapter, describe
from .http.requests_adapter import RequestsAdapter
from .request import DataRequest
from .response import Response

logger = logging.getLogger("bucko")

ResponseClosure = Callable[[Response], None]


class BaseBucko:
    """
    Delegate bookkeeping and response routing shared by the dispatchers.
    """

    config: Config

    def __init__(self, config: Optional[Config] = None, delegate: Optional[ErrorHandler] = None):
        self.config = config or Config()
        self._delegate_ref: Optional[weakref.ReferenceType] = None
        self.delegate = delegate

    @property
    def delegate(self) -> Optional[ErrorHandler]:
        """Error handler, held weakly. None once the application drops it."""
        if self._delegate_ref is None:
            return None
        return self._delegate_ref()

    @delegate.setter
    def delegate(self, handler: Optional[ErrorHandler]) -> None:
        self._delegate_ref = weakref.ref(handler) if handler is not None else None

    def _log_request(self, method: str, url: str) -> None:
        if self.config.log_requests:
            logger.info(describe(method, url), extra={"method": method, "url": url})

    def _finish(self, completion: ResponseClosure, response: Response) -> None:
        if response.is_success:
            logger.debug(response.result.description)
        else:
            logger.warning(
                "Request failed: %r",
                response.error,
                extra={"status_code": response.status_code},
            )
            logger.warning("Server error: %r", response.server_error)
            if response.request is not None and response.error is not None:
                self._notify_delegate(response)

        completion(response)

    def _notify_delegate(self, response: Response) -> None:
        delegate = self.delegate
        if delegate is None:
            return
        try:
            delegate.bucko_request(response.request, response.error)
        except Exception:
            logger.exception("Error delegate raised while handling %s", response.description)


class Bucko(BaseBucko):
    """
    Sends ``Endpoint`` requests through a shared HTTP adapter.

    Most applications use the process-wide default from ``Bucko.shared()``;
    construct instances directly to inject a different configuration or
    adapter.

    The adapter (``manager``) can be replaced before requests start flowing,
    e.g. to pin certificates or add default headers:

        >>> session = requests.Session()
        >>> session.verify = "/etc/ssl/internal-ca.pem"
        >>> Bucko.shared().manager = RequestsAdapter(session=session)

    Examples:
        >>> def on_user(response):
        ...     if response.is_success:
        ...         print(response.json["name"])
        ...     else:
        ...         print(response.server_error)
        >>> Bucko.shared().request(get_user("1"), on_user)
    """

    _shared: Optional["Bucko"] = None

    def __init__(
        self,
        config: Optional[Config] = None,
        manager: Optional[HTTPAdapter] = None,
        delegate: Optional[ErrorHandler] = None,
    ):
        """
        Initialize dispatcher.

        Args:
            config: Dispatcher configuration (default: from environment)
            manager: Optional custom HTTP adapter
            delegate: Optional error handler, held weakly
        """
        super().__init__(config, delegate)
        self.manager = manager or RequestsAdapter.from_config(self.config)

    @classmethod
    def shared(cls) -> "Bucko":
        """The default dispatcher, created on first use."""
        if cls._shared is None:
            cls._shared = cls()
        return cls._shared

    @classmethod
    def set_shared(cls, instance: Optional["Bucko"]) -> None:
        """Replace the default dispatcher; None resets it."""
        cls._shared = instance

    def request(
        self,
        endpoint: Endpoint,
        completion: Optional[ResponseClosure] = None,
    ) -> DataRequest:
        """
        Make an API request.

        Without ``completion`` the handle is returned as-is; attach your own
        response callback to it:

            >>> handle = Bucko.shared().request(get_user("1"))
            >>> handle.response_data(lambda response: print(response.data))

        With ``completion`` the status is validated (200-299), the body is
        decoded as JSON and ``completion`` is called exactly once with the
        ``Response``, success or failure. Failures are also reported to the
        delegate.

        Args:
            endpoint: The endpoint to use
            completion: Called with the response from the server

        Returns:
            The request that was made. Nothing is raised here; errors arrive
            through the response.
        """
        handle = self.manager.perform(
            endpoint.method,
            endpoint.full_url,
            parameters=endpoint.parameters,
            encoding=endpoint.encoding,
            headers=endpoint.headers,
        )
        if handle.request is not None:
            self._log_request(handle.request.method, handle.request.url)
        else:
            self._log_request(endpoint.method.value, endpoint.full_url)

        if completion is None:
            return handle

        return handle.validate().response_json(
            lambda response: self._finish(completion, response)
        )

    def close(self) -> None:
        self.manager.close()

    def __enter__(self) -> "Bucko":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

"""
Error delegate interface.
"""

from abc import ABC, abstractmethod

import requests


class ErrorHandler(ABC):
    """
    Observer notified when a request sent with a completion callback fails.

    Register one on a dispatcher to handle errors globally (e.g. sign the user
    out on every 401). The dispatcher holds it weakly, so the application
    must keep its own reference.

    Examples:
        >>> class SessionExpiry(ErrorHandler):
        ...     def bucko_request(self, request, error):
        ...         if getattr(error, "status_code", None) == 401:
        ...             auth.sign_out()
        >>> handler = SessionExpiry()
        >>> bucko.delegate = handler
    """

    @abstractmethod
    def bucko_request(self, request: requests.PreparedRequest, error: BaseException) -> None:
        """
        Called with the outgoing request and the error it failed with.

        Args:
            request: The prepared request that failed
            error: Transport, validation or serialization error
        """
        raise NotImplementedError

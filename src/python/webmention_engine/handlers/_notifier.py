import logging
from urllib.parse import urlencode, urljoin

from .._constants import FORM_CONTENT_TYPE
from .._exceptions import ProtocolViolationError
from .._http import HttpClient
from .._model import NotificationOutcome

logger = logging.getLogger(__name__)


class NotificationDispatcher:  # pylint: disable=too-few-public-methods
    """
    Sends Webmention notifications to a discovered endpoint.

    :param http: The HTTP client used to post the notifications
    """

    def __init__(self, http: HttpClient):
        self.http = http

    @staticmethod
    def encode_body(source: str, target: str) -> bytes:
        """
        Encode the ``source`` and ``target`` form fields, in this order.
        """
        return urlencode(
            [("source", source), ("target", target)], encoding="utf-8"
        ).encode("ascii")

    def notify(self, endpoint: str, source: str, target: str) -> NotificationOutcome:
        """
        Notify ``endpoint`` that ``source`` mentions ``target``.

        The endpoint URL is used as-is: its query string, if any, stays on
        the request line and is never merged into the body.

        :param endpoint: The Webmention endpoint URL
        :param source: The source URL
        :param target: The target URL
        :raises TransportError: If the endpoint can't be reached
        :raises ProtocolViolationError: If the endpoint replies with a
            non-2xx status
        """
        response = self.http.post(
            endpoint,
            data=self.encode_body(source, target),
            headers={"Content-Type": f"{FORM_CONTENT_TYPE}; charset=UTF-8"},
        )

        if not response.is_success:
            logger.info(
                "Webmention endpoint %s rejected <source=%s target=%s>: %d %s",
                endpoint,
                source,
                target,
                response.status_code,
                response.reason,
            )
            raise ProtocolViolationError(response.status_code, response.reason)

        monitor_location = None
        if response.status_code == 201:
            location = response.headers.get("Location")
            if location:
                monitor_location = urljoin(response.url or endpoint, location.strip())

        logger.info(
            "Webmention <source=%s target=%s> accepted by %s (%d)",
            source,
            target,
            endpoint,
            response.status_code,
        )

        return NotificationOutcome(
            accepted=True,
            status_code=response.status_code,
            monitor_location=monitor_location,
        )

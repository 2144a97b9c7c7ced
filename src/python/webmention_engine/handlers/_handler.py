import logging
from typing import Callable

import requests

from .._constants import DEFAULT_HTTP_TIMEOUT, DEFAULT_USER_AGENT
from .._exceptions import (
    EndpointNotFoundError,
    VerificationFailedError,
    WebmentionException,
)
from .._http import HttpClient
from .._model import DiscoveryResult, NotificationOutcome, Webmention
from ..verifiers import Verifier, VerifierRegistry
from ._discovery import EndpointDiscoveryEngine
from ._notifier import NotificationDispatcher
from ._parser import WebmentionsRequestParser
from ._verification import VerificationEngine

logger = logging.getLogger(__name__)


class WebmentionsHandler:
    """
    Webmentions handler.

    It exposes both sides of the protocol: sending Webmentions (endpoint
    discovery + notification) and receiving them (validation +
    verification).

    :param base_url: The base URL of the server, used to validate target URLs
        of incoming Webmentions
    :param http_timeout: The HTTP timeout for outbound requests
    :param user_agent: The User-Agent header to use for outbound requests
        (ignored if ``session`` is specified)
    :param session: A preconfigured ``requests`` session. It should follow
        redirects.
    :param verifiers: The verifiers used to check incoming Webmentions, in
        order of preference. Defaults to HTML, plain text and JSON.
    :param on_mention_received: A callback invoked with each incoming
        Webmention that passed verification
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        http_timeout: float = DEFAULT_HTTP_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        session: requests.Session | None = None,
        verifiers: VerifierRegistry | list[Verifier] | None = None,
        on_mention_received: Callable[[Webmention], None] | None = None,
        **kwargs,
    ):
        if verifiers is not None and not isinstance(verifiers, VerifierRegistry):
            verifiers = VerifierRegistry(verifiers)

        self.http = HttpClient(session, http_timeout=http_timeout, user_agent=user_agent)
        self.parser = WebmentionsRequestParser(base_url=base_url, **kwargs)
        self.discovery = EndpointDiscoveryEngine(self.http)
        self.notifier = NotificationDispatcher(self.http)
        self.verification = VerificationEngine(self.http, verifiers)
        self._on_mention_received = on_mention_received

    def discover_endpoint(self, target: str) -> DiscoveryResult:
        """
        Discover the Webmention endpoint advertised by a target.

        :param target: The target URL
        """
        return self.discovery.discover(target)

    def send_webmention(self, source: str, target: str) -> NotificationOutcome:
        """
        Notify a target that it was mentioned by a source.

        :param source: The URL of the page that mentions the target
        :param target: The URL of the mentioned page
        :raises EndpointNotFoundError: If the target advertises no endpoint
        """
        mention = WebmentionsRequestParser().parse(source, target)
        result = self.discover_endpoint(mention.target)
        if result.endpoint is None:
            raise EndpointNotFoundError(
                mention.source,
                mention.target,
                f"Could not find any Webmention endpoint for {mention.target}",
            )

        return self.notifier.notify(result.endpoint, mention.source, mention.target)

    def process_incoming_webmention(
        self, source_url: str | None, target_url: str | None
    ) -> Webmention:
        """
        Process an incoming Webmention.

        :param source_url: The source URL of the Webmention
        :param target_url: The target URL of the Webmention
        :return: The accepted Webmention
        :raises WebmentionException: If the Webmention is rejected
        """
        try:
            mention = self.parser.parse(source_url, target_url)
            if not self.verification.verify(mention.source, mention.target):
                raise VerificationFailedError(
                    mention.source,
                    mention.target,
                    "Source does not contain a link to the target URL",
                )
        except WebmentionException as e:
            logger.warning(
                "Rejected Webmention <source=%s target=%s>: %s",
                source_url,
                target_url,
                e,
            )
            raise

        logger.info(
            "Accepted Webmention <source=%s target=%s>", mention.source, mention.target
        )
        self._notify_mention_received(mention)
        return mention

    def _notify_mention_received(self, mention: Webmention):
        # Callback failures are logged, the mention stays accepted
        if not self._on_mention_received:
            return

        try:
            self._on_mention_received(mention)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error(
                "Error on mention received callback %s: <source=%s target=%s>: %s",
                self._on_mention_received,
                mention.source,
                mention.target,
                str(e),
            )

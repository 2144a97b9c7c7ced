import logging

from .._constants import WEBMENTION_REL
from .._http import HttpClient
from .._model import DiscoveryResult
from ..links import HeaderLinkParser, LinkExtractor, is_html

logger = logging.getLogger(__name__)


class EndpointDiscoveryEngine:  # pylint: disable=too-few-public-methods
    """
    Discovers the Webmention endpoint advertised by a target URL.

    The target is fetched exactly once, then the signals are checked in
    this order, and the first match wins:

        1. The first ``Link`` header with ``rel="webmention"``
        2. If the response is HTML, the first ``<link>`` or ``<a>`` element
           with ``rel="webmention"``, in document order

    Relative endpoints are resolved against the effective URL of the
    response.

    :param http: The HTTP client used to fetch the target
    :param header_parser: Parser for ``Link`` headers
    :param link_extractor: Extractor for HTML link elements
    """

    def __init__(
        self,
        http: HttpClient,
        *,
        header_parser: HeaderLinkParser | None = None,
        link_extractor: LinkExtractor | None = None,
    ):
        self.http = http
        self.header_parser = header_parser or HeaderLinkParser()
        self.link_extractor = link_extractor or LinkExtractor()

    def discover(self, target: str) -> DiscoveryResult:
        """
        Discover the Webmention endpoint of a target.

        :param target: The target URL
        :raises TransportError: If the target can't be fetched
        :raises ParseError: If the target is HTML but can't be parsed
        """
        representation = self.http.get(target)

        for link in self.header_parser.parse(representation, WEBMENTION_REL):
            logger.debug("Found endpoint %s for %s in Link header", link.uri, target)
            return DiscoveryResult(link.uri)

        if is_html(representation):
            for link in self.link_extractor.extract(representation, WEBMENTION_REL):
                logger.debug("Found endpoint %s for %s in HTML", link.uri, target)
                return DiscoveryResult(link.uri)

        logger.debug("No Webmention endpoint advertised by %s", target)
        return DiscoveryResult()

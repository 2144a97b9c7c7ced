import logging
from urllib.parse import urlparse

from .._exceptions import MalformedRequestError
from .._model import Webmention

logger = logging.getLogger(__name__)


class WebmentionsRequestParser:  # pylint: disable=too-few-public-methods
    """
    Validates a source/target pair and builds a :class:`Webmention` out of it.

    No network request is performed here.

    :param base_url: If specified, the host of the target URL must match the
        host of this URL
    """

    def __init__(self, *, base_url: str | None = None, **_) -> None:
        self._base_url = base_url

    def parse(self, source: str | None, target: str | None) -> Webmention:
        """
        Parse a Webmention.

        :param source: The source URL of the webmention
        :param target: The target URL of the webmention
        :raises MalformedRequestError: If the pair is not a valid Webmention
        """
        mention = Webmention(source=source, target=target)  # type: ignore[arg-type]

        # Check that the target domain is the same as this server's domain
        if self._base_url:
            target_domain = urlparse(mention.target).netloc
            server_domain = urlparse(self._base_url).netloc
            if target_domain != server_domain:
                raise MalformedRequestError(
                    mention.source, mention.target, "Target URL domain does not match server domain"
                )

        return mention

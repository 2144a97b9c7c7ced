import logging

from .._exceptions import TransportError, UnsupportedContentTypeError
from .._http import HttpClient
from ..verifiers import VerifierRegistry

logger = logging.getLogger(__name__)


class VerificationEngine:  # pylint: disable=too-few-public-methods
    """
    Verifies that a source document references a target.

    The source is fetched once, advertising the media types of all the
    registered verifiers in the ``Accept`` header, and the verifier
    registered for the declared content type of the response is invoked.

    :param http: The HTTP client used to fetch the source
    :param verifiers: The verifier registry. Defaults to
        :meth:`VerifierRegistry.default`.
    """

    def __init__(self, http: HttpClient, verifiers: VerifierRegistry | None = None):
        self.http = http
        self.verifiers = verifiers or VerifierRegistry.default()

    def verify(self, source: str, target: str) -> bool:
        """
        :param source: The source URL
        :param target: The target URL
        :return: True if the source contains an exact reference to the
            target, False if it doesn't
        :raises TransportError: If the source can't be fetched
        :raises UnsupportedContentTypeError: If the source isn't available
            in any of the supported media types
        :raises ParseError: If the source body can't be parsed
        """
        logger.debug("Verifying source %s against target %s", source, target)
        representation = self.http.get(
            source, headers={"Accept": self.verifiers.accept_header}
        )

        if representation.status_code == 406:
            raise UnsupportedContentTypeError(
                source,
                "The source is not available in any of the supported content "
                f"types: {self.verifiers.accept_header}",
            )

        if not representation.is_success:
            raise TransportError(
                source,
                f"Could not fetch the source {source}: "
                f"{representation.status_code} {representation.reason}".rstrip(),
                status_code=representation.status_code,
            )

        verifier = self.verifiers.get(representation.media_type)
        if verifier is None:
            raise UnsupportedContentTypeError(
                source,
                f"Unsupported source content type: {representation.media_type}",
            )

        logger.debug("Using %r to verify %s", verifier, source)
        return verifier.is_valid(representation, target)

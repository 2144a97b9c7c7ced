from .handlers import (
    EndpointDiscoveryEngine,
    NotificationDispatcher,
    VerificationEngine,
    WebmentionsHandler,
    WebmentionsRequestParser,
)
from .verifiers import (
    HtmlVerifier,
    JsonVerifier,
    TextVerifier,
    Verifier,
    VerifierRegistry,
)
from ._exceptions import (
    EndpointNotFoundError,
    MalformedRequestError,
    ParseError,
    ProtocolViolationError,
    TransportError,
    UnsupportedContentTypeError,
    VerificationFailedError,
    WebmentionException,
)
from ._http import HttpClient, Representation, build_session
from ._model import DiscoveryResult, Link, NotificationOutcome, Webmention

__version__ = "0.1.0"

__all__ = [
    "DiscoveryResult",
    "EndpointDiscoveryEngine",
    "EndpointNotFoundError",
    "HtmlVerifier",
    "HttpClient",
    "JsonVerifier",
    "Link",
    "MalformedRequestError",
    "NotificationDispatcher",
    "NotificationOutcome",
    "ParseError",
    "ProtocolViolationError",
    "Representation",
    "TextVerifier",
    "TransportError",
    "UnsupportedContentTypeError",
    "VerificationEngine",
    "VerificationFailedError",
    "Verifier",
    "VerifierRegistry",
    "Webmention",
    "WebmentionException",
    "WebmentionsHandler",
    "WebmentionsRequestParser",
    "build_session",
]

from dataclasses import dataclass, field
from urllib.parse import urlparse

from ._constants import SUPPORTED_SCHEMES
from ._exceptions import MalformedRequestError


def check_url(name: str, url: str | None) -> str:
    """
    Check that a URL is an absolute http(s) URL.

    :param name: What the URL is (source, target...), used in error messages
    :raises MalformedRequestError: If the URL is missing or invalid
    """
    if not url:
        raise MalformedRequestError(url, f"Missing {name} URL")

    try:
        parsed = urlparse(url)
        # Accessing the port validates it
        _ = parsed.port
    except ValueError as e:
        raise MalformedRequestError(url, f"Invalid {name} URL: {url}") from e

    if parsed.scheme.lower() not in SUPPORTED_SCHEMES:
        raise MalformedRequestError(
            url, f"Unsupported {name} URL scheme: {parsed.scheme or '<none>'}"
        )

    if not parsed.hostname:
        raise MalformedRequestError(url, f"Invalid {name} URL: {url}")

    return url


@dataclass(frozen=True)
class Webmention:
    """
    A notification that ``source`` references ``target``.

    Both URLs must be absolute http(s) URLs, and they must differ.

    :raises MalformedRequestError: If any of these conditions is not met
    """

    source: str
    target: str

    def __post_init__(self):
        check_url("source", self.source)
        check_url("target", self.target)
        if self.source == self.target:
            raise MalformedRequestError(
                self.source, self.target, "Source and target URL must not be identical"
            )

    def to_dict(self) -> dict:
        """
        :return: A dictionary representation of the Webmention
        """
        return {"source": self.source, "target": self.target}


@dataclass(frozen=True)
class Link:
    """
    A hyperlink declaration, either from a ``Link`` header or from an HTML
    ``<link>``/``<a>`` element.

    ``uri`` is always absolute. ``relations`` holds the lower-cased
    relation tokens.
    """

    uri: str
    relations: frozenset[str] = field(default_factory=frozenset)

    def has_relation(self, relation: str) -> bool:
        return relation.lower() in self.relations

    @staticmethod
    def split_relations(raw: str | list[str] | None) -> frozenset[str]:
        """
        Tokenize a ``rel`` value into a set of lower-cased relation types.

        BeautifulSoup already returns multi-valued attributes as lists,
        header parameters come in as plain (possibly space-separated) strings.
        """
        if not raw:
            return frozenset()
        if isinstance(raw, str):
            raw = raw.split()
        return frozenset(token.strip().lower() for token in raw if token.strip())


@dataclass(frozen=True)
class DiscoveryResult:
    """
    Outcome of an endpoint discovery. ``endpoint`` is None when the target
    did not advertise any supported signal.
    """

    endpoint: str | None = None

    @property
    def found(self) -> bool:
        return self.endpoint is not None

    def __bool__(self) -> bool:
        return self.found


@dataclass(frozen=True)
class NotificationOutcome:
    """
    Outcome of a successful notification.

    ``monitor_location`` is only set when the endpoint replied ``201 Created``
    with a ``Location`` header, and it's always an absolute URL.
    """

    accepted: bool
    status_code: int
    monitor_location: str | None = None

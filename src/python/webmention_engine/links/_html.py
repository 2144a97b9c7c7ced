import logging
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from .._exceptions import ParseError
from .._http import Representation
from .._model import Link

logger = logging.getLogger(__name__)

HTML_MEDIA_TYPES = frozenset({"text/html", "application/xhtml+xml"})
LINK_ELEMENT_NAMES = ("link", "a")


def is_html(representation: Representation) -> bool:
    return representation.media_type in HTML_MEDIA_TYPES


def parse_html(representation: Representation) -> BeautifulSoup:
    """
    Parse the body of a representation into a BeautifulSoup tree.

    The raw bytes are handed over so that BeautifulSoup can honour a
    ``<meta charset>`` when the Content-Type header declares no charset.

    :raises ParseError: If the body can't be parsed
    """
    try:
        return BeautifulSoup(
            representation.content,
            "html.parser",
            from_encoding=representation.charset,
        )
    except Exception as e:
        raise ParseError(
            representation.url, f"Could not parse the HTML of {representation.url}"
        ) from e


class LinkExtractor:  # pylint: disable=too-few-public-methods
    """
    Extracts ``<link>`` and ``<a>`` elements carrying both ``href`` and
    ``rel`` from an HTML representation.

    Representations that aren't HTML yield no links.
    """

    def extract(
        self, representation: Representation, relation: str | None = None
    ) -> list[Link]:
        """
        :param representation: The fetched representation
        :param relation: If specified, only return the links carrying this
            relation token
        :return: The matching links, in document order, with absolute URIs
        """
        if not is_html(representation):
            return []

        soup = parse_html(representation)
        base_url = self._base_url(soup, representation.url)
        links = []

        for tag in soup.find_all(LINK_ELEMENT_NAMES):
            if not (tag.has_attr("href") and tag.has_attr("rel")):
                continue

            link = Link(
                uri=urljoin(base_url, tag["href"].strip()),
                relations=Link.split_relations(tag["rel"]),
            )

            if relation is None or link.has_relation(relation):
                links.append(link)

        logger.debug(
            "Found %d link(s) with rel=%s in %s",
            len(links),
            relation or "*",
            representation.url,
        )
        return links

    @staticmethod
    def _base_url(soup: BeautifulSoup, url: str) -> str:
        base = soup.find("base", href=True)
        if base is None:
            return url
        return urljoin(url, base["href"].strip())  # type: ignore[index]

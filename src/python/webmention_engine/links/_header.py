import logging
import re
from urllib.parse import urljoin

from .._http import Representation
from .._model import Link

logger = logging.getLogger(__name__)

_QUOTED_PAIR = re.compile(r"\\(.)")


def _scan(text: str, pos: int, stop: str) -> tuple[str, int]:
    """
    Read ``text`` from ``pos`` up to the first ``stop`` character that is
    not inside a quoted string.

    :return: The chunk read and the position right after the separator
    """
    quoted = escaped = False
    for i in range(pos, len(text)):
        char = text[i]
        if escaped:
            escaped = False
        elif quoted and char == "\\":
            escaped = True
        elif char == '"':
            quoted = not quoted
        elif char == stop and not quoted:
            return text[pos:i], i + 1

    return text[pos:], len(text)


def _parse_params(raw: str) -> dict[str, str]:
    params: dict[str, str] = {}
    pos = 0
    while pos < len(raw):
        chunk, pos = _scan(raw, pos, ";")
        name, _, value = chunk.partition("=")
        name = name.strip().lower()
        if not name:
            continue

        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] == '"':
            value = _QUOTED_PAIR.sub(r"\1", value[1:-1])

        # Only the first occurrence of a parameter counts (RFC 8288, 3)
        params.setdefault(name, value)

    return params


def parse_link_header(value: str) -> list[tuple[str, dict[str, str]]]:
    """
    Split a ``Link`` header value into ``(uri_reference, params)`` pairs.

    The target is taken verbatim from the ``<...>`` span, and parameters are
    split on ``;`` and ``,`` only outside quoted strings.
    """
    links = []
    pos = 0
    while True:
        start = value.find("<", pos)
        if start == -1:
            break
        end = value.find(">", start + 1)
        if end == -1:
            logger.debug("Unterminated link target in header: %s", value)
            break

        raw_params, pos = _scan(value, end + 1, ",")
        links.append((value[start + 1 : end].strip(), _parse_params(raw_params)))

    return links


class HeaderLinkParser:  # pylint: disable=too-few-public-methods
    """
    Extracts the links declared through HTTP ``Link`` headers (RFC 8288).

    Multiple ``Link`` headers are folded by the transport into a single
    comma-separated value, so the header order is preserved.
    """

    def parse(
        self, representation: Representation, relation: str | None = None
    ) -> list[Link]:
        """
        :param representation: The fetched representation
        :param relation: If specified, only return the links carrying this
            relation token
        :return: The declared links, in header order, with absolute URIs
        """
        raw = representation.headers.get("Link")
        if not raw:
            return []

        links = []
        for uri, params in parse_link_header(raw):
            link = Link(
                uri=urljoin(representation.url, uri),
                relations=Link.split_relations(params.get("rel")),
            )

            if relation is None or link.has_relation(relation):
                links.append(link)

        return links

from ._header import HeaderLinkParser
from ._html import HTML_MEDIA_TYPES, LinkExtractor, is_html, parse_html

__all__ = [
    "HTML_MEDIA_TYPES",
    "HeaderLinkParser",
    "LinkExtractor",
    "is_html",
    "parse_html",
]

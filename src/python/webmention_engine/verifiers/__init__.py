from ._base import Verifier
from ._html import HtmlVerifier
from ._json import JsonVerifier
from ._registry import VerifierRegistry
from ._text import TextVerifier

__all__ = [
    "HtmlVerifier",
    "JsonVerifier",
    "TextVerifier",
    "Verifier",
    "VerifierRegistry",
]

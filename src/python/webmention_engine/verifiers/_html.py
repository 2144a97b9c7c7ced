from .._http import Representation
from ..links import parse_html
from ._base import Verifier


class HtmlVerifier(Verifier):
    """
    Looks for ``<a href>`` or ``<img|video|audio src>`` elements that
    reference the target.
    """

    media_type = "text/html"

    # Element name -> attribute holding the reference
    reference_attributes = {
        "a": "href",
        "img": "src",
        "video": "src",
        "audio": "src",
    }

    def is_valid(self, representation: Representation, target: str) -> bool:
        soup = parse_html(representation)
        for tag in soup.find_all(list(self.reference_attributes)):
            if tag.get(self.reference_attributes[tag.name]) == target:
                return True

        return False

from .._http import Representation
from ._base import Verifier


class TextVerifier(Verifier):
    """
    Plain text sources are valid if the target URL appears anywhere in the
    body.
    """

    media_type = "text/plain"

    def is_valid(self, representation: Representation, target: str) -> bool:
        return target in representation.text

import json
from typing import Any

from .._exceptions import ParseError
from .._http import Representation
from ._base import Verifier


class JsonVerifier(Verifier):
    """
    JSON sources are valid if any string value, at any depth, is exactly
    the target URL. Object keys are ignored.
    """

    media_type = "application/json"

    def is_valid(self, representation: Representation, target: str) -> bool:
        try:
            document = json.loads(representation.text)
        except ValueError as e:
            raise ParseError(
                representation.url,
                f"Could not parse the JSON body of {representation.url}",
            ) from e

        return self._contains(document, target)

    @classmethod
    def _contains(cls, value: Any, target: str) -> bool:
        if isinstance(value, str):
            return value == target
        if isinstance(value, dict):
            return any(cls._contains(v, target) for v in value.values())
        if isinstance(value, list):
            return any(cls._contains(v, target) for v in value)
        return False

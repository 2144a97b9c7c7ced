from types import MappingProxyType
from typing import Iterable, Iterator

from ._base import Verifier
from ._html import HtmlVerifier
from ._json import JsonVerifier
from ._text import TextVerifier


class VerifierRegistry:
    """
    Ordered, read-only mapping of media types to verifiers.

    The order is the preference order advertised in the ``Accept`` header
    of verification requests.

    :param verifiers: The verifiers to register. Two verifiers can't share
        the same media type.
    """

    def __init__(self, verifiers: Iterable[Verifier]):
        by_type: dict[str, Verifier] = {}
        for verifier in verifiers:
            media_type = verifier.media_type.strip().lower()
            if media_type in by_type:
                raise ValueError(f"Duplicate verifier for media type {media_type}")
            by_type[media_type] = verifier

        if not by_type:
            raise ValueError("At least one verifier is required")

        self._verifiers = MappingProxyType(by_type)

    @classmethod
    def default(cls) -> "VerifierRegistry":
        return cls([HtmlVerifier(), TextVerifier(), JsonVerifier()])

    @property
    def media_types(self) -> tuple[str, ...]:
        return tuple(self._verifiers)

    @property
    def accept_header(self) -> str:
        return ", ".join(self._verifiers)

    def get(self, media_type: str | None) -> Verifier | None:
        if not media_type:
            return None
        return self._verifiers.get(media_type)

    def __contains__(self, media_type: object) -> bool:
        return media_type in self._verifiers

    def __iter__(self) -> Iterator[Verifier]:
        return iter(self._verifiers.values())

    def __len__(self) -> int:
        return len(self._verifiers)

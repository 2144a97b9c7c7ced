from abc import ABC, abstractmethod

from .._http import Representation


class Verifier(ABC):
    """
    Checks whether a representation of a given media type contains an
    exact-match reference to a target URL.

    No URL normalization happens: ``https://x/a`` and ``https://x/a/`` are
    two different references.
    """

    media_type: str

    @abstractmethod
    def is_valid(self, representation: Representation, target: str) -> bool:
        """
        :param representation: The fetched source
        :param target: The target URL, as received
        :return: True if the source references the target
        :raises ParseError: If the body can't be interpreted as
            :attr:`media_type`
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} media_type={self.media_type}>"

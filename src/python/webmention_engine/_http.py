import logging
from dataclasses import dataclass, field
from typing import Mapping

import requests
from requests.structures import CaseInsensitiveDict

from ._constants import (
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_USER_AGENT,
)
from ._exceptions import ParseError, TransportError

logger = logging.getLogger(__name__)


def build_session(
    user_agent: str = DEFAULT_USER_AGENT,
    max_redirects: int = DEFAULT_MAX_REDIRECTS,
) -> requests.Session:
    """
    Build a ``requests`` session suitable for Webmention traffic: it
    identifies itself through ``user_agent`` and follows up to
    ``max_redirects`` redirects.
    """
    session = requests.Session()
    session.headers["User-Agent"] = user_agent
    session.max_redirects = max_redirects
    return session


@dataclass(frozen=True)
class Representation:
    """
    A fetched HTTP representation.

    :param url: The effective URL of the response, after redirects. This is
        the base against which relative references are resolved.
    :param status_code: The HTTP status code
    :param reason: The HTTP reason phrase
    :param headers: The response headers (case-insensitive)
    :param content: The raw response body
    :param encoding: The declared (or inferred) body encoding, if any
    """

    url: str
    status_code: int
    reason: str = ""
    headers: Mapping[str, str] = field(default_factory=CaseInsensitiveDict)
    content: bytes = b""
    encoding: str | None = None

    def __post_init__(self):
        if not isinstance(self.headers, CaseInsensitiveDict):
            object.__setattr__(self, "headers", CaseInsensitiveDict(self.headers or {}))

    @classmethod
    def from_response(
        cls, response: requests.Response, *, with_body: bool = True
    ) -> "Representation":
        return cls(
            url=response.url,
            status_code=response.status_code,
            reason=response.reason or "",
            headers=CaseInsensitiveDict(response.headers or {}),
            content=(response.content or b"") if with_body else b"",
            encoding=response.encoding,
        )

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def media_type(self) -> str | None:
        """
        The declared content type without its parameters, lower-cased.
        """
        content_type = self.headers.get("Content-Type")
        if not content_type:
            return None
        return content_type.split(";", 1)[0].strip().lower() or None

    @property
    def charset(self) -> str | None:
        """
        The charset declared in the Content-Type header, if any.
        """
        content_type = self.headers.get("Content-Type") or ""
        for param in content_type.split(";")[1:]:
            name, _, value = param.partition("=")
            if name.strip().lower() == "charset" and value.strip(" \"'"):
                return value.strip(" \"'")
        return None

    @property
    def text(self) -> str:
        """
        The body decoded as text.

        The charset declared in the Content-Type header wins. Without one,
        UTF-8 is tried first, then the encoding guessed by the transport.

        :raises ParseError: If the body can't be decoded
        """
        if self.charset:
            encodings = [self.charset]
        else:
            encodings = ["utf-8"]
            if self.encoding and self.encoding.lower() not in ("utf-8", "utf8"):
                encodings.append(self.encoding)

        for encoding in encodings:
            try:
                return self.content.decode(encoding)
            except (UnicodeDecodeError, LookupError):
                continue

        raise ParseError(
            self.url,
            f"Could not decode the body of {self.url} as {', '.join(encodings)}",
        )


class HttpClient:
    """
    Thin wrapper over a ``requests`` session.

    It applies the configured timeout to every request and turns any
    ``requests`` failure into a :class:`TransportError`.

    :param session: A preconfigured session. If not specified, one is
        built through :func:`build_session`.
    :param http_timeout: Timeout, in seconds, for each request
    :param user_agent: User-Agent used when a new session is built
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        http_timeout: float = DEFAULT_HTTP_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.session = session if session is not None else build_session(user_agent)
        self.http_timeout = http_timeout

    def get(
        self, url: str, *, headers: dict[str, str] | None = None
    ) -> Representation:
        logger.debug("GET %s", url)
        try:
            response = self.session.get(
                url,
                headers=headers or {},
                timeout=self.http_timeout,
                allow_redirects=True,
            )
        except requests.RequestException as e:
            raise TransportError(url, f"Could not fetch {url}: {e}") from e

        return Representation.from_response(response)

    def post(
        self,
        url: str,
        *,
        data: bytes,
        headers: dict[str, str] | None = None,
    ) -> Representation:
        logger.debug("POST %s", url)
        try:
            response = self.session.post(
                url,
                data=data,
                headers=headers or {},
                timeout=self.http_timeout,
                allow_redirects=True,
            )
        except requests.RequestException as e:
            raise TransportError(url, f"Could not reach {url}: {e}") from e

        # The body of a notification response carries no meaning
        try:
            return Representation.from_response(response, with_body=False)
        finally:
            response.close()

class WebmentionException(Exception):
    """
    Base class for all the errors raised while discovering, sending or
    verifying Webmentions.

    The message is meant to be user-facing: the server adapters return it
    verbatim in the body of a 400 response.
    """

    def __init__(self, *args, message: str | None = None):
        super().__init__(*args)
        if message is None:
            message = str(args[-1]) if args else self.__class__.__name__
        self.message = message

    def __str__(self) -> str:
        return self.message


class MalformedRequestError(WebmentionException):
    """
    The source/target pair failed structural validation.
    """


class TransportError(WebmentionException):
    """
    An outbound request could not be completed, or the remote resource
    could not be fetched.

    :param status_code: The HTTP status returned by the remote, if any
    """

    def __init__(self, *args, status_code: int | None = None):
        super().__init__(*args)
        self.status_code = status_code


class ProtocolViolationError(WebmentionException):
    """
    A Webmention endpoint answered a notification with a non-2xx status.
    """

    def __init__(self, status_code: int, reason: str | None = None):
        self.status_code = status_code
        self.reason = reason or ""
        super().__init__(
            message=f"Webmention endpoint replied {status_code} {self.reason}".rstrip()
        )


class UnsupportedContentTypeError(WebmentionException):
    """
    The source was not served in any media type a verifier is registered for.
    """


class ParseError(WebmentionException):
    """
    A body could not be interpreted in the format declared by its media type.
    """


class EndpointNotFoundError(WebmentionException):
    """
    The target does not advertise any Webmention endpoint.
    """


class VerificationFailedError(WebmentionException):
    """
    The source was fetched but it does not reference the target.
    """

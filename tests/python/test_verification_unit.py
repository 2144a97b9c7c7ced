import pytest
import requests

from webmention_engine._exceptions import (
    ParseError,
    TransportError,
    UnsupportedContentTypeError,
)
from webmention_engine._http import HttpClient
from webmention_engine.handlers import VerificationEngine
from webmention_engine.verifiers import HtmlVerifier, TextVerifier, VerifierRegistry

from _fakes import FakeResponse, FakeSession, real_response

SOURCE = "https://source.example/post"
TARGET = "https://x/a"


def _engine(*responses: FakeResponse, verifiers: VerifierRegistry | None = None):
    session = FakeSession(list(responses))
    return VerificationEngine(HttpClient(session), verifiers), session


def test_accept_header_lists_registered_media_types_in_order():
    engine, session = _engine(
        FakeResponse(url=SOURCE, headers={"Content-Type": "text/plain"}, text=TARGET)
    )

    assert engine.verify(SOURCE, TARGET) is True
    (call,) = session.calls
    assert call["url"] == SOURCE
    assert call["headers"] == {"Accept": "text/html, text/plain, application/json"}


def test_custom_registry_order_drives_accept_header():
    registry = VerifierRegistry([TextVerifier(), HtmlVerifier()])
    engine, session = _engine(
        FakeResponse(url=SOURCE, headers={"Content-Type": "text/plain"}, text=TARGET),
        verifiers=registry,
    )

    engine.verify(SOURCE, TARGET)

    assert session.calls[0]["headers"] == {"Accept": "text/plain, text/html"}


def test_html_exact_match_is_valid():
    engine, _ = _engine(
        FakeResponse(
            url=SOURCE,
            headers={"Content-Type": "text/html; charset=utf-8"},
            text='<html><body><a href="https://x/a">x</a></body></html>',
        )
    )

    assert engine.verify(SOURCE, TARGET) is True


def test_html_trailing_slash_is_not_a_match():
    engine, _ = _engine(
        FakeResponse(
            url=SOURCE,
            headers={"Content-Type": "text/html"},
            text='<html><body><a href="https://x/a/">x</a></body></html>',
        )
    )

    assert engine.verify(SOURCE, TARGET) is False


def test_not_acceptable_raises_unsupported_content_type():
    engine, session = _engine(
        FakeResponse(url=SOURCE, status_code=406, reason="Not Acceptable")
    )

    with pytest.raises(UnsupportedContentTypeError):
        engine.verify(SOURCE, TARGET)

    assert len(session.calls) == 1


@pytest.mark.parametrize("content_type", ["image/png", "application/xml", None])
def test_unregistered_content_type_raises(content_type):
    headers = {"Content-Type": content_type} if content_type else {}
    engine, _ = _engine(FakeResponse(url=SOURCE, headers=headers, text=TARGET))

    with pytest.raises(UnsupportedContentTypeError):
        engine.verify(SOURCE, TARGET)


@pytest.mark.parametrize("status_code", [404, 410, 500])
def test_error_status_raises_transport_error(status_code):
    engine, _ = _engine(
        FakeResponse(url=SOURCE, status_code=status_code, reason="Nope")
    )

    with pytest.raises(TransportError) as e:
        engine.verify(SOURCE, TARGET)

    assert e.value.status_code == status_code


def test_connection_failure_raises_transport_error():
    engine = VerificationEngine(
        HttpClient(FakeSession(exc=requests.ConnectionError("refused")))
    )

    with pytest.raises(TransportError):
        engine.verify(SOURCE, TARGET)


def test_parse_errors_propagate():
    engine, _ = _engine(
        FakeResponse(
            url=SOURCE, headers={"Content-Type": "application/json"}, text="{nope"
        )
    )

    with pytest.raises(ParseError):
        engine.verify(SOURCE, TARGET)


NON_ASCII_TARGET = "https://t.example/café"


@pytest.mark.parametrize(
    ("content_type", "body"),
    [
        (
            "text/html",
            '<html><head><meta charset="utf-8"></head>'
            f'<body><a href="{NON_ASCII_TARGET}">c</a></body></html>',
        ),
        ("text/html; charset=utf-8", f'<a href="{NON_ASCII_TARGET}">c</a>'),
        ("text/plain", f"see {NON_ASCII_TARGET}"),
    ],
)
def test_utf8_source_without_declared_charset(content_type, body):
    response = real_response(
        url=SOURCE, body=body.encode("utf-8"), headers={"Content-Type": content_type}
    )
    engine = VerificationEngine(HttpClient(FakeSession([response])))

    assert engine.verify(SOURCE, NON_ASCII_TARGET) is True


def test_declared_charset_is_honoured():
    body = f"see {NON_ASCII_TARGET}".encode("latin-1")
    response = real_response(
        url=SOURCE,
        body=body,
        headers={"Content-Type": "text/plain; charset=ISO-8859-1"},
    )
    engine = VerificationEngine(HttpClient(FakeSession([response])))

    assert engine.verify(SOURCE, NON_ASCII_TARGET) is True

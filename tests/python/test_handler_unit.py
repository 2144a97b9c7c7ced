from unittest.mock import Mock

import pytest

from webmention_engine import (
    DiscoveryResult,
    EndpointNotFoundError,
    MalformedRequestError,
    NotificationOutcome,
    TextVerifier,
    UnsupportedContentTypeError,
    VerificationFailedError,
    Webmention,
    WebmentionsHandler,
)

from _fakes import FakeResponse, FakeSession

SOURCE = "https://source.example/post"
TARGET = "https://example.com/target"


def test_process_incoming_webmention_invokes_callback_on_success():
    received: list[Webmention] = []
    session = FakeSession(
        [
            FakeResponse(
                url=SOURCE,
                headers={"Content-Type": "text/html"},
                text=f'<a href="{TARGET}">t</a>',
            )
        ]
    )
    handler = WebmentionsHandler(
        base_url="https://example.com",
        session=session,
        on_mention_received=received.append,
    )

    mention = handler.process_incoming_webmention(SOURCE, TARGET)

    assert mention == Webmention(source=SOURCE, target=TARGET)
    assert received == [mention]


def test_process_incoming_webmention_rejects_missing_link():
    callback = Mock()
    session = FakeSession(
        [FakeResponse(url=SOURCE, headers={"Content-Type": "text/html"}, text="<p>no</p>")]
    )
    handler = WebmentionsHandler(session=session, on_mention_received=callback)

    with pytest.raises(VerificationFailedError):
        handler.process_incoming_webmention(SOURCE, TARGET)

    callback.assert_not_called()


def test_identical_source_and_target_rejected_before_fetching():
    session = FakeSession()
    callback = Mock()
    handler = WebmentionsHandler(session=session, on_mention_received=callback)

    with pytest.raises(MalformedRequestError):
        handler.process_incoming_webmention(TARGET, TARGET)

    assert session.calls == []
    callback.assert_not_called()


def test_unsupported_content_type_is_not_a_negative_verification():
    session = FakeSession([FakeResponse(url=SOURCE, status_code=406)])
    handler = WebmentionsHandler(session=session)

    with pytest.raises(UnsupportedContentTypeError):
        handler.process_incoming_webmention(SOURCE, TARGET)


def test_custom_verifiers():
    session = FakeSession(
        [FakeResponse(url=SOURCE, headers={"Content-Type": "text/plain"}, text=TARGET)]
    )
    handler = WebmentionsHandler(session=session, verifiers=[TextVerifier()])

    handler.process_incoming_webmention(SOURCE, TARGET)

    assert session.calls[0]["headers"] == {"Accept": "text/plain"}


def test_callback_errors_are_logged_and_do_not_reject(caplog):
    def _boom(_):
        raise RuntimeError("boom")

    session = FakeSession(
        [FakeResponse(url=SOURCE, headers={"Content-Type": "text/plain"}, text=TARGET)]
    )
    handler = WebmentionsHandler(session=session, on_mention_received=_boom)

    mention = handler.process_incoming_webmention(SOURCE, TARGET)

    assert mention.source == SOURCE
    assert "boom" in caplog.text


def test_send_webmention_discovers_then_notifies():
    session = FakeSession(
        [
            FakeResponse(
                url=TARGET,
                headers={"Link": '</webmention?token=1>; rel="webmention"'},
            ),
            FakeResponse(
                url="https://example.com/webmention?token=1",
                status_code=201,
                headers={"Location": "/queue/7"},
            ),
        ]
    )
    handler = WebmentionsHandler(session=session)

    outcome = handler.send_webmention(SOURCE, TARGET)

    assert outcome == NotificationOutcome(
        accepted=True,
        status_code=201,
        monitor_location="https://example.com/queue/7",
    )
    assert [(c["method"], c["url"]) for c in session.calls] == [
        ("GET", TARGET),
        ("POST", "https://example.com/webmention?token=1"),
    ]


def test_send_webmention_without_endpoint(monkeypatch):
    handler = WebmentionsHandler(session=FakeSession())
    monkeypatch.setattr(handler, "discover_endpoint", lambda *_: DiscoveryResult())

    def _notify(*_, **__):
        raise AssertionError("notify should not be called if no endpoint is found")

    monkeypatch.setattr(handler.notifier, "notify", _notify)

    with pytest.raises(EndpointNotFoundError):
        handler.send_webmention(SOURCE, TARGET)


def test_send_webmention_validates_urls():
    session = FakeSession()
    handler = WebmentionsHandler(session=session)

    with pytest.raises(MalformedRequestError):
        handler.send_webmention("ftp://source.example/", TARGET)

    assert session.calls == []

from urllib.parse import parse_qsl

import pytest

from webmention_engine._exceptions import ProtocolViolationError
from webmention_engine._http import HttpClient
from webmention_engine.handlers import NotificationDispatcher

from _fakes import FakeResponse, FakeSession

SOURCE = "https://s.example/p"
TARGET = "https://t.example/q"


def _notify(response: FakeResponse, endpoint: str = "https://host/wm?v=1"):
    session = FakeSession([response])
    outcome = NotificationDispatcher(HttpClient(session)).notify(endpoint, SOURCE, TARGET)
    return outcome, session


def test_notify_posts_form_encoded_source_and_target():
    outcome, session = _notify(FakeResponse(url="https://host/wm?v=1", status_code=202))

    assert outcome.accepted
    assert outcome.status_code == 202
    assert outcome.monitor_location is None

    (call,) = session.calls
    assert call["method"] == "POST"
    assert call["url"] == "https://host/wm?v=1"
    assert call["data"] == (
        b"source=https%3A%2F%2Fs.example%2Fp&target=https%3A%2F%2Ft.example%2Fq"
    )
    assert call["headers"] == {
        "Content-Type": "application/x-www-form-urlencoded; charset=UTF-8"
    }


def test_body_round_trips_special_characters():
    source = "https://s.example/p?a=1&b=ü c#frag"
    target = "https://t.example/q;x=y"

    body = NotificationDispatcher.encode_body(source, target)

    assert parse_qsl(body.decode("ascii"), strict_parsing=True) == [
        ("source", source),
        ("target", target),
    ]


def test_query_string_is_not_duplicated_in_body():
    _, session = _notify(
        FakeResponse(url="https://host/wm?v=1", status_code=200),
        endpoint="https://host/wm?v=1",
    )

    assert b"v=1" not in session.calls[0]["data"]


def test_created_with_location_returns_absolute_monitor_location():
    outcome, _ = _notify(
        FakeResponse(
            url="https://host/wm?v=1",
            status_code=201,
            headers={"Location": "/status/42"},
        )
    )

    assert outcome.accepted
    assert outcome.monitor_location == "https://host/status/42"


def test_created_without_location():
    outcome, _ = _notify(FakeResponse(url="https://host/wm", status_code=201))

    assert outcome.accepted
    assert outcome.monitor_location is None


def test_location_ignored_unless_created():
    outcome, _ = _notify(
        FakeResponse(
            url="https://host/wm", status_code=202, headers={"Location": "/status/1"}
        )
    )

    assert outcome.monitor_location is None


@pytest.mark.parametrize("status_code", [200, 201, 202, 204, 299])
def test_any_2xx_is_success(status_code):
    outcome, _ = _notify(FakeResponse(url="https://host/wm", status_code=status_code))

    assert outcome.accepted


@pytest.mark.parametrize(
    ("status_code", "reason"),
    [(300, "Multiple Choices"), (400, "Bad Request"), (404, "Not Found"), (500, "Boom")],
)
def test_non_2xx_raises_protocol_violation(status_code, reason):
    session = FakeSession(
        [FakeResponse(url="https://host/wm", status_code=status_code, reason=reason)]
    )
    dispatcher = NotificationDispatcher(HttpClient(session))

    with pytest.raises(ProtocolViolationError) as e:
        dispatcher.notify("https://host/wm", SOURCE, TARGET)

    assert e.value.status_code == status_code
    assert e.value.reason == reason
    assert str(status_code) in str(e.value)
    # No retries
    assert len(session.calls) == 1

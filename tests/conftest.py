"""Shared fixtures for KeyAuth client tests."""

from unittest.mock import MagicMock

import pytest

from keyauth.pojos.App import App


class FakeClock:
    """Millisecond clock advanced by hand or by the limiter's sleeper."""

    def __init__(self, start: float = 0):
        self.now = start
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms

    def sleep(self, ms: float) -> None:
        self.sleeps.append(ms)
        self.now += ms


def makeResponse(payload=None, statusCode: int = 200, text: str = None):
    """Build a requests.Response stand-in returning `payload` from json()."""
    response = MagicMock()
    response.status_code = statusCode
    if text is not None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
        response.text = text
    else:
        response.json.return_value = payload
        response.text = str(payload)
    return response


def makeSession(*responses):
    """Session whose get() returns (or raises) `responses` in order."""
    session = MagicMock()
    session.get.side_effect = list(responses)
    return session


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def app():
    return App(name="testapp", ownerid="owner123", ver="1.0")


@pytest.fixture
def recorder():
    """Collects emitted events as (event, payload) tuples."""
    class Recorder:
        def __init__(self):
            self.events = []

        def listen(self, emitter, *eventNames):
            for name in eventNames:
                emitter.on(name, lambda data, name=name: self.events.append((name, data)))

        def named(self, name):
            return [data for eventName, data in self.events if eventName == name]

    return Recorder()

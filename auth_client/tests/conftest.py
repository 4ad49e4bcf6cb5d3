"""
Shared pytest fixtures for polling client tests.

The client talks to the server through a ``requests.Session``; tests
substitute a ``FakeSession`` that replays a scripted list of responses
(or exceptions) so no network traffic is generated.
"""

from __future__ import annotations

import random

import pytest

from auth_client.client_app import EchoPoller
from auth_client.config import ClientConfiguration


class FakeResponse:
    """Minimal stand-in for ``requests.Response`` used by the poller."""

    def __init__(self, status_code: int = 200, body=None, *, json_error: Exception | None = None):
        self.status_code = status_code
        self._body = body
        self._json_error = json_error

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._body


class FakeSession:
    """
    Replays scripted outcomes, one per ``get`` call.

    Each item is either a ``FakeResponse`` or an exception to raise.
    When the script runs out, ``on_exhausted`` is called (typically to
    stop the poller) and the last item is repeated.
    """

    def __init__(self, script, on_exhausted=None):
        self.script = list(script)
        self.on_exhausted = on_exhausted
        self.calls = []
        self.closed = False

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        index = min(len(self.calls), len(self.script)) - 1
        if len(self.calls) >= len(self.script) and self.on_exhausted is not None:
            self.on_exhausted()
        item = self.script[index]
        if isinstance(item, Exception):
            raise item
        return item

    def close(self):
        self.closed = True


@pytest.fixture
def configuration():
    return ClientConfiguration(api_server_url="http://server.test", delay=0, request_timeout=1.0)


@pytest.fixture
def make_poller(configuration):
    """Factory building a poller around a scripted fake session."""

    def _make(script, *, stop_when_exhausted=True, config=None, seed=1234):
        session = FakeSession(script)
        poller = EchoPoller(config or configuration, session=session, rng=random.Random(seed))
        if stop_when_exhausted:
            session.on_exhausted = poller.stop
        return poller

    return _make


@pytest.fixture
def fake_response():
    """Expose ``FakeResponse`` to test modules."""
    return FakeResponse

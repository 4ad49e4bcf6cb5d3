"""
Client-to-server test fixtures.

Runs the real polling client against the real mock auth server in one
process: a ``FlaskClientSession`` adapts the Flask test client to the
small part of the ``requests.Session`` API the poller uses, so the
whole request path executes without sockets.

Key SDET Concepts Demonstrated:
- Adapters that let two real components talk without networking
- Injecting the decision service to steer server answers per test
"""

from __future__ import annotations

import os
import random
from urllib.parse import urlsplit

import pytest

os.environ["FLASK_ENV"] = "testing"

from auth_client.client_app import EchoPoller
from auth_client.config import ClientConfiguration
from auth_server.auth_server_app import create_app
from auth_server.auth_server_app.antibruteforce import AdmissionDecision, StaticDecisionService


class _AdaptedResponse:
    def __init__(self, test_response):
        self.status_code = test_response.status_code
        self._test_response = test_response

    def json(self):
        payload = self._test_response.get_json(silent=True)
        if payload is None:
            raise ValueError("Response body is not JSON")
        return payload


class FlaskClientSession:
    """Route ``get`` calls made by the poller into a Flask test client."""

    def __init__(self, test_client, after_request=None):
        self.test_client = test_client
        self.after_request = after_request
        self.urls = []
        self.responses = []

    def get(self, url, **_kwargs):
        self.urls.append(url)
        response = _AdaptedResponse(self.test_client.get(urlsplit(url).path))
        self.responses.append(response)
        if self.after_request is not None:
            self.after_request(self)
        return response

    def close(self):
        pass


@pytest.fixture
def decision_service():
    return StaticDecisionService(AdmissionDecision.ALLOW)


@pytest.fixture
def server_client(decision_service):
    app = create_app("testing", decision_service=decision_service)
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def make_wired_poller(server_client):
    """Build a poller whose session talks to the in-process server."""

    def _make(iterations: int):
        configuration = ClientConfiguration(api_server_url="http://auth-server.test", delay=0)

        def _stop_after(session):
            if len(session.urls) >= iterations:
                poller.stop()

        session = FlaskClientSession(server_client, after_request=_stop_after)
        poller = EchoPoller(configuration, session=session, rng=random.Random(7))
        return poller

    return _make

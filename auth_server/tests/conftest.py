"""
Shared pytest fixtures for mock auth server tests.

Provides the Flask app and HTTP client used by the unit and integration
suites.  The remote anti-brute-force service is never contacted: every
app is built with a ``FakeDecisionService`` whose answer (or failure)
each test controls.

Key SDET Concepts Demonstrated:
- Environment variable overrides before the app module is imported
- Constructor injection of a test double instead of monkeypatching
- Function-scoped apps so a test's fake never leaks into the next
"""

from __future__ import annotations

import os

import pytest

os.environ["FLASK_ENV"] = "testing"
os.environ["TEST_ABF_SERVICE_URL"] = "http://abf.test"
os.environ["TEST_ABF_TIMEOUT"] = "1"

from auth_server.auth_server_app import create_app
from auth_server.auth_server_app.antibruteforce import AdmissionDecision
from auth_server.auth_server_app.resources import InMemoryResourceStorage


class FakeDecisionService:
    """Configurable decision service that records every evaluated context."""

    def __init__(self):
        self.decision = AdmissionDecision.ALLOW
        self.error: Exception | None = None
        self.contexts = []

    def evaluate(self, context):
        self.contexts.append(context)
        if self.error is not None:
            raise self.error
        return self.decision


@pytest.fixture(scope="function")
def decision_service():
    """Provide a fresh fake decision service that allows by default."""
    return FakeDecisionService()


@pytest.fixture(scope="function")
def storage():
    return InMemoryResourceStorage()


@pytest.fixture(scope="function")
def app(decision_service, storage):
    """
    Provide an application wired to the test's fake decision service.

    Built per test because the decision service is injected at
    construction time.
    """
    application = create_app("testing", decision_service=decision_service, storage=storage)
    yield application


@pytest.fixture(scope="function")
def client(app):
    """
    Provide a Flask test client scoped to a single test function.

    Opens a new test-client context for every test so that request
    state (cookies, headers) never leaks between tests.
    """
    with app.test_client() as test_client:
        yield test_client

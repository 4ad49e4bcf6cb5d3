"""
Anti-brute-force (ABF) admission.

Before a request reaches its route handler, the admission gate asks a
remote decision service whether the caller may proceed.  The decision
logic (rate counters, subnet lists) lives entirely in that service; this
module only defines the integration contract and enforces the answer.

Wire contract with the decision service::

    POST {ABF_SERVICE_URL}/api/v1/access/check
    {"login": "...", "password": "...", "ip": "..."}

    200 {"allowed": true|false, "reason": "..."}

Any transport failure, non-2xx status or malformed body is raised to the
caller; the gate performs no retry and relies on the failure containment
stage to turn the fault into a ``500``.

Key Concepts Demonstrated:
- Dependency injection of the remote client through the constructor
- ``typing.Protocol`` as the capability interface for the remote call
- Short-circuiting a pipeline with a gateway-class status
"""

from __future__ import annotations

import enum
import logging
from typing import Protocol
from urllib.parse import urljoin

import requests
from flask import Response, jsonify

from auth_server.config import AppConfiguration

from .pipeline import Handler, RequestContext

logger = logging.getLogger(__name__)

CHECK_ACCESS_PATH = "/api/v1/access/check"


class AdmissionDecision(enum.Enum):
    ALLOW = "allow"
    DENY = "deny"


class DecisionServiceError(Exception):
    """The decision service answered, but not with a usable decision."""


class DecisionService(Protocol):
    def evaluate(self, context: RequestContext) -> AdmissionDecision: ...


class StaticDecisionService:
    """Decision service stand-in that always returns the same answer."""

    def __init__(self, decision: AdmissionDecision = AdmissionDecision.ALLOW):
        self.decision = decision

    def evaluate(self, context: RequestContext) -> AdmissionDecision:
        return self.decision


class HttpDecisionService:
    """
    Synchronous JSON-over-HTTP client for the remote ABF service.

    Args:
        base_url: Root URL of the decision service.
        timeout: Seconds to wait for an answer before ``requests``
            raises ``Timeout``.
        api_key: Optional token sent as ``Authorization: Bearer``.
        session: Optional pre-built ``requests.Session``; one is created
            when omitted so connections are pooled across requests.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float,
        api_key: str | None = None,
        session: requests.Session | None = None,
    ):
        self.check_url = urljoin(base_url.rstrip("/") + "/", CHECK_ACCESS_PATH.lstrip("/"))
        self.timeout = timeout
        self._session = session or requests.Session()
        if api_key:
            self._session.headers["Authorization"] = f"Bearer {api_key}"

    @classmethod
    def from_configuration(cls, configuration: AppConfiguration) -> HttpDecisionService:
        return cls(
            configuration.abf_service_url,
            timeout=configuration.abf_timeout,
            api_key=configuration.abf_api_key,
        )

    def evaluate(self, context: RequestContext) -> AdmissionDecision:
        response = self._session.post(
            self.check_url,
            json={
                "login": context.login,
                "password": context.password,
                "ip": context.ip,
            },
            timeout=self.timeout,
        )
        response.raise_for_status()

        try:
            body = response.json()
        except ValueError as exc:
            raise DecisionServiceError("Decision service returned a non-JSON body") from exc

        allowed = body.get("allowed") if isinstance(body, dict) else None
        if not isinstance(allowed, bool):
            raise DecisionServiceError("Decision service response lacks a boolean 'allowed'")

        if allowed:
            return AdmissionDecision.ALLOW

        logger.debug("Decision service denied %s: %s", context.ip, body.get("reason", "unspecified"))
        return AdmissionDecision.DENY


class AdmissionGate:
    """Pipeline stage that enforces the decision service's verdict."""

    def __init__(self, decision_service: DecisionService):
        self.decision_service = decision_service

    def __call__(self, context: RequestContext, call_next: Handler) -> Response:
        decision = self.decision_service.evaluate(context)

        if decision is AdmissionDecision.DENY:
            logger.debug("Request didn't pass through antibruteforce: %s %s", context.method, context.path)
            response = jsonify({"error": "Request rejected by anti-bruteforce"})
            response.status_code = 502
            return response

        logger.debug("Request passed through antibruteforce: %s %s", context.method, context.path)
        return call_next(context)

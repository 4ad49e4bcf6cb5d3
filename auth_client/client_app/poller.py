"""
Echo polling loop.

The client sends one ``GET /echo/<n>`` at a time with a random ``n``,
checks that the server answered with a well-formed resource, logs the
outcome and pauses before the next request.  Nothing that goes wrong in
a single iteration stops the loop; only ``stop()`` does.

The pause is a ``threading.Event.wait`` rather than ``time.sleep`` so a
stop request issued mid-delay ends the wait immediately.  A request that
is already in flight is bounded by the per-request timeout.

Key Concepts Demonstrated:
- Cooperative cancellation with ``threading.Event``
- Per-iteration fault containment around ``requests`` calls
- Lenient response decoding that reports "nothing meaningful" as ``None``
"""

from __future__ import annotations

import enum
import logging
import random
import threading
from typing import Any
from urllib.parse import urljoin

import requests

from auth_client.config import ClientConfiguration
from shared.models import Resource

logger = logging.getLogger(__name__)

# Same range as a non-negative 32-bit signed random draw.
MAX_RANDOM_VALUE = 2**31 - 1


class PollerState(enum.Enum):
    RUNNING = "running"
    STOPPING = "stopping"


class PollOutcome(enum.Enum):
    SUCCESS = "success"
    DECODE_FAILURE = "decode_failure"
    FAILURE_STATUS = "failure_status"
    TRANSPORT_FAILURE = "transport_failure"


def decode_resource(response: Any) -> Resource | None:
    """
    Return the resource carried by *response*, or ``None``.

    Non-JSON bodies (e.g. an HTML error page behind a proxy), JSON nested
    too deeply to decode and JSON that does not describe a resource all
    yield ``None``.
    """
    try:
        payload = response.json()
    except (ValueError, RecursionError):
        return None
    return Resource.from_dict(payload)


class EchoPoller:
    """
    Unbounded request loop against the mock auth server.

    Args:
        configuration: Bound client settings.
        session: Optional ``requests.Session``; created when omitted.
        rng: Optional ``random.Random`` used to pick echo values.
    """

    def __init__(
        self,
        configuration: ClientConfiguration,
        *,
        session: requests.Session | None = None,
        rng: random.Random | None = None,
    ):
        self.configuration = configuration
        self.session = session or requests.Session()
        self._rng = rng or random.Random()
        self._stop_requested = threading.Event()

    @property
    def state(self) -> PollerState:
        if self._stop_requested.is_set():
            return PollerState.STOPPING
        return PollerState.RUNNING

    def stop(self) -> None:
        """Request the loop to finish; safe to call from a signal handler."""
        self._stop_requested.set()

    def echo_url(self, value: int) -> str:
        return urljoin(self.configuration.api_server_url.rstrip("/") + "/", f"echo/{value}")

    def poll_once(self) -> PollOutcome:
        sent = self._rng.randrange(MAX_RANDOM_VALUE)

        try:
            response = self.session.get(
                self.echo_url(sent),
                timeout=self.configuration.request_timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Request for %s failed: %s", sent, exc)
            return PollOutcome.TRANSPORT_FAILURE

        if not 200 <= response.status_code < 300:
            logger.warning("Something went wrong with request, status code - %s", response.status_code)
            return PollOutcome.FAILURE_STATUS

        resource = decode_resource(response)
        if resource is None:
            logger.warning("Got troubles during json deserialization")
            return PollOutcome.DECODE_FAILURE

        logger.info("By sending %s got %s", sent, resource.value)
        return PollOutcome.SUCCESS

    def run(self) -> None:
        """Poll until ``stop()`` is called."""
        logger.info(
            "Polling %s every %sms",
            self.configuration.api_server_url,
            self.configuration.delay,
        )
        while self.state is PollerState.RUNNING:
            try:
                self.poll_once()
            except Exception:
                logger.exception("Unexpected failure while polling")
            if self._stop_requested.wait(self.configuration.delay_seconds):
                break
        logger.info("Polling stopped")

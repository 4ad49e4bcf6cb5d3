"""
Command-line entry point for the polling client.

Binds configuration from the environment, wires SIGINT/SIGTERM to a
graceful stop and runs the echo loop until interrupted.

Usage::

    MOCK_CLIENT_API_SERVER_URL=http://localhost:5000 abf-mock-client
"""

from __future__ import annotations

import logging
import signal
import sys

from auth_client.client_app import EchoPoller
from auth_client.config import ClientConfiguration
from shared.errors import ConfigurationError

logger = logging.getLogger(__name__)


def install_signal_handlers(poller: EchoPoller) -> None:
    def _handle_signal(signum, _frame):
        logger.info("Received %s, stopping", signal.Signals(signum).name)
        poller.stop()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        configuration = ClientConfiguration.from_env()
    except ConfigurationError as exc:
        logger.error("Cannot bind client configuration: %s", exc)
        return 1

    poller = EchoPoller(configuration)
    install_signal_handlers(poller)
    try:
        poller.run()
    finally:
        poller.session.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())

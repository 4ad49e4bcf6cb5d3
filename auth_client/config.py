"""
Polling Client -- Configuration.

The client reads its settings from ``MOCK_CLIENT_``-prefixed environment
variables once at startup and freezes them into a
``ClientConfiguration``.  A missing server URL (or an unparsable number)
aborts startup with a ``ConfigurationError`` before any request is sent.

Environment variables:
    MOCK_CLIENT_API_SERVER_URL      -- Base URL of the mock auth server (required).
    MOCK_CLIENT_DELAY               -- Pause between requests in ms (default 1000).
    MOCK_CLIENT_REQUEST_TIMEOUT     -- Per-request timeout in seconds (default 10).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from shared.errors import ConfigurationError

ENV_PREFIX = "MOCK_CLIENT_"
DEFAULT_DELAY_MS = 1000
DEFAULT_REQUEST_TIMEOUT = 10.0


@dataclass(frozen=True)
class ClientConfiguration:
    api_server_url: str
    delay: int = DEFAULT_DELAY_MS
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @property
    def delay_seconds(self) -> float:
        return self.delay / 1000

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientConfiguration:
        """
        Bind the client configuration from environment variables.

        Args:
            environ: Mapping to read from; defaults to ``os.environ``.

        Raises:
            ConfigurationError: naming every missing or malformed key.
        """
        if environ is None:
            environ = os.environ

        corrupted_keys: list[str] = []

        url_key = f"{ENV_PREFIX}API_SERVER_URL"
        api_server_url = environ.get(url_key, "").strip()
        if not api_server_url:
            corrupted_keys.append(url_key)

        delay_key = f"{ENV_PREFIX}DELAY"
        delay = DEFAULT_DELAY_MS
        raw_delay = environ.get(delay_key, "").strip()
        if raw_delay:
            try:
                delay = int(raw_delay)
            except ValueError:
                corrupted_keys.append(delay_key)
            else:
                if delay < 0:
                    corrupted_keys.append(delay_key)

        timeout_key = f"{ENV_PREFIX}REQUEST_TIMEOUT"
        request_timeout = DEFAULT_REQUEST_TIMEOUT
        raw_timeout = environ.get(timeout_key, "").strip()
        if raw_timeout:
            try:
                request_timeout = float(raw_timeout)
            except ValueError:
                corrupted_keys.append(timeout_key)
            else:
                if request_timeout <= 0:
                    corrupted_keys.append(timeout_key)

        if corrupted_keys:
            raise ConfigurationError(corrupted_keys)

        return cls(
            api_server_url=api_server_url,
            delay=delay,
            request_timeout=request_timeout,
        )

"""
Startup error types shared by the server and the client.

Both processes bind their configuration once, before serving or polling
begins.  When one or more keys cannot be bound, a single
``ConfigurationError`` is raised that names every offending key so the
operator can fix them all in one pass.
"""

from __future__ import annotations


class ConfigurationError(Exception):
    """Raised when required configuration keys are missing or malformed."""

    def __init__(self, keys: list[str]):
        self.keys = list(keys)
        super().__init__(
            f"corrupted {len(self.keys)} configuration keys: {', '.join(self.keys)}"
        )

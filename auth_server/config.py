"""
Mock Auth Server -- Configuration.

Defines environment-specific configuration classes for the mock auth
server.  Each class captures how to reach the remote anti-brute-force
(ABF) decision service and the logging verbosity.  The ``get_config``
factory selects the right class based on the ``FLASK_ENV`` environment
variable (or an explicit key).

Flask's config mapping is then bound once, at application start, into
an immutable ``AppConfiguration``.  Binding fails loudly with a
``ConfigurationError`` listing every bad key, so a misconfigured process
never starts serving.

Key Concepts Demonstrated:
- Class-based configuration with inheritance for DRY defaults
- Environment-variable overrides for 12-factor app deployability
- Fail-fast validation into a frozen dataclass at startup
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from shared.errors import ConfigurationError

# Same vocabulary as the ABF service itself; an empty value means WARNING.
LOG_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "": logging.WARNING,
}


class Config:
    """
    Base (shared) configuration for the mock auth server.

    All environment-specific classes inherit from ``Config`` so that
    common defaults only need to be stated once.  ``ABF_SERVICE_URL`` has
    no default: it must come from the environment (or a subclass).
    """

    # Root URL of the remote anti-brute-force decision service.
    ABF_SERVICE_URL: str = os.environ.get("ABF_SERVICE_URL", "")

    # Seconds to wait for an admission decision.  Kept short: every
    # inbound request blocks on this call.
    ABF_TIMEOUT: str = os.environ.get("ABF_TIMEOUT", "2")

    # Optional bearer token for the decision service.
    ABF_API_KEY: str = os.environ.get("ABF_API_KEY", "")

    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "")


class DevelopmentConfig(Config):
    """
    Development-oriented overrides.

    Enables Flask debug mode and assumes a decision service running on
    the local machine unless ``ABF_SERVICE_URL`` says otherwise.
    """

    DEBUG: bool = True
    TESTING: bool = False
    ABF_SERVICE_URL: str = os.environ.get("ABF_SERVICE_URL", "http://localhost:8080")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "debug")


class TestingConfig(Config):
    """
    Test-suite overrides.

    Points the decision service at a non-routable test host so that
    tests never reach a real ABF instance; tests inject a fake decision
    service instead.
    """

    DEBUG: bool = True
    TESTING: bool = True
    ABF_SERVICE_URL: str = os.environ.get("TEST_ABF_SERVICE_URL", "http://abf.test")
    ABF_TIMEOUT: str = os.environ.get("TEST_ABF_TIMEOUT", "1")
    LOG_LEVEL: str = "debug"


class ProductionConfig(Config):
    """
    Production-hardened overrides.

    Disables debug mode and testing flags.  The decision-service address
    is expected to come from the deployment orchestrator.
    """

    DEBUG: bool = False
    TESTING: bool = False


# Lookup table mapping environment name strings to their config classes.
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Return the configuration class for the given environment.

    Args:
        env: One of ``"development"``, ``"testing"``, or
            ``"production"``.  When *None*, the ``FLASK_ENV``
            environment variable is consulted, falling back to
            ``"development"`` if unset.

    Returns:
        The ``Config`` subclass matching the requested environment,
        or ``DevelopmentConfig`` if the key is unrecognised.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])


@dataclass(frozen=True)
class AppConfiguration:
    """Validated, immutable server settings shared by every request."""

    abf_service_url: str
    abf_timeout: float
    abf_api_key: str | None
    log_level: int

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> AppConfiguration:
        """
        Bind settings from a Flask config (or any mapping).

        Raises:
            ConfigurationError: naming every key that is missing or
                cannot be parsed.
        """
        corrupted_keys: list[str] = []

        abf_service_url = str(values.get("ABF_SERVICE_URL") or "").strip()
        if not abf_service_url:
            corrupted_keys.append("ABF_SERVICE_URL")

        abf_timeout = 0.0
        try:
            abf_timeout = float(values.get("ABF_TIMEOUT", 2))
        except (TypeError, ValueError):
            corrupted_keys.append("ABF_TIMEOUT")
        else:
            if abf_timeout <= 0:
                corrupted_keys.append("ABF_TIMEOUT")

        log_level = LOG_LEVELS.get(str(values.get("LOG_LEVEL") or "").strip().lower())
        if log_level is None:
            corrupted_keys.append("LOG_LEVEL")

        if corrupted_keys:
            raise ConfigurationError(corrupted_keys)

        return cls(
            abf_service_url=abf_service_url,
            abf_timeout=abf_timeout,
            abf_api_key=str(values.get("ABF_API_KEY") or "").strip() or None,
            log_level=log_level,
        )

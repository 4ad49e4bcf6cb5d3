"""
Mock Auth Server -- Application Factory.

This module provides the Flask application factory for the mock auth
server.  The server exposes two read-only resource routes and guards
them with an ordered request pipeline:

  1. ``FailureContainment`` -- outermost; turns any fault into a 500.
  2. ``AdmissionGate`` -- asks the anti-brute-force service whether the
     request may proceed; answers 502 when it may not.
  3. The route handler.

Key Concepts Demonstrated:
- Application Factory pattern (create_app) for flexible configuration
- Fail-fast configuration binding before any request is served
- Constructor injection of the decision service and resource store
"""

from __future__ import annotations

import logging

from flask import Flask

from auth_server.config import AppConfiguration, get_config

from .antibruteforce import AdmissionGate, DecisionService, HttpDecisionService
from .exception_handling import FailureContainment
from .pipeline import Pipeline
from .resources import InMemoryResourceStorage
from .routes import BLUEPRINT_NAME, CONVERTERS, create_resources_blueprint

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(
    config_name: str | None = None,
    *,
    decision_service: DecisionService | None = None,
    storage: InMemoryResourceStorage | None = None,
) -> Flask:
    """
    Construct and configure the mock auth server application.

    Args:
        config_name: Optional environment key ("development", "testing",
            "production").  When *None*, the FLASK_ENV environment
            variable is consulted, defaulting to "development".
        decision_service: Optional decision service to consult.  When
            omitted, an ``HttpDecisionService`` is built from the bound
            configuration.
        storage: Optional resource store; a fresh one is created when
            omitted.

    Returns:
        A Flask application whose resource routes run behind the
        containment and admission stages.

    Raises:
        ConfigurationError: when the configuration cannot be bound.
    """
    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    configuration = AppConfiguration.from_mapping(app.config)
    logging.getLogger("auth_server").setLevel(configuration.log_level)
    app.extensions["app_configuration"] = configuration

    logger.info("Creating auth server app with config: %s", config_class.__name__)

    if decision_service is None:
        decision_service = HttpDecisionService.from_configuration(configuration)
    if storage is None:
        storage = InMemoryResourceStorage()

    app.url_map.converters.update(CONVERTERS)
    app.register_blueprint(create_resources_blueprint(storage))

    # Order matters: containment must enclose the gate so that a failing
    # decision service still yields a 500 instead of a raw crash.
    pipeline = Pipeline([FailureContainment(), AdmissionGate(decision_service)])
    pipeline.install(app, BLUEPRINT_NAME)
    app.extensions["request_pipeline"] = pipeline
    return app

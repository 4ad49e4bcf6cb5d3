"""
Read-only resource routes.

Endpoints:
    GET /resource        -- The store's fixed default resource.
    GET /echo/<value>    -- A resource echoing the integer path segment.

The ``int32`` converter accepts signed 32-bit values only and rejects
anything else with a ``404`` before the pipeline or the handler runs.
Admission and failure containment are applied by the application
factory, not here, so the handlers stay free of cross-cutting concerns.
"""

from __future__ import annotations

from flask import Blueprint, Response, jsonify
from werkzeug.routing import IntegerConverter

from shared.models import Resource

from .resources import InMemoryResourceStorage

BLUEPRINT_NAME = "resources"

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class Int32Converter(IntegerConverter):
    """Signed integer path segment bounded to the 32-bit range."""

    def __init__(self, map, *args, **kwargs):
        super().__init__(map, min=INT32_MIN, max=INT32_MAX, signed=True)


# Must be on the app's url_map before the blueprint is registered.
CONVERTERS = {"int32": Int32Converter}


def create_resources_blueprint(storage: InMemoryResourceStorage) -> Blueprint:
    """
    Build the resource blueprint bound to a specific store.

    The store is passed in explicitly rather than looked up globally so
    every application instance serves exactly the store it was built
    with.
    """
    resources_bp = Blueprint(BLUEPRINT_NAME, __name__)

    @resources_bp.route("/resource", methods=["GET"])
    def get_resource() -> tuple[Response, int]:
        return jsonify(storage.default.to_dict()), 200

    @resources_bp.route("/echo/<int32:value>", methods=["GET"])
    def echo_resource(value: int) -> tuple[Response, int]:
        return jsonify(Resource(value=value).to_dict()), 200

    return resources_bp

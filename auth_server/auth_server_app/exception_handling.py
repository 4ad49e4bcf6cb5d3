"""
Failure containment stage.

The outermost stage of the request pipeline.  It converts any exception
raised further down the chain (the admission gate, the route handler or
response serialization) into a uniform ``500`` JSON response so that a
per-request fault never reaches the WSGI server uncaught.
"""

from __future__ import annotations

import logging

from flask import Response, jsonify

from .pipeline import Handler, RequestContext

logger = logging.getLogger(__name__)


def _qualified_name(exc: BaseException) -> str:
    exc_type = type(exc)
    return f"{exc_type.__module__}.{exc_type.__qualname__}"


class FailureContainment:
    """Catch-all boundary around the rest of the pipeline."""

    def __call__(self, context: RequestContext, call_next: Handler) -> Response:
        try:
            return call_next(context)
        except Exception as exc:
            logger.error(
                "Occurred exception: %s while handling %s %s",
                _qualified_name(exc),
                context.method,
                context.path,
                exc_info=exc,
            )
            response = jsonify({"error": "Internal server error"})
            response.status_code = 500
            return response

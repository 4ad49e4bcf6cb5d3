"""
Ordered request-interception pipeline.

Every guarded request flows through a fixed chain of *stages* before it
reaches its Flask view.  A stage is any callable with the signature::

    stage(context: RequestContext, call_next: Handler) -> Response

A stage may return its own response (short-circuit) or delegate to
``call_next`` and return whatever comes back.  Stages are composed by
plain function closures rather than inheritance, so adding a stage is a
one-line change in the application factory.

Key Concepts Demonstrated:
- Chain-of-responsibility built from closures
- Wrapping Flask view functions after blueprint registration
- Normalising view return values to ``Response`` inside the chain
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import wraps
from typing import Any

from flask import Flask, Request, Response, make_response, request

Handler = Callable[["RequestContext"], Response]
Stage = Callable[["RequestContext", Handler], Response]


@dataclass(frozen=True)
class RequestContext:
    """Request attributes the stages (and the decision service) rely on."""

    method: str
    path: str
    ip: str
    login: str = ""
    password: str = ""

    @classmethod
    def from_request(cls, flask_request: Request) -> RequestContext:
        """
        Capture the identifying attributes of a Flask request.

        Login and password come from HTTP Basic credentials when the
        client sent them; anonymous requests carry empty strings.
        """
        credentials = flask_request.authorization
        login = ""
        password = ""
        if credentials is not None and credentials.type == "basic":
            login = credentials.username or ""
            password = credentials.password or ""

        return cls(
            method=flask_request.method,
            path=flask_request.path,
            ip=flask_request.remote_addr or "",
            login=login,
            password=password,
        )


class Pipeline:
    """An ordered, immutable chain of stages placed in front of a handler."""

    def __init__(self, stages: Sequence[Stage]):
        self._stages = tuple(stages)

    @property
    def stages(self) -> tuple[Stage, ...]:
        return self._stages

    def build(self, handler: Handler) -> Handler:
        """Compose the stages around *handler*; the first stage is outermost."""
        chained = handler
        for stage in reversed(self._stages):
            chained = _bind(stage, chained)
        return chained

    def wrap(self, view_func: Callable[..., Any]) -> Callable[..., Response]:
        """Return a Flask view that runs *view_func* behind the chain."""

        @wraps(view_func)
        def guarded_view(*args, **kwargs) -> Response:
            def handler(_: RequestContext) -> Response:
                # make_response runs inside the chain so serialization
                # faults reach the containment stage.
                return make_response(view_func(*args, **kwargs))

            return self.build(handler)(RequestContext.from_request(request))

        return guarded_view

    def install(self, app: Flask, blueprint_name: str) -> None:
        """Guard every view registered on *app* under *blueprint_name*."""
        prefix = f"{blueprint_name}."
        for endpoint, view_func in list(app.view_functions.items()):
            if endpoint.startswith(prefix):
                app.view_functions[endpoint] = self.wrap(view_func)


def _bind(stage: Stage, call_next: Handler) -> Handler:
    def handler(context: RequestContext) -> Response:
        return stage(context, call_next)

    return handler

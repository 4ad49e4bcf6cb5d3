"""
In-memory resource store backing the read-only routes.

One store exists per application instance and holds a single default
resource for the lifetime of the process.  Echo requests do not touch
the store; they build throw-away resources from the path parameter.
"""

from __future__ import annotations

from shared.models import Resource

DEFAULT_RESOURCE_VALUE = 42


class InMemoryResourceStorage:
    """Process-wide, read-only holder of the default resource."""

    def __init__(self, default_value: int = DEFAULT_RESOURCE_VALUE):
        self._default = Resource(value=default_value)

    @property
    def default(self) -> Resource:
        return self._default

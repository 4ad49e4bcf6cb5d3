"""
Resource payload shared by the mock auth server and the polling client.

Serialized form::

    {"value": <int>}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Resource:
    """Immutable integer-valued payload exchanged between client and server."""

    value: int

    def to_dict(self) -> dict[str, int]:
        return {"value": self.value}

    @classmethod
    def from_dict(cls, payload: Any) -> Resource | None:
        """
        Build a ``Resource`` from a decoded JSON body.

        Returns ``None`` instead of raising when the payload is not an
        object or does not carry an integer ``value`` so that callers can
        treat "nothing meaningful" as a normal outcome.
        """
        if not isinstance(payload, dict):
            return None
        value = payload.get("value")
        # bool is a subclass of int; a JSON true/false is not a valid value.
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return cls(value=value)

"""
Helper utilities for Locust performance scenarios.

Provides response parsing and randomised inputs shared by every
scenario, so data-generation strategies can be adjusted in one place.
"""

from __future__ import annotations

import random
import string
from typing import Any

# Same range the polling client draws from.
MAX_ECHO_VALUE = 2**31 - 1


def _safe_json(response: Any) -> dict[str, Any]:
    """
    Return response JSON as dict, or an empty dict if parsing fails.

    Locust responses may contain non-JSON bodies (e.g. on 5xx errors or
    proxy timeouts).  Using this wrapper prevents ``ValueError`` from
    propagating into task methods where it would abort the virtual user.
    """
    try:
        data = response.json()
    except ValueError:
        return {}

    if isinstance(data, dict):
        return data
    return {}


def random_echo_value() -> int:
    """Pick a signed value so negative path segments are exercised too."""
    return random.randint(-MAX_ECHO_VALUE, MAX_ECHO_VALUE - 1)


def random_password(length: int = 10) -> str:
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))

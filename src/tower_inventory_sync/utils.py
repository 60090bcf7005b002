"""Utility functions for Tower inventory synchronisation."""

import json
from typing import Any


def is_blank(value: Any) -> bool:
    """Return True for None, empty containers and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return not value
    return False


def encode_host_variables(ip_address: str) -> str:
    """Encode host variables the way Tower stores them: a JSON string."""
    return json.dumps({"ansible_host": ip_address})

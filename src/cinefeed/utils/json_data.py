"""Safe navigation over loosely typed JSON payloads."""

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)


def dig(value: Any, *path: str | int) -> Any:
    """
    Walk ``path`` through nested dicts and lists.

    Returns None as soon as a step is missing or has the wrong type, so
    chains like ``dig(data, "events", 0, "time", "text")`` never raise.
    """
    current = value
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(step)
        if current is None:
            return None
    return current


def dig_str(value: Any, *path: str | int) -> str | None:
    """Like :func:`dig` but only returns non-empty, stripped strings."""
    found = dig(value, *path)
    if isinstance(found, str) and found.strip():
        return found.strip()
    return None


def dig_list(value: Any, *path: str | int) -> list[Any]:
    """Like :func:`dig` but always returns a list."""
    found = dig(value, *path)
    return found if isinstance(found, list) else []


def extract_embedded_json(html: str, marker: str) -> dict[str, Any] | None:
    """
    Decode the object literal assigned after ``marker`` in an inline script.

    For example ``initial_result: {...}`` or ``var Events = {...}``. Uses
    ``raw_decode`` so that exactly one JSON value is parsed regardless of
    what follows it.
    """
    marker_match = re.search(re.escape(marker), html)
    if not marker_match:
        return None

    start = html.find("{", marker_match.end())
    if start == -1:
        return None

    try:
        data, _ = json.JSONDecoder().raw_decode(html, start)
    except json.JSONDecodeError as e:
        logger.debug(f"Could not decode JSON after '{marker}': {e}")
        return None

    return data if isinstance(data, dict) else None

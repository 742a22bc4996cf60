"""Feature knobs.

Knob values come from a JSON object held in the ``SUPERTD_KNOBS``
environment variable. A knob may be a boolean, an integer, a pass rate
between 0 and 1, or an object keyed by switch value (with an optional
``"default"`` entry). Knobs that are absent or malformed evaluate to the
caller's default; boolean knobs without an explicit default are off.
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import random
from typing import Any

__all__ = [
    "KNOBS_ENV",
    "check_boolean_knob",
    "check_boolean_knob_with_switch",
    "check_boolean_knob_with_switch_and_consistent_pass_rate",
    "check_integer_knob",
]

KNOBS_ENV = "SUPERTD_KNOBS"

_log = logging.getLogger(__name__)


def _knobs() -> dict[str, Any]:
    raw = os.environ.get(KNOBS_ENV)
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        _log.error("Ignoring malformed %s: not valid JSON", KNOBS_ENV)
        return {}
    if not isinstance(value, dict):
        _log.error("Ignoring malformed %s: expected a JSON object", KNOBS_ENV)
        return {}
    return value


def _lookup(name: str, switch_val: str | None) -> Any:
    value = _knobs().get(name)
    if isinstance(value, dict):
        if switch_val is not None and switch_val in value:
            return value[switch_val]
        return value.get("default")
    return value


def _stable_fraction(hash_val: str) -> float:
    digest = hashlib.sha256(hash_val.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big") / 2**64


def _evaluate(value: Any, hash_val: str | None) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and 0 <= value <= 1:
        fraction = _stable_fraction(hash_val) if hash_val is not None else random.random()
        return fraction < value
    return None


def check_boolean_knob(name: str) -> bool:
    """Evaluate a boolean knob; off when it is not set."""
    result = _evaluate(_lookup(name, None), None)
    return False if result is None else result


def check_boolean_knob_with_switch(
    name: str, switch_val: str | None, default: bool
) -> bool:
    """Evaluate a boolean knob for a switch value, falling back to ``default``."""
    result = _evaluate(_lookup(name, switch_val), None)
    return default if result is None else result


def check_boolean_knob_with_switch_and_consistent_pass_rate(
    name: str, hash_val: str | None, switch_val: str | None, default: bool
) -> bool:
    """Evaluate a boolean knob with a stable hash value, falling back to ``default``."""
    result = _evaluate(_lookup(name, switch_val), hash_val)
    return default if result is None else result


def check_integer_knob(name: str, default_value: int) -> int:
    """Read an integer knob, falling back to ``default_value``."""
    value = _lookup(name, None)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return default_value
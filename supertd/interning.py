"""Interning of strings so that repeated values are stored only once."""

from __future__ import annotations

import sys

__all__ = ["intern", "intern3"]


def intern(value: str) -> str:
    """Return the canonical shared copy of ``value``."""
    return sys.intern(value)


def intern3(x: str, y: str, z: str) -> str:
    """Intern the concatenation of three strings."""
    return sys.intern(x + y + z)
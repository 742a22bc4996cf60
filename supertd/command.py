"""Helpers for running and describing external commands."""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable, Sequence
from typing import TypeVar

__all__ = ["display_command", "with_command"]

_log = logging.getLogger(__name__)

T = TypeVar("T")


def display_command(command: Sequence[str | os.PathLike[str]]) -> str:
    """Render a command line for display, without any quoting."""
    return " ".join(os.fsdecode(part) for part in command)


def with_command(
    command: Sequence[str | os.PathLike[str]],
    run: Callable[[Sequence[str | os.PathLike[str]]], T],
) -> T:
    """Call ``run(command)``, logging the command and how long it took."""
    _log.debug("Running: %s", display_command(command))
    start = time.monotonic()
    result = run(command)
    _log.debug("Command succeeded in %.2fs", time.monotonic() - start)
    return result
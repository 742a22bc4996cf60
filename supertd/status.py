"""Parsing of version-control status output."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Generic, TypeVar

__all__ = ["StatusKind", "Status", "StatusParseError", "parse_status", "read_status"]

P = TypeVar("P")
T = TypeVar("T")


class StatusParseError(ValueError):
    """A status line could not be understood."""


class StatusKind(Enum):
    MODIFIED = "M"
    ADDED = "A"
    REMOVED = "R"


_PREFIXES = {
    "A": StatusKind.ADDED,
    "M": StatusKind.MODIFIED,
    "R": StatusKind.REMOVED,
    "D": StatusKind.REMOVED,  # written by some tools for deletions
}


@dataclass(frozen=True)
class Status(Generic[P]):
    """A changed path and how it changed."""

    kind: StatusKind
    path: P

    @classmethod
    def from_line(cls, line: str) -> Status[str]:
        """Parse a line such as ``M dir/file.txt``."""
        if len(line) < 2 or line[1] != " ":
            raise StatusParseError(f"Unexpected line format: {line}")
        kind = _PREFIXES.get(line[0])
        if kind is None:
            raise StatusParseError(f"Unknown line prefix: {line}")
        return cls(kind, line[2:])

    def map(self, f: Callable[[P], T]) -> Status[T]:
        """The same change applied to ``f(path)``."""
        return Status(self.kind, f(self.path))


def _lines(data: str) -> list[str]:
    parts = data.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [p[:-1] if p.endswith("\r") else p for p in parts]


def parse_status(data: str) -> list[Status[str]]:
    """Parse status output, one change per line."""
    return [Status.from_line(line) for line in _lines(data)]


def read_status(path: str | os.PathLike[str]) -> list[Status[str]]:
    """Read and parse a status file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise OSError(
            exc.errno, f"When reading `{os.fspath(path)}`: {exc.strerror}", exc.filename
        ) from exc
    return parse_status(text)
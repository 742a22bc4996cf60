"""Command-line argument handling shared by the tools, including arg files."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from pathlib import Path

__all__ = ["ARGFILE_PREFIX", "expand_arg_files", "get_args"]

ARGFILE_PREFIX = "@"


def _read_argfile(path: Path) -> list[str]:
    # One argument per line; blank lines are dropped.
    text = path.read_text(encoding="utf-8")
    result = []
    for line in text.split("\n"):
        if line.endswith("\r"):
            line = line[:-1]
        if line:
            result.append(line)
    return result


def expand_arg_files(args: Iterable[str]) -> list[str]:
    """Replace each ``@FILE`` argument with the arguments listed in FILE.

    Arg files hold one argument per line and may themselves refer to
    further arg files.
    """
    expanded: list[str] = []
    for arg in args:
        if arg.startswith(ARGFILE_PREFIX):
            path = Path(arg[len(ARGFILE_PREFIX) :])
            expanded.extend(expand_arg_files(_read_argfile(path)))
        else:
            expanded.append(arg)
    return expanded


def get_args(argv: Iterable[str] | None = None) -> list[str]:
    """Return the command-line arguments with arg files expanded.

    Defaults to ``sys.argv[1:]``.
    """
    if argv is None:
        argv = sys.argv[1:]
    try:
        return expand_arg_files(argv)
    except OSError as exc:
        raise OSError(
            exc.errno, f"When parsing arg files: {exc.strerror}", exc.filename
        ) from exc
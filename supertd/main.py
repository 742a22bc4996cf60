"""The ``supertd`` command, which dispatches to the individual tools."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence

from supertd import targets
from supertd.cli import get_args
from supertd.events import init
from supertd.workflow_error import WorkflowError

__all__ = ["VERSION", "IGNORE_EXTRA_ARGUMENTS_ENV", "build_parser", "main"]

VERSION = "0.1.0"
IGNORE_EXTRA_ARGUMENTS_ENV = "SUPERTD_IGNORE_EXTRA_ARGUMENTS"


class _UsageError(Exception):
    """The command line could not be parsed."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str):  # type: ignore[override]
        raise _UsageError(f"{self.prog}: error: {message}\n{self.format_usage()}")


def _run_targets(ns: argparse.Namespace) -> None:
    targets.run(ns.buck, ns.output, ns.dry_run, ns.isolation_dir, ns.arguments)


def build_parser() -> argparse.ArgumentParser:
    """The parser for ``supertd`` and its subcommands."""
    parser = _Parser(
        prog="supertd",
        description="Generic binary for the pieces of the new target-determinator framework.",
    )
    parser.add_argument("--version", action="version", version=f"supertd {VERSION}")
    sub = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    t = sub.add_parser(
        "targets",
        help="Run `buck2 targets` with all the arguments required for BTD/Citadel.",
        description="Run `buck2 targets` with all the arguments required for BTD/Citadel.",
    )
    t.add_argument("--buck", default="buck2", help="The command for running Buck")
    t.add_argument(
        "--output",
        metavar="FILE",
        help="Where to write the output - otherwise gets written to stdout.",
    )
    t.add_argument("--dry-run", action="store_true")
    t.add_argument("--isolation-dir", help="Isolation directory to use for buck invocations.")
    t.add_argument(
        "arguments",
        nargs="*",
        metavar="ARGS",
        help="Arguments passed onwards - typically patterns.",
    )
    t.set_defaults(handler=_run_targets)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point; returns the exit code."""
    with init():
        try:
            args = get_args(argv)
        except OSError as exc:
            print(f"Error parsing arguments: {exc}", file=sys.stderr)
            return 1

        parser = build_parser()
        try:
            if os.environ.get(IGNORE_EXTRA_ARGUMENTS_ENV) == "1":
                ns, _extra = parser.parse_known_args(args)
            else:
                ns = parser.parse_args(args)
        except _UsageError as exc:
            print(exc, file=sys.stderr)
            return 1

        try:
            ns.handler(ns)
        except WorkflowError as err:
            return err.report()
    return 0


if __name__ == "__main__":
    sys.exit(main())
"""Run ``buck2 targets`` with the arguments the target determinator needs."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
import time
from collections.abc import Sequence

from supertd.cli import get_args
from supertd.command import display_command
from supertd.events import Event, init, scuba
from supertd.workflow_error import WorkflowError

__all__ = ["targets_arguments", "build_command", "run", "main"]

_TARGETS_ARGUMENTS = (
    "targets",
    "--streaming",
    "--keep-going",
    "--no-cache",
    "--show-unconfigured-target-hash",
    "--json-lines",
    "--output-attribute=^buck\\.|^name$|^labels$|^ci_srcs$|^ci_srcs_must_match$|^ci_deps$|^remote_execution$",
    "--imports",
    "--package-values-regex=^citadel\\.labels$",
)


def targets_arguments() -> tuple[str, ...]:
    """The fixed arguments passed to Buck for a targets query."""
    return _TARGETS_ARGUMENTS


def build_command(
    buck: str,
    output_file: str | os.PathLike[str] | None,
    isolation_dir: str | None,
    arguments: Sequence[str],
) -> list[str]:
    """The full command line for ``buck2 targets``."""
    command = [buck]
    if isolation_dir is not None:
        command += ["--isolation-dir", isolation_dir]
    command += targets_arguments()
    if output_file is not None:
        command += ["--output", os.fspath(output_file)]
    command += arguments
    return command


def run(
    buck: str,
    output_file: str | os.PathLike[str] | None,
    dry_run: bool,
    isolation_dir: str | None,
    arguments: Sequence[str],
) -> None:
    """Run ``buck2 targets``, writing to ``output_file`` or stdout.

    With ``dry_run`` the command is printed instead of run. If Buck fails,
    the process exits with Buck's exit code.
    """
    start = time.monotonic()
    command = build_command(buck, output_file, isolation_dir, arguments)

    if dry_run:
        print(display_command(command))
        return

    try:
        completed = subprocess.run(command, check=False)
    except OSError as exc:
        raise WorkflowError(str(exc)) from exc
    if completed.returncode == 0:
        scuba(Event.TARGETS_SUCCESS, duration=time.monotonic() - start)
        return
    raise SystemExit(completed.returncode if completed.returncode > 0 else 1)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="targets",
        description="Run `buck2 targets` with all the arguments required for BTD/Citadel.",
    )
    parser.add_argument("--buck", default="buck2", help="The command for running Buck")
    parser.add_argument(
        "--output",
        metavar="FILE",
        help="Where to write the output - otherwise gets written to stdout.",
    )
    parser.add_argument("--dry-run", action="store_true")
    parser.add_argument(
        "--isolation-dir", help="Isolation directory to use for buck invocations."
    )
    parser.add_argument(
        "arguments",
        nargs="*",
        metavar="ARGS",
        help="Arguments passed onwards - typically patterns.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point; returns the exit code."""
    with init():
        try:
            args = get_args(argv)
        except OSError as exc:
            return WorkflowError(str(exc)).report()
        ns = _parser().parse_args(args)
        try:
            run(ns.buck, ns.output, ns.dry_run, ns.isolation_dir, ns.arguments)
        except WorkflowError as err:
            return err.report()
    return 0


if __name__ == "__main__":
    sys.exit(main())
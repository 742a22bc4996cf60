"""Logging set-up shared by the command-line tools."""

from __future__ import annotations

import logging
import os
import sys

__all__ = ["ENV_VAR", "DEBUG_LOGGERS", "init_tracing"]

ENV_VAR = "SUPERTD_LOG"

# Loggers that log at debug level unless the environment says otherwise.
DEBUG_LOGGERS = (
    "supertd",
    "btd",
    "clients",
    "ranker",
    "rerun",
    "scheduler",
    "targets",
    "verifiable",
    "verifiable_matcher",
    "verse",
)

_FORMAT = "%(asctime)s %(levelname)s %(message)s"

_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "off": logging.CRITICAL + 10,
}

_COLOURS = {
    logging.DEBUG: "\x1b[34m",
    logging.INFO: "\x1b[32m",
    logging.WARNING: "\x1b[33m",
    logging.ERROR: "\x1b[31m",
    logging.CRITICAL: "\x1b[31m",
}
_RESET = "\x1b[0m"

_handler: logging.Handler | None = None


class _ColourFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        colour = _COLOURS.get(record.levelno)
        if colour is None:
            return super().format(record)
        original = record.levelname
        record.levelname = f"{colour}{original}{_RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def _apply_directives(spec: str) -> None:
    """Apply comma separated ``level`` or ``logger=level`` directives."""
    root = logging.getLogger()
    root.setLevel(logging.ERROR)
    for part in spec.split(","):
        part = part.strip()
        if not part:
            continue
        name, sep, level_text = part.partition("=")
        if sep:
            level = _LEVELS.get(level_text.strip().lower())
            if level is not None:
                logging.getLogger(name.strip()).setLevel(level)
            continue
        level = _LEVELS.get(part.lower())
        if level is not None:
            root.setLevel(level)
        else:
            # A bare logger name enables everything for that logger.
            logging.getLogger(part).setLevel(logging.DEBUG)


def init_tracing() -> logging.Handler:
    """Send log records to stderr and set the log levels.

    Without ``SUPERTD_LOG`` in the environment the root logger logs at info
    level and the tool loggers at debug level. Calling this again replaces
    the handler installed before. Returns the installed handler.
    """
    global _handler
    root = logging.getLogger()
    spec = os.environ.get(ENV_VAR)
    if spec is None:
        root.setLevel(logging.INFO)
        for name in DEBUG_LOGGERS:
            logging.getLogger(name).setLevel(logging.DEBUG)
    else:
        _apply_directives(spec)

    if _handler is not None:
        root.removeHandler(_handler)
    handler = logging.StreamHandler(sys.stderr)
    formatter_cls = _ColourFormatter if sys.stdout.isatty() else logging.Formatter
    handler.setFormatter(formatter_cls(_FORMAT))
    root.addHandler(handler)
    _handler = handler
    return handler
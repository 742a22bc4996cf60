"""Logging of tool events to the ``supertd_events`` dataset."""

from __future__ import annotations

import json
import logging
import os
import random
import socket
import threading
import time
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import IO, Any

from supertd.knobs import check_boolean_knob
from supertd.logsetup import init_tracing

__all__ = [
    "SCUBA_DATASET",
    "USE_LOGGER_KNOB",
    "LOGFILE_ENV",
    "NEXUS_ENV",
    "SANDCASTLE_VARIABLES",
    "Event",
    "Step",
    "Sample",
    "ScubaClientGuard",
    "init",
    "should_use_logger",
    "sample_builder",
    "scuba",
]

SCUBA_DATASET = "supertd_events"
USE_LOGGER_KNOB = "ci_efficiency/citadel:use_supertd_events_logger"
LOGFILE_ENV = "SUPERTD_SCUBA_LOGFILE"
NEXUS_ENV = "SANDCASTLE_NEXUS"
SANDCASTLE_VARIABLES = (
    "SANDCASTLE_ALIAS_NAME",
    "SANDCASTLE_ALIAS",
    "SANDCASTLE_COMMAND_NAME",
    "SANDCASTLE_INSTANCE_ID",
    "SANDCASTLE_IS_DRY_RUN",
    "SANDCASTLE_JOB_OWNER",
    "SANDCASTLE_NONCE",
    "SANDCASTLE_PHABRICATOR_DIFF_ID",
    "SANDCASTLE_SCHEDULE_TYPE",
    "SANDCASTLE_TYPE",
    "SANDCASTLE_URL",
    "SKYCASTLE_ACTION_ID",
    "SKYCASTLE_JOB_ID",
    "SKYCASTLE_WORKFLOW_RUN_ID",
    "STEP_IDX",
)

_log = logging.getLogger(__name__)


class Event(str, Enum):
    """All events logged to the dataset; each comes from one place in the code."""

    BTD_SUCCESS = "BTD_SUCCESS"
    CITRACE_ARGS_PARSED = "CITRACE_ARGS_PARSED"
    INVALID_TRIGGER = "INVALID_TRIGGER"
    RANKER_SUCCESS = "RANKER_SUCCESS"
    SCHEDULER_SUCCESS = "SCHEDULER_SUCCESS"
    SCHEDULER_FAILURE = "SCHEDULER_FAILURE"
    TARGETS_SUCCESS = "TARGETS_SUCCESS"
    VERIFIABLE_MATCHER_SUCCESS = "VERIFIABLE_MATCHER_SUCCESS"
    VERSE_SUCCESS = "VERSE_SUCCESS"
    BUILD_DIRECTIVES_SPECIFIED = "BUILD_DIRECTIVES_SPECIFIED"
    RE_METADATA_SUCCESS = "RE_METADATA_SUCCESS"
    GENERATED_TARGETS_COUNT = "GENERATED_TARGETS_COUNT"
    QE_CHECK = "QE_CHECK"
    RUNWAY_RELATES_CALL_FAILURE = "RUNWAY_RELATES_CALL_FAILURE"


class Step(str, Enum):
    """The pipeline step an event belongs to."""

    AUDIT = "AUDIT"
    TARGETS = "TARGETS"
    BTD = "BTD"
    VERIFIABLE_MATCHER = "VERIFIABLE_MATCHER"
    RANKER = "RANKER"
    VERSE = "VERSE"
    SCHEDULER = "SCHEDULER"
    RERUN = "RERUN"


class _LogFile:
    """A JSON-lines file that samples are appended to."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()
        self._handle: IO[str] | None = self._open()

    def _open(self) -> IO[str]:
        return open(self.path, "a", encoding="utf-8")

    def write(self, line: str) -> None:
        with self._lock:
            if self._handle is None:
                self._handle = self._open()
            self._handle.write(line + "\n")

    def close(self) -> None:
        with self._lock:
            if self._handle is not None:
                self._handle.close()
                self._handle = None


@dataclass
class Sample:
    """A row for the dataset; rows without a log file are discarded."""

    fields: dict[str, Any] = field(default_factory=dict)
    sample_rate: int | None = None
    _sink: _LogFile | None = field(default=None, repr=False, compare=False)

    def add(self, key: str, value: Any) -> Sample:
        self.fields[key] = value
        return self

    def sampled(self, rate: int) -> Sample:
        """Keep only one in ``rate`` of the samples logged."""
        if rate < 1:
            raise ValueError(f"sample rate must be positive, got {rate}")
        self.sample_rate = rate
        return self

    def try_log(self) -> bool:
        """Write the sample; returns whether it was written.

        Raises ``OSError`` if the log file cannot be written.
        """
        if self.sample_rate is not None and random.randrange(self.sample_rate):
            return False
        if self._sink is None:
            return False
        record = dict(self.fields)
        record.setdefault("time", int(time.time()))
        if self.sample_rate is not None:
            record["weight"] = self.sample_rate
        self._sink.write(json.dumps(record, default=str))
        return True

    def copy(self) -> Sample:
        return Sample(dict(self.fields), self.sample_rate, self._sink)


_BUILDER: Sample | None = None
_LOCK = threading.Lock()


class ScubaClientGuard:
    """Flushes the event log when closed; use it as a context manager."""

    def close(self) -> None:
        builder = _BUILDER
        if builder is not None and builder._sink is not None:
            try:
                builder._sink.close()
            except OSError as exc:
                _log.error("Failed to flush supertd_events Scuba: %r", exc)

    def __enter__(self) -> ScubaClientGuard:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def should_use_logger() -> bool:
    return check_boolean_knob(USE_LOGGER_KNOB)


def _add_common_server_data(sample: Sample) -> None:
    sample.add("server_hostname", socket.gethostname())


def _add_sandcastle_columns(sample: Sample) -> None:
    nexus = os.environ.get(NEXUS_ENV)
    if nexus is None:
        return
    nexus_path = Path(nexus)
    if not nexus_path.exists():
        return
    variables_path = nexus_path / "variables"
    for var in SANDCASTLE_VARIABLES:
        try:
            value = (variables_path / var).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            value = os.environ.get(var)
        if value is not None:
            sample.add(var.lower(), value)


def init() -> ScubaClientGuard:
    """Set up logging and the event client; returns a guard that flushes it.

    With ``SUPERTD_SCUBA_LOGFILE`` set, samples are appended to that file;
    an ``OSError`` is raised if it cannot be opened.
    """
    global _BUILDER
    init_tracing()
    if not should_use_logger():
        path = os.environ.get(LOGFILE_ENV)
        builder = Sample(_sink=None if path is None else _LogFile(path))
        _add_common_server_data(builder)
        _add_sandcastle_columns(builder)
        with _LOCK:
            if _BUILDER is None:
                _BUILDER = builder
                builder = None
        if builder is not None:
            _log.error("supertd_events Scuba client initialized twice")
            if builder._sink is not None:
                builder._sink.close()
    return ScubaClientGuard()


def sample_builder() -> Sample:
    """A fresh sample with the common columns filled in."""
    builder = _BUILDER
    return builder.copy() if builder is not None else Sample()


def _duration_ms(duration: timedelta | float) -> int:
    if isinstance(duration, timedelta):
        return duration // timedelta(milliseconds=1)
    return int(duration * 1000)


def scuba(
    event: Event | str,
    *,
    duration: timedelta | float | None = None,
    data: Any = None,
    sample_rate: int | None = None,
) -> bool:
    """Log an event; returns whether a sample was written.

    ``duration`` is a ``timedelta`` or seconds, ``data`` is stored as JSON.
    Failures are logged rather than raised.
    """
    if should_use_logger():
        return False
    sample = sample_builder()
    sample.add("event", Event(event).name)
    if data is not None:
        try:
            sample.add("data", json.dumps(data))
        except (TypeError, ValueError) as exc:
            _log.error("Failed to serialize `data` column in `scuba!` macro: %r", exc)
    if duration is not None:
        sample.add("duration_ms", _duration_ms(duration))
    if sample_rate is not None:
        if sample_rate > 0:
            sample.sampled(sample_rate)
        else:
            _log.error(
                "`sample_rate` must be nonzero in `scuba!` macro. "
                "This sample will always be logged."
            )
    try:
        return sample.try_log()
    except OSError as exc:
        _log.error("Failed to log to supertd_events Scuba: %r", exc)
        return False
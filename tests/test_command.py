import logging
from pathlib import Path

import pytest

from supertd.command import display_command, with_command


def test_display_command_joins_with_spaces():
    assert display_command(["buck2", "targets", "foo//..."]) == "buck2 targets foo//..."


def test_display_command_accepts_paths():
    assert display_command(["buck2", "--output", Path("out.json")]) == "buck2 --output out.json"


def test_with_command_returns_result_and_logs(caplog):
    seen = []

    def run(cmd):
        seen.append(list(cmd))
        return len(cmd)

    with caplog.at_level(logging.DEBUG, logger="supertd.command"):
        result = with_command(["buck2", "targets"], run)
    assert result == 2
    assert seen == [["buck2", "targets"]]
    assert "Running: buck2 targets" in caplog.text
    assert "Command succeeded" in caplog.text


def test_with_command_propagates_errors(caplog):
    def run(cmd):
        raise RuntimeError("failed to start")

    with caplog.at_level(logging.DEBUG, logger="supertd.command"):
        with pytest.raises(RuntimeError, match="failed to start"):
            with_command(["buck2"], run)
    assert "Command succeeded" not in caplog.text
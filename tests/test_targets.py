import subprocess
from unittest import mock

import pytest

from supertd.targets import build_command, main, run, targets_arguments
from supertd.workflow_error import WorkflowError


@pytest.fixture(autouse=True)
def _no_event_log(monkeypatch):
    monkeypatch.delenv("SUPERTD_SCUBA_LOGFILE", raising=False)
    monkeypatch.delenv("SANDCASTLE_NEXUS", raising=False)


def test_targets_arguments_fixed_values():
    args = targets_arguments()
    assert args[0] == "targets"
    assert "--streaming" in args
    assert "--imports" in args
    assert "--package-values-regex=^citadel\\.labels$" in args


def test_build_command_plain():
    command = build_command("buck2", None, None, ["foo//..."])
    assert command == ["buck2", *targets_arguments(), "foo//..."]


def test_build_command_with_options(tmp_path):
    out = tmp_path / "out.json"
    command = build_command("mybuck", out, "iso", ["a//...", "b//..."])
    assert command[:3] == ["mybuck", "--isolation-dir", "iso"]
    idx = command.index("--output")
    assert command[idx + 1] == str(out)
    assert command[-2:] == ["a//...", "b//..."]
    assert idx > command.index("targets")


def test_dry_run_prints(capsys):
    run("buck2", None, True, None, ["foo//..."])
    out = capsys.readouterr().out
    assert out.startswith("buck2 targets --streaming --keep-going")
    assert out.endswith("foo//...\n")


def test_run_success_invokes_command():
    done = subprocess.CompletedProcess(args=[], returncode=0)
    with mock.patch("supertd.targets.subprocess.run", return_value=done) as fake:
        run("buck2", None, False, "iso", ["x//..."])
    called = fake.call_args[0][0]
    assert called == build_command("buck2", None, "iso", ["x//..."])


def test_run_failure_exits_with_code():
    done = subprocess.CompletedProcess(args=[], returncode=7)
    with mock.patch("supertd.targets.subprocess.run", return_value=done):
        with pytest.raises(SystemExit) as info:
            run("buck2", None, False, None, [])
    assert info.value.code == 7


def test_run_signal_exits_with_one():
    done = subprocess.CompletedProcess(args=[], returncode=-9)
    with mock.patch("supertd.targets.subprocess.run", return_value=done):
        with pytest.raises(SystemExit) as info:
            run("buck2", None, False, None, [])
    assert info.value.code == 1


def test_run_missing_program(tmp_path):
    with pytest.raises(WorkflowError):
        run(str(tmp_path / "no-such-buck"), None, False, None, [])


def test_main_dry_run(capsys):
    assert main(["--dry-run", "--buck", "mybuck", "foo//..."]) == 0
    out = capsys.readouterr().out
    assert out.startswith("mybuck targets")
    assert "foo//..." in out


def test_main_missing_argfile(tmp_path, capsys):
    assert main([f"@{tmp_path / 'missing.args'}"]) == 1
    assert "Error executing" in capsys.readouterr().err
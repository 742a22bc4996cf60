import pytest

from supertd.workflow_error import (
    EXIT_CODE_FAILURE,
    EXIT_CODE_INFRA_FAILURE,
    EXIT_CODE_SKIPPED,
    EXIT_CODE_USER_FAILURE,
    EXIT_CODE_WARNING,
    WorkflowError,
)


@pytest.mark.parametrize(
    "factory, code",
    [
        (WorkflowError.warning, EXIT_CODE_WARNING),
        (WorkflowError.skipped, EXIT_CODE_SKIPPED),
        (WorkflowError.user_failure, EXIT_CODE_USER_FAILURE),
        (WorkflowError.infra_failure, EXIT_CODE_INFRA_FAILURE),
    ],
)
def test_status_errors_report_their_code(factory, code, capsys):
    err = factory("something happened")
    assert err.report() == code
    captured = capsys.readouterr()
    assert "----------------------------------------" in captured.err
    assert captured.err.rstrip().endswith("something happened")


def test_codes_are_distinct():
    codes = {
        WorkflowError.warning("a").exit_code,
        WorkflowError.skipped("a").exit_code,
        WorkflowError.user_failure("a").exit_code,
        WorkflowError.infra_failure("a").exit_code,
    }
    assert len(codes) == 4
    assert EXIT_CODE_FAILURE not in codes


def test_generic_error_reports_failure(capsys):
    err = WorkflowError("boom")
    assert err.report() == EXIT_CODE_FAILURE
    assert "Error executing: boom" in capsys.readouterr().err


def test_error_is_raisable_with_message():
    err = WorkflowError.user_failure("bad input")
    assert str(err) == "bad input"
    assert err.exit_code == EXIT_CODE_USER_FAILURE
    with pytest.raises(WorkflowError, match="bad input") as info:
        raise err
    assert info.value is err
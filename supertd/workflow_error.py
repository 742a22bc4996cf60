"""An error type that carries the workflow exit status."""

from __future__ import annotations

import sys

__all__ = [
    "EXIT_CODE_WARNING",
    "EXIT_CODE_SKIPPED",
    "EXIT_CODE_USER_FAILURE",
    "EXIT_CODE_INFRA_FAILURE",
    "EXIT_CODE_FAILURE",
    "WorkflowError",
]

EXIT_CODE_WARNING = 2
EXIT_CODE_SKIPPED = 3
EXIT_CODE_USER_FAILURE = 4
EXIT_CODE_INFRA_FAILURE = 5
EXIT_CODE_FAILURE = 1

_SEPARATOR = "----------------------------------------"


class WorkflowError(Exception):
    """A failure of a workflow step.

    With an ``exit_code`` the error reports a specific workflow status;
    without one it is a generic failure.
    """

    def __init__(self, message: str, exit_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code

    def __str__(self) -> str:
        return self.message

    @classmethod
    def warning(cls, message: str) -> WorkflowError:
        return cls(message, EXIT_CODE_WARNING)

    @classmethod
    def skipped(cls, message: str) -> WorkflowError:
        return cls(message, EXIT_CODE_SKIPPED)

    @classmethod
    def user_failure(cls, message: str) -> WorkflowError:
        return cls(message, EXIT_CODE_USER_FAILURE)

    @classmethod
    def infra_failure(cls, message: str) -> WorkflowError:
        return cls(message, EXIT_CODE_INFRA_FAILURE)

    def report(self) -> int:
        """Print the error to stderr and return the process exit code."""
        if self.exit_code is not None:
            print(f"\n{_SEPARATOR}", file=sys.stderr)
            print(self.message, file=sys.stderr)
            return self.exit_code
        print(f"Error executing: {self.message}", file=sys.stderr)
        return EXIT_CODE_FAILURE
"""Process exit codes.

A release either succeeds (or is cancelled by the operator, which is not a
failure) or stops with status 1. Failures of git or npm during the mutating
steps keep the tool's own exit status instead.
"""

from enum import IntEnum

__all__ = ["ErrorCode", "tool_exit_code"]


class ErrorCode(IntEnum):
    """Exit codes for the release command.

    These values are used as process exit codes and should remain stable.
    """

    OK = 0
    USER_ERROR = 1


def tool_exit_code(returncode: int | None) -> int:
    """Exit status to use after an external tool failed.

    A tool that could not be started (or timed out) reports -1, which is not
    a valid process status; it maps to USER_ERROR.
    """
    if returncode is None or returncode <= 0:
        return int(ErrorCode.USER_ERROR)
    return returncode

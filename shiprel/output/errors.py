"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shiprel.core.errors import ErrorCode, tool_exit_code
from shiprel.output.console import Style
from shiprel.services.release.errors import ReleaseError

if TYPE_CHECKING:
    from shiprel.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Print a release error with the lines that belong to its kind."""
    match error.kind:
        case "missing_argument":
            console.warning(error.message)
            for line in error.details:
                console.print(line)
        case "invalid_argument":
            console.error(error.message)
            if error.hint:
                console.error(error.hint)
        case "dirty_worktree":
            console.error(error.message)
            for line in error.details:
                console.print(line, Style.DIM)
        case _:
            console.error(error.message)
            if error.hint:
                console.print(f"hint: {error.hint}", Style.DIM)
            for line in error.details:
                console.print(line, Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    """Get exit code for a release error.

    git and npm failures keep the tool's own exit status; everything else
    is a usage or validation failure.
    """
    match error.kind:
        case "git_failed" | "manifest_failed":
            return tool_exit_code(error.returncode)
        case _:
            return int(ErrorCode.USER_ERROR)

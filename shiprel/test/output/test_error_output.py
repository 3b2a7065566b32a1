"""Tests for shiprel.output.errors module."""

from __future__ import annotations

from shiprel.core.errors import ErrorCode
from shiprel.output.console import MockConsole, Style
from shiprel.output.errors import print_release_error, release_error_exit_code
from shiprel.services.release.errors import ReleaseError


def test_missing_argument_is_a_warning_with_examples() -> None:
    console = MockConsole()
    error = ReleaseError(
        kind="missing_argument",
        message="No version specified.",
        details=("Current version: 1.2.3", "Examples:"),
    )

    print_release_error(error, console)

    assert console.messages == [
        "[WARNING] No version specified.",
        "Current version: 1.2.3",
        "Examples:",
    ]
    assert not console.has_error()


def test_invalid_argument_prints_accepted_forms() -> None:
    console = MockConsole()
    error = ReleaseError(
        kind="invalid_argument",
        message="Invalid version type: foo",
        hint="Use: patch, minor, major, or a specific version (e.g., 1.2.3)",
    )

    print_release_error(error, console)

    assert console.messages == [
        "[ERROR] Invalid version type: foo",
        "[ERROR] Use: patch, minor, major, or a specific version (e.g., 1.2.3)",
    ]


def test_dirty_worktree_lists_changes() -> None:
    console = MockConsole()
    error = ReleaseError(kind="dirty_worktree", message="not clean", details=(" M src/a.ts",))

    print_release_error(error, console)

    assert console.outputs[-1].message == " M src/a.ts"
    assert console.outputs[-1].style == Style.DIM


def test_default_prints_hint() -> None:
    console = MockConsole()
    error = ReleaseError(kind="git_failed", message="failed to create tag v1.0.0", hint="fix it")

    print_release_error(error, console)

    assert console.messages == ["[ERROR] failed to create tag v1.0.0", "hint: fix it"]


def test_exit_code_for_tool_failures_keeps_returncode() -> None:
    error = ReleaseError(kind="git_failed", message="x", returncode=128)
    assert release_error_exit_code(error) == 128

    error = ReleaseError(kind="manifest_failed", message="x", returncode=-1)
    assert release_error_exit_code(error) == int(ErrorCode.USER_ERROR)


def test_exit_code_for_validation_errors() -> None:
    for kind in ("not_a_repository", "dirty_worktree", "missing_argument", "invalid_argument"):
        error = ReleaseError(kind=kind, message="x", returncode=5)
        assert release_error_exit_code(error) == int(ErrorCode.USER_ERROR)

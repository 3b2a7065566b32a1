"""Tests for git/repository.py."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from shiprel.core.result import Err, Ok
from shiprel.git.repository import GitStatus, Repository, StatusEntry


def _completed(stdout: str = "", stderr: str = "", returncode: int = 0) -> MagicMock:
    return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)


# =============================================================================
# GitStatus Tests
# =============================================================================


class TestGitStatus:
    def test_clean(self) -> None:
        assert GitStatus(branch="main").is_clean is True

    def test_any_entry_is_dirty(self) -> None:
        status = GitStatus(
            branch="main",
            entries=(
                StatusEntry("M ", "a"),
                StatusEntry(" M", "b"),
                StatusEntry("??", "c"),
            ),
        )
        assert status.is_clean is False


# =============================================================================
# Repository Tests
# =============================================================================


class TestRepositoryStatus:
    def test_parses_branch_and_entries(self, tmp_path: Path) -> None:
        output = "## main...origin/main [ahead 1]\n M package.json\n?? new.txt\n"
        with patch("subprocess.run", return_value=_completed(output)):
            result = Repository(tmp_path).status()

        assert isinstance(result, Ok)
        status = result.value
        assert status.branch == "main"
        assert [e.path for e in status.entries] == ["package.json", "new.txt"]
        assert status.is_clean is False

    def test_clean_tree(self, tmp_path: Path) -> None:
        with patch("subprocess.run", return_value=_completed("## main\n")):
            result = Repository(tmp_path).status()

        assert isinstance(result, Ok)
        assert result.value.is_clean
        assert result.value.branch == "main"

    def test_failure(self, tmp_path: Path) -> None:
        mock = _completed(stderr="fatal: not a git repository", returncode=128)
        with patch("subprocess.run", return_value=mock):
            result = Repository(tmp_path).status()

        assert isinstance(result, Err)
        assert result.error.message == "fatal: not a git repository"
        assert result.error.returncode == 128


class TestRepositoryQueries:
    def test_is_repository(self, tmp_path: Path) -> None:
        with patch("subprocess.run", return_value=_completed(".git\n")) as mock:
            assert Repository(tmp_path).is_repository() is True

        args = mock.call_args[0][0]
        assert args == ["git", "-C", str(tmp_path), "rev-parse", "--git-dir"]

    def test_is_not_repository(self, tmp_path: Path) -> None:
        with patch("subprocess.run", return_value=_completed(returncode=128)):
            assert Repository(tmp_path).is_repository() is False

    def test_current_branch(self, tmp_path: Path) -> None:
        with patch("subprocess.run", return_value=_completed("main\n")):
            assert Repository(tmp_path).current_branch() == "main"

    def test_detached_head(self, tmp_path: Path) -> None:
        with patch("subprocess.run", return_value=_completed("HEAD\n")):
            assert Repository(tmp_path).current_branch() is None

    def test_remote_url(self, tmp_path: Path) -> None:
        url = "git@github.com:acme/widget.git\n"
        with patch("subprocess.run", return_value=_completed(url)) as mock:
            assert Repository(tmp_path).remote_url("origin") == "git@github.com:acme/widget.git"

        assert mock.call_args[0][0][-3:] == ["config", "--get", "remote.origin.url"]

    def test_remote_url_unknown(self, tmp_path: Path) -> None:
        with patch("subprocess.run", return_value=_completed(returncode=1)):
            assert Repository(tmp_path).remote_url("nope") is None

    def test_short_status(self, tmp_path: Path) -> None:
        with patch("subprocess.run", return_value=_completed(" M a\n?? b\n")):
            result = Repository(tmp_path).short_status()

        assert result == Ok(" M a\n?? b")


class TestRepositoryMutations:
    def test_add_paths(self, tmp_path: Path) -> None:
        with patch("subprocess.run", return_value=_completed()) as mock:
            result = Repository(tmp_path).add(["package.json", "package-lock.json"])

        assert isinstance(result, Ok)
        assert mock.call_args[0][0][-4:] == ["add", "--", "package.json", "package-lock.json"]

    def test_commit(self, tmp_path: Path) -> None:
        with patch("subprocess.run", return_value=_completed("[main abc123] msg\n")) as mock:
            result = Repository(tmp_path).commit("chore: bump version to 1.2.4")

        assert result == Ok("[main abc123] msg")
        assert mock.call_args[0][0][-3:] == ["commit", "-m", "chore: bump version to 1.2.4"]

    def test_commit_failure_keeps_returncode(self, tmp_path: Path) -> None:
        mock = _completed(stdout="nothing to commit", returncode=1)
        with patch("subprocess.run", return_value=mock):
            result = Repository(tmp_path).commit("msg")

        assert isinstance(result, Err)
        assert result.error.message == "nothing to commit"
        assert result.error.returncode == 1

    def test_tag_annotated(self, tmp_path: Path) -> None:
        with patch("subprocess.run", return_value=_completed()) as mock:
            result = Repository(tmp_path).tag_annotated("v1.2.4", "Release v1.2.4")

        assert isinstance(result, Ok)
        assert mock.call_args[0][0][-5:] == ["tag", "-a", "v1.2.4", "-m", "Release v1.2.4"]

    def test_tag_exists(self, tmp_path: Path) -> None:
        mock = _completed(stderr="fatal: tag 'v1.2.4' already exists", returncode=128)
        with patch("subprocess.run", return_value=mock):
            result = Repository(tmp_path).tag_annotated("v1.2.4", "Release v1.2.4")

        assert isinstance(result, Err)
        assert "already exists" in result.error.message
        assert result.error.returncode == 128

    def test_push_uses_network_timeout(self, tmp_path: Path) -> None:
        with patch("subprocess.run", return_value=_completed()) as mock:
            result = Repository(tmp_path).push("origin", "v1.2.4")

        assert isinstance(result, Ok)
        assert mock.call_args[0][0][-3:] == ["push", "origin", "v1.2.4"]
        assert mock.call_args[1]["timeout"] == 180.0

    def test_push_timeout(self, tmp_path: Path) -> None:
        error = subprocess.TimeoutExpired(cmd="git push", timeout=180.0)
        with patch("subprocess.run", side_effect=error):
            result = Repository(tmp_path).push("origin", "main")

        assert isinstance(result, Err)
        assert "timed out" in result.error.message
        assert result.error.returncode == -1

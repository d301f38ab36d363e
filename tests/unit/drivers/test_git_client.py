"""Unit tests for GitClient against a throwaway local repository."""

import shutil
import subprocess
from pathlib import Path

import pytest

from toolchain_report.drivers.exceptions import CommandError
from toolchain_report.drivers.git import GitClient

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def _git(repo: Path, *args: str) -> str:
    completed = subprocess.run(
        [
            "git",
            "-C",
            str(repo),
            "-c",
            "user.name=Test",
            "-c",
            "user.email=test@example.com",
            "-c",
            "commit.gpgsign=false",
            *args,
        ],
        check=True,
        capture_output=True,
        text=True,
    )
    return completed.stdout.strip()


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """Create a repository with a tag followed by two more commits."""
    path = tmp_path / "repo"
    path.mkdir()
    _git(path, "init", "--quiet")
    _git(path, "commit", "--quiet", "--allow-empty", "-m", "initial")
    _git(path, "tag", "v1")
    _git(path, "commit", "--quiet", "--allow-empty", "-m", "runtime: faster maps")
    _git(path, "commit", "--quiet", "--allow-empty", "-m", "cmd/compile: inline more")
    _git(path, "tag", "v2")
    return path


class TestGitClient:
    """Tests for GitClient."""

    def test_resolve_tag(self, repo: Path) -> None:
        """A tag should resolve to its full commit hash."""
        commit = GitClient().resolve(repo, "v1")

        assert commit == _git(repo, "rev-parse", "v1^{commit}")
        assert len(commit) == 40

    def test_resolve_unknown_revision(self, repo: Path) -> None:
        """An unknown revision should raise CommandError."""
        with pytest.raises(CommandError, match="does not resolve"):
            GitClient().resolve(repo, "no-such-tag")

    def test_checkout_and_current_revision(self, repo: Path) -> None:
        """Checking out a revision should move HEAD to it."""
        client = GitClient()

        client.checkout(repo, "v1")

        assert client.current_revision(repo) == client.resolve(repo, "v1")

    def test_commit_count(self, repo: Path) -> None:
        """The count should include commits reachable from new but not old."""
        assert GitClient().commit_count(repo, "v1", "v2") == 2
        assert GitClient().commit_count(repo, "v2", "v2") == 0

    def test_log(self, repo: Path) -> None:
        """The log should have one line per commit, newest first."""
        lines = GitClient().log(repo, "v1", "v2").splitlines()

        assert len(lines) == 2
        assert lines[0].endswith("cmd/compile: inline more")
        assert lines[1].endswith("runtime: faster maps")

    def test_not_a_repository(self, tmp_path: Path) -> None:
        """Commands against a non-repository should raise CommandError."""
        with pytest.raises(CommandError):
            GitClient().current_revision(tmp_path)

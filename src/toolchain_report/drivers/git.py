"""Git client for the toolchain source checkout.

This module implements VCSClient by invoking the system git CLI through
run_command, the same way the rest of the harness drives external tools.
"""

from __future__ import annotations

from pathlib import Path

from toolchain_report.config.defaults import DEFAULT_VCS_TIMEOUT_SECONDS
from toolchain_report.drivers.base import VCSClient
from toolchain_report.drivers.exceptions import CommandError
from toolchain_report.drivers.process import CommandResult, run_command

__all__ = ["GitClient"]


class GitClient(VCSClient):
    """VCSClient backed by the git command line.

    Attributes:
        executable: The git binary to invoke.
        timeout_seconds: Timeout applied to every git command.

    """

    def __init__(
        self,
        executable: str = "git",
        timeout_seconds: float = DEFAULT_VCS_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the client.

        Args:
            executable: The git binary to invoke.
            timeout_seconds: Timeout applied to every git command.

        """
        self.executable = executable
        self.timeout_seconds = timeout_seconds

    def fetch(self, repository: Path) -> None:
        """Fetch branches and tags from the default remote."""
        self._git(repository, "fetch", "--tags", "--quiet").check()

    def resolve(self, repository: Path, revision: str) -> str:
        """Return the full commit hash a revision points to."""
        result = self._git(
            repository, "rev-parse", "--verify", "--quiet", f"{revision}^{{commit}}"
        )
        if not result.ok or not result.stdout.strip():
            raise CommandError(
                result.args,
                f"revision {revision!r} does not resolve to a commit",
                returncode=result.returncode,
                output=result.output,
            )
        return result.stdout.strip()

    def checkout(self, repository: Path, revision: str) -> None:
        """Check out a revision, detaching HEAD."""
        self._git(repository, "checkout", "--quiet", "--detach", revision).check()

    def current_revision(self, repository: Path) -> str:
        """Return the full hash of HEAD."""
        return self._git(repository, "rev-parse", "HEAD").check().stdout.strip()

    def commit_count(self, repository: Path, from_revision: str, to_revision: str) -> int:
        """Count the commits in from_revision..to_revision."""
        result = self._git(
            repository, "rev-list", "--count", f"{from_revision}..{to_revision}"
        ).check()
        try:
            return int(result.stdout.strip())
        except ValueError as e:
            raise CommandError(
                result.args, "printed a non-numeric commit count", output=result.stdout
            ) from e

    def log(self, repository: Path, from_revision: str, to_revision: str) -> str:
        """Return `git log --oneline` output for from_revision..to_revision."""
        result = self._git(
            repository, "log", "--oneline", "--no-color", f"{from_revision}..{to_revision}"
        ).check()
        return result.stdout

    def _git(self, repository: Path, *args: str) -> CommandResult:
        return run_command(
            [self.executable, "-C", str(repository), *args],
            timeout=self.timeout_seconds,
        )

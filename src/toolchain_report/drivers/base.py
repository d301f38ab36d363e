"""Capability interfaces for the external tools the harness drives.

This module defines the two narrow interfaces the core logic depends on:

- BuildDriver: everything done with the toolchain under test (rebuild it
  from source, fetch packages, build and test them, run the benchmark).
- VCSClient: everything done with the toolchain's own source checkout
  (fetch, resolve and check out revisions, read the log).

The workspace manager and toolchain controller only talk to these
interfaces, so tests substitute in-memory fakes for real processes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

__all__ = ["BuildDriver", "BuildTestOutcome", "VCSClient"]


@dataclass(frozen=True)
class BuildTestOutcome:
    """Result of one build+test sample of one package.

    Attributes:
        success: True if the package built and its tests passed.
        duration_seconds: Wall-clock time of the build and test steps.
        output: Combined tool output, kept for diagnostics.

    """

    success: bool
    duration_seconds: float
    output: str = ""


class BuildDriver(ABC):
    """Abstract base class for toolchain build drivers.

    A driver knows how to invoke one toolchain. Methods raise DriverError
    when the tool itself cannot do its job (cannot start, crashes, times
    out, the package is missing). A package whose tests fail is not an
    error: build_and_test reports it in its outcome.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the driver identifier (e.g. "go")."""
        ...

    @abstractmethod
    def rebuild(self) -> None:
        """Rebuild the toolchain's own binaries from its source checkout.

        Raises:
            DriverError: If the rebuild cannot run or exits unsuccessfully.

        """
        ...

    @abstractmethod
    def fetch(self, workspace_root: Path, package: str) -> None:
        """Download a package's source into the workspace.

        Fetching an already present package must not duplicate it.

        Raises:
            DriverError: If the download fails.

        """
        ...

    @abstractmethod
    def build_and_test(self, workspace_root: Path, package: str) -> BuildTestOutcome:
        """Build a package and run its tests once with the active toolchain.

        Raises:
            DriverError: If the harness itself fails.

        """
        ...

    @abstractmethod
    def run_benchmark(self, workspace_root: Path, benchmark: str) -> str:
        """Run a benchmark suite and return its standard output.

        Raises:
            DriverError: If the suite cannot run or exits unsuccessfully.

        """
        ...

    @abstractmethod
    def artifact_dirs(self, workspace_root: Path) -> list[Path]:
        """Return the directories holding derived build artifacts.

        These are removed between revisions. Fetched sources must not live
        under any of them.
        """
        ...


class VCSClient(ABC):
    """Abstract base class for version control clients."""

    @abstractmethod
    def fetch(self, repository: Path) -> None:
        """Update the repository from its remote."""
        ...

    @abstractmethod
    def resolve(self, repository: Path, revision: str) -> str:
        """Return the commit a revision identifier points to.

        Raises:
            DriverError: If the revision does not resolve to a commit.

        """
        ...

    @abstractmethod
    def checkout(self, repository: Path, revision: str) -> None:
        """Check out a revision in the working tree."""
        ...

    @abstractmethod
    def current_revision(self, repository: Path) -> str:
        """Return the commit currently checked out."""
        ...

    @abstractmethod
    def commit_count(self, repository: Path, from_revision: str, to_revision: str) -> int:
        """Count commits reachable from to_revision but not from from_revision."""
        ...

    @abstractmethod
    def log(self, repository: Path, from_revision: str, to_revision: str) -> str:
        """Return the one-line-per-commit log for from_revision..to_revision."""
        ...

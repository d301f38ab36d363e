"""Exceptions for the workspace module.

This module defines exceptions raised while preparing the workspace and
while fetching, building, testing and benchmarking corpus packages in it.
"""

from __future__ import annotations

from pathlib import Path

from toolchain_report.exceptions import ToolchainReportError

__all__ = [
    "BenchmarkRunError",
    "CorpusRunError",
    "FetchError",
    "WorkspaceError",
    "WorkspaceInitError",
]


class WorkspaceError(ToolchainReportError):
    """Base exception for workspace-related errors."""

    pass


class WorkspaceInitError(WorkspaceError):
    """Raised when the workspace root cannot be created or written.

    Attributes:
        root: The workspace root that was requested.
        reason: Why it is unusable.

    """

    def __init__(self, root: Path | None, reason: str) -> None:
        """Initialize WorkspaceInitError.

        Args:
            root: The workspace root that was requested (None for a temp dir).
            reason: Why it is unusable.

        """
        self.root = root
        self.reason = reason
        where = str(root) if root is not None else "temporary directory"
        super().__init__(f"Cannot initialize workspace at {where}: {reason}")


class FetchError(WorkspaceError):
    """Raised when a package cannot be downloaded into the workspace.

    Attributes:
        package: The package that failed.
        cause: The underlying error.

    """

    def __init__(self, package: str, cause: Exception) -> None:
        """Initialize FetchError.

        Args:
            package: The package that failed.
            cause: The underlying error.

        """
        self.package = package
        self.cause = cause
        super().__init__(f"Failed to fetch {package}: {cause}")


class CorpusRunError(WorkspaceError):
    """Raised when a package cannot even be built or tested.

    A failing test suite is recorded as a failed result instead; this
    error means the harness broke and the corpus pass is abandoned.

    Attributes:
        package: The package that broke the pass.
        cause: The underlying error.

    """

    def __init__(self, package: str, cause: Exception) -> None:
        """Initialize CorpusRunError.

        Args:
            package: The package that broke the pass.
            cause: The underlying error.

        """
        self.package = package
        self.cause = cause
        super().__init__(f"Corpus run aborted at {package}: {cause}")


class BenchmarkRunError(WorkspaceError):
    """Raised when the benchmark suite fails or its output cannot be parsed.

    Attributes:
        benchmark: The benchmark suite identifier.
        reason: What went wrong.

    """

    def __init__(self, benchmark: str, reason: str) -> None:
        """Initialize BenchmarkRunError.

        Args:
            benchmark: The benchmark suite identifier.
            reason: What went wrong.

        """
        self.benchmark = benchmark
        self.reason = reason
        super().__init__(f"Benchmark {benchmark} failed: {reason}")

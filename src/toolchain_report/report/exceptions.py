"""Exceptions for report module.

This module defines exceptions related to report composition
and report file writing.
"""

from __future__ import annotations

from pathlib import Path

from toolchain_report.exceptions import ToolchainReportError

__all__ = [
    "ReportError",
    "ReportGenerationError",
    "ReportWriteError",
]


class ReportError(ToolchainReportError):
    """Base exception for report errors."""

    pass


class ReportGenerationError(ReportError):
    """Raised when two snapshots cannot be composed into one report."""

    pass


class ReportWriteError(ReportError):
    """Raised when the report file cannot be written.

    Attributes:
        path: The report path.

    """

    def __init__(self, path: Path, reason: str) -> None:
        """Initialize ReportWriteError.

        Args:
            path: The report path.
            reason: Why the write failed.

        """
        self.path = path
        super().__init__(f"Failed to write report to {path}: {reason}")

"""Exceptions for the CLI module.

This module defines exceptions specific to CLI operations.
"""

from toolchain_report.exceptions import ToolchainReportError

__all__ = [
    "CLIError",
    "UsageError",
]


class CLIError(ToolchainReportError):
    """Base exception for CLI-related errors."""

    pass


class UsageError(CLIError):
    """Raised when the command line or its environment is malformed."""

    pass

"""Base exceptions for toolchain-report.

This module defines the root exception hierarchy for the entire
toolchain-report package. All domain-specific exceptions should
inherit from ToolchainReportError.
"""

__all__ = ["ToolchainReportError"]


class ToolchainReportError(Exception):
    """Base exception for all toolchain-report errors.

    All exceptions in the toolchain_report package inherit from this base.
    The CLI catches it to turn any failed step into a non-zero exit.
    """

    pass

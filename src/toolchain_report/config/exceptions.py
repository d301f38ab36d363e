"""Exceptions for config module.

This module defines exceptions related to configuration loading,
parsing, and validation errors.
"""

from toolchain_report.exceptions import ToolchainReportError

__all__ = ["ConfigurationError"]


class ConfigurationError(ToolchainReportError):
    """Base exception for configuration-related errors."""

    pass

"""Exceptions for the orchestrator module.

This module defines exceptions related to the comparison run lifecycle
and its state transitions.
"""

from toolchain_report.exceptions import ToolchainReportError

__all__ = ["InvalidRunStateError", "OrchestratorError"]


class OrchestratorError(ToolchainReportError):
    """Base exception for orchestration errors."""

    pass


class InvalidRunStateError(OrchestratorError):
    """Raised when a run step is attempted out of order."""

    pass

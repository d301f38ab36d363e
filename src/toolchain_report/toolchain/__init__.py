"""Toolchain source checkout control: revision switching and history."""

from toolchain_report.toolchain.controller import ToolchainController
from toolchain_report.toolchain.exceptions import (
    LogExtractionError,
    RevisionSwitchError,
    ToolchainError,
)

__all__ = [
    "LogExtractionError",
    "RevisionSwitchError",
    "ToolchainController",
    "ToolchainError",
]

"""Exceptions for the driver module.

This module defines exceptions raised when an external process (the
toolchain's build tool or the version control client) cannot be run
or does not finish.
"""

from __future__ import annotations

from collections.abc import Sequence

from toolchain_report.exceptions import ToolchainReportError

__all__ = [
    "CommandError",
    "CommandTimeoutError",
    "DriverError",
]


class DriverError(ToolchainReportError):
    """Base exception for driver errors."""

    pass


class CommandError(DriverError):
    """Raised when an external command fails to start or exits unsuccessfully.

    Attributes:
        command: The command line.
        returncode: Exit status, or None if the process never ran.
        output: Tail of the combined output, for diagnostics.

    """

    def __init__(
        self,
        command: Sequence[str],
        reason: str,
        returncode: int | None = None,
        output: str = "",
    ) -> None:
        """Initialize CommandError.

        Args:
            command: The command line.
            reason: Short description of the failure.
            returncode: Exit status, or None if the process never ran.
            output: Output captured from the process.

        """
        self.command = list(command)
        self.reason = reason
        self.returncode = returncode
        self.output = _tail(output)
        message = f"`{' '.join(self.command)}` {reason}"
        if self.output:
            message += f":\n{self.output}"
        super().__init__(message)


class CommandTimeoutError(CommandError):
    """Raised when an external command outlives its timeout and is killed.

    Attributes:
        timeout_seconds: The timeout that was exceeded.

    """

    def __init__(
        self,
        command: Sequence[str],
        timeout_seconds: float,
        output: str = "",
    ) -> None:
        """Initialize CommandTimeoutError.

        Args:
            command: The command line.
            timeout_seconds: The timeout that was exceeded.
            output: Output captured before the process was killed.

        """
        self.timeout_seconds = timeout_seconds
        super().__init__(command, f"timed out after {timeout_seconds:g} seconds", output=output)


def _tail(text: str, max_lines: int = 20) -> str:
    lines = text.strip().splitlines()
    if len(lines) > max_lines:
        lines = ["..."] + lines[-max_lines:]
    return "\n".join(lines)

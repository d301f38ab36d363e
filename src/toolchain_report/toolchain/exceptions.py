"""Exceptions for the toolchain module.

This module defines exceptions raised while switching the toolchain
checkout between revisions and while reading its history.
"""

from toolchain_report.exceptions import ToolchainReportError

__all__ = [
    "LogExtractionError",
    "RevisionSwitchError",
    "ToolchainError",
]


class ToolchainError(ToolchainReportError):
    """Base exception for toolchain checkout errors."""

    pass


class RevisionSwitchError(ToolchainError):
    """Raised when the toolchain cannot be checked out or rebuilt at a revision.

    Attributes:
        revision: The requested revision identifier.
        step: The step that failed ("fetch", "resolve", "checkout" or "rebuild").
        cause: The underlying error.

    """

    def __init__(self, revision: str, step: str, cause: Exception) -> None:
        """Initialize RevisionSwitchError.

        Args:
            revision: The requested revision identifier.
            step: The step that failed.
            cause: The underlying error.

        """
        self.revision = revision
        self.step = step
        self.cause = cause
        super().__init__(f"Cannot switch toolchain to {revision!r} ({step} failed): {cause}")


class LogExtractionError(ToolchainError):
    """Raised when the commit log between two revisions cannot be read.

    Attributes:
        from_revision: Start of the range (exclusive).
        to_revision: End of the range (inclusive).
        cause: The underlying error.

    """

    def __init__(self, from_revision: str, to_revision: str, cause: Exception) -> None:
        """Initialize LogExtractionError.

        Args:
            from_revision: Start of the range (exclusive).
            to_revision: End of the range (inclusive).
            cause: The underlying error.

        """
        self.from_revision = from_revision
        self.to_revision = to_revision
        self.cause = cause
        super().__init__(f"Cannot read log {from_revision}..{to_revision}: {cause}")

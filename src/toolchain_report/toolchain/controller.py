"""Toolchain revision controller.

This module defines the ToolchainController class, which owns the source
checkout of the toolchain under test. Switching revisions checks the
requested revision out, confirms HEAD landed on the resolved commit and
rebuilds the toolchain from it. Only the rebuild is timed, since that is
what the comparison measures.
"""

from __future__ import annotations

import time
from pathlib import Path

from toolchain_report.drivers.base import BuildDriver, VCSClient
from toolchain_report.drivers.exceptions import DriverError
from toolchain_report.logging_config import get_logger
from toolchain_report.models.results import CommitLog
from toolchain_report.toolchain.exceptions import LogExtractionError, RevisionSwitchError

__all__ = ["ToolchainController"]

logger = get_logger(__name__)


class ToolchainController:
    """Switches the toolchain checkout between revisions and reads its log.

    After a successful switch_revision(), active_revision is the requested
    revision. After a failed one it is None: the checkout is in an unknown
    state and nothing may be measured with it.

    Attributes:
        checkout: Path of the toolchain source checkout.
        vcs: Version control client for the checkout.
        driver: Build driver that rebuilds the toolchain.
        fetch_remote: Whether to fetch from the remote before checkout.

    """

    def __init__(
        self,
        checkout: Path,
        vcs: VCSClient,
        driver: BuildDriver,
        fetch_remote: bool = True,
    ) -> None:
        """Initialize the controller.

        Args:
            checkout: Path of the toolchain source checkout.
            vcs: Version control client for the checkout.
            driver: Build driver that rebuilds the toolchain.
            fetch_remote: Whether to fetch from the remote before checkout.

        """
        self.checkout = Path(checkout)
        self.vcs = vcs
        self.driver = driver
        self.fetch_remote = fetch_remote
        self._active_revision: str | None = None
        self._fetched = False

    @property
    def active_revision(self) -> str | None:
        """Revision of the last successful switch, or None."""
        return self._active_revision

    def switch_revision(self, revision: str) -> float:
        """Check out a revision and rebuild the toolchain from it.

        Args:
            revision: Tag, branch or commit to switch to.

        Returns:
            Wall-clock duration of the rebuild, in seconds.

        Raises:
            RevisionSwitchError: If any step fails. The active revision is
                cleared before raising.

        """
        logger.info("revision_switching", revision=revision, checkout=str(self.checkout))
        self._active_revision = None

        step = "fetch"
        try:
            if self.fetch_remote and not self._fetched:
                self.vcs.fetch(self.checkout)
                self._fetched = True
            step = "resolve"
            commit = self.vcs.resolve(self.checkout, revision)
            step = "checkout"
            self.vcs.checkout(self.checkout, commit)
            head = self.vcs.current_revision(self.checkout)
            if head != commit:
                raise DriverError(f"checkout left HEAD at {head!r}, expected {commit!r}")
            step = "rebuild"
            start = time.perf_counter()
            self.driver.rebuild()
            duration = time.perf_counter() - start
        except DriverError as e:
            logger.error(
                "revision_switch_failed",
                revision=revision,
                step=step,
                error=str(e),
            )
            raise RevisionSwitchError(revision, step, e) from e

        self._active_revision = revision
        logger.info(
            "revision_switched",
            revision=revision,
            commit=commit,
            rebuild_seconds=round(duration, 3),
        )
        return duration

    def get_log(self, from_revision: str, to_revision: str) -> CommitLog:
        """Read the commits between two revisions.

        Does not touch the working tree.

        Args:
            from_revision: Start of the range (exclusive).
            to_revision: End of the range (inclusive).

        Returns:
            The commit count and one-line-per-commit log. Empty for
            identical revisions.

        Raises:
            LogExtractionError: If the log cannot be read.

        """
        if from_revision == to_revision:
            return CommitLog(count=0, text="")
        try:
            count = self.vcs.commit_count(self.checkout, from_revision, to_revision)
            text = self.vcs.log(self.checkout, from_revision, to_revision) if count else ""
        except DriverError as e:
            raise LogExtractionError(from_revision, to_revision, e) from e
        logger.debug(
            "commit_log_read",
            from_revision=from_revision,
            to_revision=to_revision,
            count=count,
        )
        return CommitLog(count=count, text=text)

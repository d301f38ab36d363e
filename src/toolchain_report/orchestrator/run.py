"""End-to-end comparison run.

This module defines ComparisonRun, which sequences one A/B comparison:

    idle -> workspace_ready
         -> old_revision_active -> old_corpus_run -> old_benchmark_run
         -> new_revision_active -> new_corpus_run -> new_benchmark_run
         -> report_ready

Any failure moves the run to failed and re-raises. The report file is
written only on the way into report_ready, so a failed run never leaves
a partial report behind. Build artifacts must be purged before each
corpus pass; the run refuses to measure otherwise.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import date
from pathlib import Path

from toolchain_report.config.corpus import Corpus
from toolchain_report.config.defaults import DEFAULT_REPORT_NAME, DEFAULT_SAMPLE_COUNT
from toolchain_report.drivers.base import BuildDriver
from toolchain_report.logging_config import get_logger
from toolchain_report.models.enums import RunState, SampleAggregation
from toolchain_report.models.results import CommitLog, Snapshot
from toolchain_report.orchestrator.exceptions import InvalidRunStateError
from toolchain_report.orchestrator.state_machine import StateMachineMixin
from toolchain_report.report.builder import compose_report
from toolchain_report.report.writer import write_report
from toolchain_report.toolchain.controller import ToolchainController
from toolchain_report.workspace.manager import Workspace

__all__ = ["ComparisonRun"]

logger = get_logger(__name__)

_FORWARD: list[RunState] = [
    RunState.idle,
    RunState.workspace_ready,
    RunState.old_revision_active,
    RunState.old_corpus_run,
    RunState.old_benchmark_run,
    RunState.new_revision_active,
    RunState.new_corpus_run,
    RunState.new_benchmark_run,
    RunState.report_ready,
]

_RUN_TRANSITIONS: dict[RunState, set[RunState]] = {
    state: {following, RunState.failed} for state, following in zip(_FORWARD, _FORWARD[1:])
}
_RUN_TRANSITIONS[RunState.report_ready] = set()
_RUN_TRANSITIONS[RunState.failed] = set()


class ComparisonRun(StateMachineMixin[RunState]):
    """One A/B comparison of two toolchain revisions.

    A ComparisonRun executes once. Create a new one for another comparison.

    Attributes:
        corpus: Packages and benchmark suite to measure.
        controller: Controller of the toolchain checkout.
        driver: Build driver shared with the controller.
        workspace_root: Persistent workspace root, or None for a temp dir.
        report_path: Where the report is written.
        sample_count: Build+test samples per package.
        aggregation: How samples are reduced to one duration.
        state: Current run state.
        error: The error that failed the run, if any.
        old_snapshot: Measurements of the old revision, once taken.
        new_snapshot: Measurements of the new revision, once taken.
        commit_log: Commits between the revisions, once read.
        report_text: The rendered report, once composed.

    """

    _VALID_TRANSITIONS = _RUN_TRANSITIONS
    _TERMINAL_STATES = {RunState.report_ready, RunState.failed}

    def __init__(
        self,
        corpus: Corpus,
        controller: ToolchainController,
        driver: BuildDriver,
        workspace_root: Path | None = None,
        report_path: Path = Path(DEFAULT_REPORT_NAME),
        sample_count: int = DEFAULT_SAMPLE_COUNT,
        aggregation: SampleAggregation = SampleAggregation.min,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Initialize the run in the idle state.

        Args:
            corpus: Packages and benchmark suite to measure.
            controller: Controller of the toolchain checkout.
            driver: Build driver for the toolchain under test.
            workspace_root: Persistent workspace root, or None for a temp dir.
            report_path: Where the report is written.
            sample_count: Build+test samples per package.
            aggregation: How samples are reduced to one duration.
            today: Source of the report date.

        """
        self.corpus = corpus
        self.controller = controller
        self.driver = driver
        self.workspace_root = workspace_root
        self.report_path = report_path
        self.sample_count = sample_count
        self.aggregation = aggregation
        self._today = today

        self.state = RunState.idle
        self.error: Exception | None = None
        self.old_snapshot: Snapshot | None = None
        self.new_snapshot: Snapshot | None = None
        self.commit_log: CommitLog | None = None
        self.report_text: str | None = None
        self._artifacts_clean = False

    def _get_current_state(self) -> RunState:
        return self.state

    def _set_current_state(self, state: RunState) -> None:
        logger.debug("run_state_changed", previous=self.state.value, state=state.value)
        self.state = state

    def execute(self, old_revision: str, new_revision: str) -> str:
        """Measure both revisions and write the comparison report.

        Args:
            old_revision: Baseline revision identifier.
            new_revision: Candidate revision identifier.

        Returns:
            The rendered report text.

        Raises:
            InvalidRunStateError: If the run has already executed.
            ToolchainReportError: Whatever step failed; the run is then in
                the failed state and no report was written.

        """
        if self.state is not RunState.idle:
            raise InvalidRunStateError(
                f"Run already executed (state: {self.state.value}); create a new run"
            )

        start = time.perf_counter()
        logger.info(
            "run_starting",
            old_revision=old_revision,
            new_revision=new_revision,
            packages=len(self.corpus.packages),
            sample_count=self.sample_count,
        )
        try:
            workspace = self._prepare_workspace()
            try:
                self.old_snapshot = self._measure(
                    workspace,
                    old_revision,
                    RunState.old_revision_active,
                    RunState.old_corpus_run,
                    RunState.old_benchmark_run,
                )
                workspace.clean_artifacts()
                self._artifacts_clean = True
                self.new_snapshot = self._measure(
                    workspace,
                    new_revision,
                    RunState.new_revision_active,
                    RunState.new_corpus_run,
                    RunState.new_benchmark_run,
                )
            finally:
                workspace.cleanup()
            report_text = self._build_report(old_revision, new_revision)
        except Exception as e:
            self.error = e
            failed_after = self.state
            if not self.is_terminal():
                self._transition(RunState.failed)
            logger.error("run_failed", failed_after=failed_after.value, error=str(e))
            raise

        logger.info("run_complete", duration_seconds=round(time.perf_counter() - start, 3))
        return report_text

    def _prepare_workspace(self) -> Workspace:
        workspace = Workspace.initialize(self.driver, self.workspace_root)
        try:
            workspace.clean_artifacts()
            self._artifacts_clean = True
            workspace.fetch(*self.corpus.packages)
        except Exception:
            workspace.cleanup()
            raise
        self._transition(RunState.workspace_ready)
        return workspace

    def _measure(
        self,
        workspace: Workspace,
        revision: str,
        revision_active: RunState,
        corpus_run: RunState,
        benchmark_run: RunState,
    ) -> Snapshot:
        if not self._artifacts_clean:
            raise InvalidRunStateError(
                f"Build artifacts were not purged before activating {revision!r}"
            )
        rebuild_seconds = self.controller.switch_revision(revision)
        self._transition(revision_active)
        self._artifacts_clean = False

        packages = workspace.run_corpus(
            self.corpus.packages, self.sample_count, self.aggregation
        )
        self._transition(corpus_run)

        benchmark = workspace.run_benchmark(self.corpus.benchmark)
        self._transition(benchmark_run)

        return Snapshot(
            revision=revision,
            rebuild_seconds=rebuild_seconds,
            packages=tuple(packages),
            benchmark=benchmark,
        )

    def _build_report(self, old_revision: str, new_revision: str) -> str:
        if self.old_snapshot is None or self.new_snapshot is None:
            raise InvalidRunStateError("Both revisions must be measured before reporting")

        self.commit_log = self.controller.get_log(old_revision, new_revision)
        report_text = compose_report(
            self.old_snapshot,
            self.new_snapshot,
            self.commit_log,
            generated_on=self._today(),
        )
        write_report(report_text, self.report_path)
        self.report_text = report_text
        self._transition(RunState.report_ready)
        return report_text

"""Isolated workspace for building, testing and benchmarking the corpus.

This module defines the Workspace class, which owns a filesystem root
dedicated to one comparison run. Corpus sources are fetched into it once;
packages are then built, tested and benchmarked under whichever toolchain
revision is active, and derived artifacts are purged between revisions so
one revision's compiled output never satisfies the next revision's build.
"""

from __future__ import annotations

import shutil
import statistics
import tempfile
from collections.abc import Callable, Sequence
from pathlib import Path
from types import TracebackType

from toolchain_report.config.defaults import DEFAULT_SAMPLE_COUNT, WORKSPACE_TEMP_PREFIX
from toolchain_report.drivers.base import BuildDriver
from toolchain_report.drivers.exceptions import DriverError
from toolchain_report.logging_config import get_logger
from toolchain_report.models.enums import SampleAggregation
from toolchain_report.models.results import BenchmarkResult, PackageResult
from toolchain_report.workspace.benchmark_parser import parse_benchmark_output
from toolchain_report.workspace.exceptions import (
    BenchmarkRunError,
    CorpusRunError,
    FetchError,
    WorkspaceError,
    WorkspaceInitError,
)

__all__ = ["Workspace", "aggregate_samples"]

logger = get_logger(__name__)

_AGGREGATORS: dict[SampleAggregation, Callable[[Sequence[float]], float]] = {
    SampleAggregation.min: min,
    SampleAggregation.mean: statistics.fmean,
    SampleAggregation.median: statistics.median,
}


def aggregate_samples(samples: Sequence[float], aggregation: SampleAggregation) -> float:
    """Reduce repeated sample durations to one duration.

    Args:
        samples: Measured durations, at least one.
        aggregation: The reduction to apply.

    Returns:
        The aggregated duration in seconds.

    Raises:
        ValueError: If samples is empty.

    """
    if not samples:
        raise ValueError("cannot aggregate an empty sample set")
    return float(_AGGREGATORS[aggregation](samples))


class Workspace:
    """A filesystem root in which corpus packages are fetched, built and tested.

    Use Workspace.initialize() to create one. A workspace created in a
    temporary directory is removed by cleanup(); a caller-supplied root is
    left in place so its fetched sources can be reused by the next run.

    Attributes:
        root: Absolute path of the workspace root.
        driver: Build driver for the toolchain under test.
        owns_root: Whether cleanup() removes the root.

    Example:
        with Workspace.initialize(driver) as workspace:
            workspace.fetch(*corpus.packages)
            results = workspace.run_corpus(corpus.packages)

    """

    def __init__(self, root: Path, driver: BuildDriver, owns_root: bool = False) -> None:
        """Wrap an existing, usable workspace root.

        Args:
            root: The workspace root.
            driver: Build driver for the toolchain under test.
            owns_root: Whether cleanup() removes the root.

        """
        self.root = Path(root).resolve()
        self.driver = driver
        self.owns_root = owns_root

    @classmethod
    def initialize(cls, driver: BuildDriver, root: Path | None = None) -> Workspace:
        """Create a workspace rooted at root, or in a fresh temporary directory.

        Args:
            driver: Build driver for the toolchain under test.
            root: Persistent workspace root. Created if missing.

        Returns:
            The initialized Workspace.

        Raises:
            WorkspaceInitError: If the root cannot be created or is not writable.

        """
        if root is None:
            try:
                path = Path(tempfile.mkdtemp(prefix=WORKSPACE_TEMP_PREFIX))
            except OSError as e:
                raise WorkspaceInitError(None, str(e)) from e
            owns_root = True
        else:
            path = Path(root).expanduser().resolve()
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise WorkspaceInitError(path, str(e)) from e
            owns_root = False

        try:
            with tempfile.TemporaryFile(dir=path):
                pass
        except OSError as e:
            raise WorkspaceInitError(path, f"not writable: {e}") from e

        logger.info("workspace_initialized", root=str(path), temporary=owns_root)
        return cls(path, driver, owns_root=owns_root)

    def __enter__(self) -> Workspace:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cleanup()

    def cleanup(self) -> None:
        """Remove the workspace root if this workspace created it.

        Safe to call more than once. Failures are logged, not raised, so a
        cleanup problem never masks the run's own outcome.
        """
        if not self.owns_root or not self.root.exists():
            return
        try:
            shutil.rmtree(self.root)
        except OSError as e:
            logger.warning("workspace_cleanup_failed", root=str(self.root), error=str(e))
            return
        logger.debug("workspace_removed", root=str(self.root))

    def fetch(self, *package_ids: str) -> None:
        """Download each package's source into the workspace.

        Args:
            *package_ids: Packages to fetch, in order.

        Raises:
            FetchError: On the first package that fails; later packages
                are not attempted.

        """
        logger.info("corpus_fetching", packages=list(package_ids))
        for package in package_ids:
            try:
                self.driver.fetch(self.root, package)
            except DriverError as e:
                raise FetchError(package, e) from e
            logger.debug("package_fetched", package=package)

    def clean_artifacts(self) -> None:
        """Remove every derived build artifact, keeping fetched sources.

        Idempotent, and a no-op when nothing has been built yet.

        Raises:
            WorkspaceError: If an artifact directory lies outside the root
                or cannot be removed.

        """
        for path in self.driver.artifact_dirs(self.root):
            resolved = path.resolve()
            if resolved == self.root or self.root not in resolved.parents:
                raise WorkspaceError(
                    f"Refusing to remove {resolved}: not inside workspace {self.root}"
                )
            if not resolved.exists():
                continue
            try:
                if resolved.is_dir():
                    shutil.rmtree(resolved)
                else:
                    resolved.unlink()
            except OSError as e:
                raise WorkspaceError(f"Failed to remove artifacts at {resolved}: {e}") from e
            logger.debug("artifacts_removed", path=str(resolved))
        logger.info("artifacts_cleaned", root=str(self.root))

    def run_corpus(
        self,
        package_ids: Sequence[str],
        sample_count: int = DEFAULT_SAMPLE_COUNT,
        aggregation: SampleAggregation = SampleAggregation.min,
    ) -> list[PackageResult]:
        """Build and test every package under the active toolchain.

        Args:
            package_ids: Packages in corpus order.
            sample_count: Build+test repetitions per package.
            aggregation: How repeated sample durations are reduced.

        Returns:
            One PackageResult per package, in input order.

        Raises:
            ValueError: If sample_count is less than 1.
            CorpusRunError: If the harness fails for any package.

        """
        if sample_count < 1:
            raise ValueError(f"sample_count must be at least 1, got {sample_count}")

        results: list[PackageResult] = []
        for package in package_ids:
            result = self._run_package(package, sample_count, aggregation)
            logger.info(
                "package_tested",
                package=package,
                success=result.success,
                duration_seconds=round(result.duration_seconds, 3),
            )
            results.append(result)
        return results

    def run_benchmark(self, benchmark_id: str) -> BenchmarkResult:
        """Run the benchmark suite under the active toolchain.

        The suite is fetched first if it is not already present.

        Args:
            benchmark_id: Benchmark suite identifier.

        Returns:
            The parsed BenchmarkResult.

        Raises:
            BenchmarkRunError: If the suite cannot be fetched or run, or its
                output contains no benchmark results.

        """
        logger.info("benchmark_running", benchmark=benchmark_id)
        try:
            self.driver.fetch(self.root, benchmark_id)
            output = self.driver.run_benchmark(self.root, benchmark_id)
        except DriverError as e:
            raise BenchmarkRunError(benchmark_id, str(e)) from e

        results = parse_benchmark_output(output)
        if not results:
            raise BenchmarkRunError(benchmark_id, "output contained no benchmark results")

        logger.info("benchmark_complete", benchmark=benchmark_id, count=len(results))
        return BenchmarkResult(benchmark=benchmark_id, results=results)

    def _run_package(
        self,
        package: str,
        sample_count: int,
        aggregation: SampleAggregation,
    ) -> PackageResult:
        samples: list[float] = []
        success = True
        for _ in range(sample_count):
            try:
                outcome = self.driver.build_and_test(self.root, package)
            except DriverError as e:
                raise CorpusRunError(package, e) from e
            samples.append(outcome.duration_seconds)
            success = success and outcome.success
        return PackageResult(
            package=package,
            success=success,
            duration_seconds=aggregate_samples(samples, aggregation),
            samples=tuple(samples),
        )

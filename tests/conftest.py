"""Pytest configuration and shared fixtures for the toolchain-report test suite.

This module provides in-memory fakes of the build driver and version
control client, so the workspace, controller and run can be exercised
without a Go toolchain, plus small builders for result models.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from toolchain_report.config.settings import get_settings
from toolchain_report.drivers.base import BuildDriver, BuildTestOutcome, VCSClient
from toolchain_report.drivers.exceptions import CommandError, DriverError
from toolchain_report.models.results import (
    BenchmarkMetrics,
    BenchmarkResult,
    PackageResult,
    Snapshot,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"

BENCH_OUTPUT = (
    "BenchmarkMarshal-8     1000000    100 ns/op    16 B/op    1 allocs/op\n"
    "PASS\n"
)


class FakeVCSClient(VCSClient):
    """VCSClient over a fixed set of revisions.

    Revisions resolve to themselves; anything not in known_revisions is
    unresolvable. fail_on maps an operation name to the error it raises.
    """

    def __init__(
        self,
        known_revisions: set[str] | None = None,
        count: int = 7,
        log_text: str = "abc1234 cmd/compile: faster\n",
    ) -> None:
        self.known_revisions = known_revisions or {"old", "new"}
        self.count = count
        self.log_text = log_text
        self.head: str | None = None
        self.calls: list[tuple[str, ...]] = []
        self.fail_on: dict[str, DriverError] = {}

    def _record(self, op: str, *args: str) -> None:
        self.calls.append((op, *args))
        if op in self.fail_on:
            raise self.fail_on[op]

    def fetch(self, repository: Path) -> None:
        self._record("fetch")

    def resolve(self, repository: Path, revision: str) -> str:
        self._record("resolve", revision)
        if revision not in self.known_revisions:
            raise CommandError(
                ["git", "rev-parse", revision],
                f"revision {revision!r} does not resolve to a commit",
                returncode=1,
            )
        return revision

    def checkout(self, repository: Path, revision: str) -> None:
        self._record("checkout", revision)
        self.head = revision

    def current_revision(self, repository: Path) -> str:
        self._record("current_revision")
        return self.head or ""

    def commit_count(self, repository: Path, from_revision: str, to_revision: str) -> int:
        self._record("commit_count", from_revision, to_revision)
        return self.count

    def log(self, repository: Path, from_revision: str, to_revision: str) -> str:
        self._record("log", from_revision, to_revision)
        return self.log_text


class FakeBuildDriver(BuildDriver):
    """BuildDriver that fakes a GOPATH layout on disk.

    Fetching creates src/<package>; building creates pkg/<package>, which
    is what clean_artifacts must remove. Durations and failures can be set
    per revision when a FakeVCSClient is attached. build_errors maps a
    package to the DriverError its build raises.
    """

    def __init__(self, vcs: FakeVCSClient | None = None) -> None:
        self.vcs = vcs
        self.calls: list[tuple[str, ...]] = []
        self.durations: dict[str, list[float]] = {}
        self.revision_durations: dict[str, dict[str, float]] = {}
        self.failing: set[str] = set()
        self.revision_failing: dict[str, set[str]] = {}
        self.broken: set[str] = set()
        self.build_errors: dict[str, DriverError] = {}
        self.unfetchable: set[str] = set()
        self.benchmark_output = BENCH_OUTPUT
        self.rebuild_error: DriverError | None = None
        self.benchmark_error: DriverError | None = None
        self.stale_artifacts_seen: list[str] = []

    @property
    def name(self) -> str:
        return "fake"

    @property
    def revision(self) -> str | None:
        return self.vcs.head if self.vcs is not None else None

    def rebuild(self) -> None:
        self.calls.append(("rebuild", self.revision or ""))
        if self.rebuild_error is not None:
            raise self.rebuild_error

    def fetch(self, workspace_root: Path, package: str) -> None:
        self.calls.append(("fetch", package))
        if package in self.unfetchable:
            raise CommandError(["go", "get", package], "exited with status 1", returncode=1)
        (workspace_root / "src" / package).mkdir(parents=True, exist_ok=True)

    def build_and_test(self, workspace_root: Path, package: str) -> BuildTestOutcome:
        self.calls.append(("build_and_test", package))
        if package in self.build_errors:
            raise self.build_errors[package]
        if package in self.broken:
            raise CommandError(["go", "install", package], "was killed by signal 9", returncode=-9)
        artifact = workspace_root / "pkg" / package
        if artifact.exists():
            self.stale_artifacts_seen.append(package)
        artifact.mkdir(parents=True, exist_ok=True)

        revision = self.revision or ""
        queued = self.durations.get(package)
        if queued:
            duration = queued.pop(0)
        else:
            duration = self.revision_durations.get(revision, {}).get(package, 1.0)
        failing = self.failing | self.revision_failing.get(revision, set())
        return BuildTestOutcome(success=package not in failing, duration_seconds=duration)

    def run_benchmark(self, workspace_root: Path, benchmark: str) -> str:
        self.calls.append(("run_benchmark", benchmark))
        if self.benchmark_error is not None:
            raise self.benchmark_error
        return self.benchmark_output

    def artifact_dirs(self, workspace_root: Path) -> list[Path]:
        return [workspace_root / "pkg", workspace_root / "bin"]


@pytest.fixture
def fake_vcs() -> FakeVCSClient:
    """Provide a fake VCS client knowing the revisions "old" and "new"."""
    return FakeVCSClient()


@pytest.fixture
def fake_driver(fake_vcs: FakeVCSClient) -> FakeBuildDriver:
    """Provide a fake build driver attached to fake_vcs."""
    return FakeBuildDriver(vcs=fake_vcs)


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding static test data files."""
    return FIXTURES_DIR


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Iterator[None]:
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_package_result(package: str, seconds: float, success: bool = True) -> PackageResult:
    """Build a single-sample PackageResult."""
    return PackageResult(
        package=package, success=success, duration_seconds=seconds, samples=(seconds,)
    )


def make_metrics(
    ns_per_op: float,
    bytes_per_op: float | None = None,
    allocs_per_op: float | None = None,
    extra: dict[str, float] | None = None,
) -> BenchmarkMetrics:
    """Build BenchmarkMetrics with a fixed iteration count."""
    return BenchmarkMetrics(
        iterations=1000,
        ns_per_op=ns_per_op,
        bytes_per_op=bytes_per_op,
        allocs_per_op=allocs_per_op,
        extra=extra or {},
    )


def make_snapshot(
    revision: str,
    rebuild_seconds: float,
    packages: list[PackageResult],
    benchmarks: dict[str, BenchmarkMetrics],
) -> Snapshot:
    """Build a Snapshot for the default benchmark suite."""
    return Snapshot(
        revision=revision,
        rebuild_seconds=rebuild_seconds,
        packages=tuple(packages),
        benchmark=BenchmarkResult(benchmark="bench", results=benchmarks),
    )

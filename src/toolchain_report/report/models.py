"""Models for the comparison report.

This module defines the structured form of the report: one row per
package and one row per benchmark, pairing the old and new measurements.
Rendering to markdown happens in the builder.
"""

from __future__ import annotations

from datetime import date
from enum import Enum

from toolchain_report.models.base import BaseSchema
from toolchain_report.models.results import BenchmarkMetrics, CommitLog, PackageResult

__all__ = [
    "BenchmarkComparison",
    "BenchmarkPresence",
    "CompileTimeComparison",
    "ComparisonReport",
    "PackageComparison",
]


class BenchmarkPresence(str, Enum):
    """Which snapshots a benchmark appears in.

    Attributes:
        both: Measured under both revisions.
        added: Only measured under the new revision.
        removed: Only measured under the old revision.
    """

    both = "both"
    added = "added"
    removed = "removed"


class CompileTimeComparison(BaseSchema):
    """Toolchain rebuild durations of both revisions."""

    old_seconds: float
    new_seconds: float

    @property
    def delta_seconds(self) -> float:
        """New minus old rebuild duration."""
        return self.new_seconds - self.old_seconds


class PackageComparison(BaseSchema):
    """One corpus package measured under both revisions."""

    package: str
    old: PackageResult
    new: PackageResult

    @property
    def delta_seconds(self) -> float:
        """New minus old build+test duration."""
        return self.new.duration_seconds - self.old.duration_seconds


class BenchmarkComparison(BaseSchema):
    """One benchmark measured under one or both revisions."""

    name: str
    old: BenchmarkMetrics | None = None
    new: BenchmarkMetrics | None = None

    @property
    def presence(self) -> BenchmarkPresence:
        """Which snapshots the benchmark appears in."""
        if self.old is None:
            return BenchmarkPresence.added
        if self.new is None:
            return BenchmarkPresence.removed
        return BenchmarkPresence.both

    @property
    def delta_ns_per_op(self) -> float | None:
        """New minus old ns/op, or None unless measured under both."""
        if self.old is None or self.new is None:
            return None
        return self.new.ns_per_op - self.old.ns_per_op


class ComparisonReport(BaseSchema):
    """Everything the rendered report contains.

    Attributes:
        generated_on: Date printed in the title.
        old_revision: Old revision identifier.
        new_revision: New revision identifier.
        commit_log: Commits between the revisions.
        compile_time: Toolchain rebuild durations.
        packages: Package rows in corpus order.
        benchmarks: Benchmark rows sorted by name.

    """

    generated_on: date
    old_revision: str
    new_revision: str
    commit_log: CommitLog
    compile_time: CompileTimeComparison
    packages: tuple[PackageComparison, ...]
    benchmarks: tuple[BenchmarkComparison, ...]

"""Result models for corpus runs, benchmark runs and revision snapshots.

This module defines Pydantic models for the measurements taken under one
toolchain revision and the commit log between the two compared revisions.
"""

from __future__ import annotations

from pydantic import ConfigDict, Field, model_validator

from toolchain_report.models.base import BaseSchema

__all__ = [
    "BenchmarkMetrics",
    "BenchmarkResult",
    "CommitLog",
    "PackageResult",
    "Snapshot",
]


class PackageResult(BaseSchema):
    """Build+test outcome of one corpus package under one revision.

    Attributes:
        package: Package identifier from the corpus.
        success: True only if every sample built and passed its tests.
        duration_seconds: Aggregated wall-clock duration across samples.
        samples: Every measured duration, in run order.

    """

    package: str
    success: bool
    duration_seconds: float = Field(..., ge=0.0)
    samples: tuple[float, ...] = Field(..., min_length=1)

    @property
    def sample_count(self) -> int:
        """Number of build+test samples taken."""
        return len(self.samples)


class BenchmarkMetrics(BaseSchema):
    """Metrics reported for one benchmark by the suite.

    Attributes:
        iterations: Number of iterations the benchmark ran.
        ns_per_op: Time per operation in nanoseconds.
        bytes_per_op: Bytes allocated per operation, if reported.
        allocs_per_op: Allocations per operation, if reported.
        extra: Custom metrics keyed by unit (e.g. "B/serial").

    """

    iterations: int = Field(..., ge=0)
    ns_per_op: float = Field(..., ge=0.0)
    bytes_per_op: float | None = None
    allocs_per_op: float | None = None
    extra: dict[str, float] = Field(default_factory=dict)


class BenchmarkResult(BaseSchema):
    """Parsed output of the benchmark suite under one revision.

    Attributes:
        benchmark: Benchmark suite identifier.
        results: Metrics keyed by benchmark name.

    """

    benchmark: str
    results: dict[str, BenchmarkMetrics] = Field(default_factory=dict)


class CommitLog(BaseSchema):
    """Commits between the old and new revision.

    Attributes:
        count: Number of commits reachable from new but not from old.
        text: Raw one-line-per-commit log.

    """

    count: int = Field(default=0, ge=0)
    text: str = ""

    model_config = ConfigDict(str_strip_whitespace=False)


class Snapshot(BaseSchema):
    """Every measurement captured for one revision.

    Attributes:
        revision: The revision identifier the toolchain was built at.
        rebuild_seconds: Duration of the toolchain self-rebuild.
        packages: Package results in corpus order.
        benchmark: Benchmark suite result.

    """

    revision: str
    rebuild_seconds: float = Field(..., ge=0.0)
    packages: tuple[PackageResult, ...]
    benchmark: BenchmarkResult

    @model_validator(mode="after")
    def _unique_packages(self) -> Snapshot:
        names = [result.package for result in self.packages]
        if len(names) != len(set(names)):
            raise ValueError("each package may appear only once in a snapshot")
        return self

"""Data models for toolchain-report."""

from toolchain_report.models.base import BaseSchema
from toolchain_report.models.enums import RunState, SampleAggregation
from toolchain_report.models.results import (
    BenchmarkMetrics,
    BenchmarkResult,
    CommitLog,
    PackageResult,
    Snapshot,
)

__all__ = [
    "BaseSchema",
    "BenchmarkMetrics",
    "BenchmarkResult",
    "CommitLog",
    "PackageResult",
    "RunState",
    "SampleAggregation",
    "Snapshot",
]

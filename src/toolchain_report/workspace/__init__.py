"""Workspace management for corpus builds, tests and benchmarks."""

from toolchain_report.workspace.benchmark_parser import parse_benchmark_output
from toolchain_report.workspace.exceptions import (
    BenchmarkRunError,
    CorpusRunError,
    FetchError,
    WorkspaceError,
    WorkspaceInitError,
)
from toolchain_report.workspace.manager import Workspace, aggregate_samples

__all__ = [
    "aggregate_samples",
    "BenchmarkRunError",
    "CorpusRunError",
    "FetchError",
    "parse_benchmark_output",
    "Workspace",
    "WorkspaceError",
    "WorkspaceInitError",
]

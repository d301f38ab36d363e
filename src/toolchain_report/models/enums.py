"""Enumeration types for toolchain-report.

This module defines the enum types shared across the harness: the sample
aggregation policy and the states of a comparison run.
"""

from enum import Enum

__all__ = ["SampleAggregation", "RunState"]


class SampleAggregation(str, Enum):
    """How repeated build+test samples of one package are reduced to one duration.

    Attributes:
        min: Fastest sample; least sensitive to background noise.
        mean: Arithmetic mean of all samples.
        median: Median of all samples.
    """

    min = "min"
    mean = "mean"
    median = "median"


class RunState(str, Enum):
    """State of a comparison run.

    The run only moves forward through these states, or to failed.

    Attributes:
        idle: Run created, nothing done yet.
        workspace_ready: Workspace initialized and corpus fetched.
        old_revision_active: Toolchain rebuilt at the old revision.
        old_corpus_run: Corpus built and tested under the old revision.
        old_benchmark_run: Benchmark suite run under the old revision.
        new_revision_active: Toolchain rebuilt at the new revision.
        new_corpus_run: Corpus built and tested under the new revision.
        new_benchmark_run: Benchmark suite run under the new revision.
        report_ready: Report composed and written.
        failed: A step failed; the run is over and no report exists.
    """

    idle = "idle"
    workspace_ready = "workspace_ready"
    old_revision_active = "old_revision_active"
    old_corpus_run = "old_corpus_run"
    old_benchmark_run = "old_benchmark_run"
    new_revision_active = "new_revision_active"
    new_corpus_run = "new_corpus_run"
    new_benchmark_run = "new_benchmark_run"
    report_ready = "report_ready"
    failed = "failed"

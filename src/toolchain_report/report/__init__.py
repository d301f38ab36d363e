"""Comparison report composition and writing."""

from toolchain_report.report.builder import (
    build_comparison,
    compose_report,
    format_duration,
    format_signed,
    render_markdown,
)
from toolchain_report.report.exceptions import (
    ReportError,
    ReportGenerationError,
    ReportWriteError,
)
from toolchain_report.report.models import (
    BenchmarkComparison,
    BenchmarkPresence,
    CompileTimeComparison,
    ComparisonReport,
    PackageComparison,
)
from toolchain_report.report.writer import write_report

__all__ = [
    "BenchmarkComparison",
    "BenchmarkPresence",
    "build_comparison",
    "CompileTimeComparison",
    "ComparisonReport",
    "compose_report",
    "format_duration",
    "format_signed",
    "PackageComparison",
    "render_markdown",
    "ReportError",
    "ReportGenerationError",
    "ReportWriteError",
    "write_report",
]

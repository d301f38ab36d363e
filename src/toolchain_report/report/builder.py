"""Report builder for toolchain-report.

This module turns the old and new revision snapshots plus the commit log
into a ComparisonReport and renders it as markdown. Both steps are pure:
the same inputs always produce the same text, apart from the date in the
title.

Deltas are always new minus old, so negative numbers are improvements.
"""

from __future__ import annotations

from datetime import date

from toolchain_report.models.results import (
    BenchmarkMetrics,
    CommitLog,
    PackageResult,
    Snapshot,
)
from toolchain_report.report.exceptions import ReportGenerationError
from toolchain_report.report.models import (
    BenchmarkComparison,
    BenchmarkPresence,
    CompileTimeComparison,
    ComparisonReport,
    PackageComparison,
)

__all__ = [
    "build_comparison",
    "compose_report",
    "format_duration",
    "format_signed",
    "render_markdown",
]

_MISSING = "-"


def build_comparison(
    old: Snapshot,
    new: Snapshot,
    commit_log: CommitLog,
    generated_on: date | None = None,
) -> ComparisonReport:
    """Pair the measurements of two snapshots.

    Args:
        old: Snapshot of the old revision.
        new: Snapshot of the new revision.
        commit_log: Commits between the revisions.
        generated_on: Date for the title (today if None).

    Returns:
        The structured ComparisonReport.

    Raises:
        ReportGenerationError: If the snapshots did not run the same
            packages in the same order.

    """
    return ComparisonReport(
        generated_on=generated_on or date.today(),
        old_revision=old.revision,
        new_revision=new.revision,
        commit_log=commit_log,
        compile_time=CompileTimeComparison(
            old_seconds=old.rebuild_seconds,
            new_seconds=new.rebuild_seconds,
        ),
        packages=_pair_packages(old.packages, new.packages),
        benchmarks=_pair_benchmarks(old.benchmark.results, new.benchmark.results),
    )


def render_markdown(report: ComparisonReport) -> str:
    """Render a ComparisonReport as a markdown document.

    Sections, in order: title with date, commit count, compile time,
    packages, benchmarks, and the raw commit log in a fenced block.
    """
    day = report.generated_on
    lines: list[str] = [
        f"# {day:%B} {day.day}, {day.year} Report",
        "",
        f"Number of commits: {report.commit_log.count}",
        "",
    ]
    lines += _render_compile_time(report)
    lines += _render_packages(report.packages)
    lines += _render_benchmarks(report.benchmarks)
    lines += ["## GIT Log", "", "```"]
    log_text = report.commit_log.text
    if log_text:
        lines.append(log_text.rstrip("\n"))
    lines.append("```")
    return "\n".join(lines) + "\n"


def compose_report(
    old: Snapshot,
    new: Snapshot,
    commit_log: CommitLog,
    generated_on: date | None = None,
) -> str:
    """Build and render the comparison of two snapshots in one step.

    Args:
        old: Snapshot of the old revision.
        new: Snapshot of the new revision.
        commit_log: Commits between the revisions.
        generated_on: Date for the title (today if None).

    Returns:
        The markdown report.

    Raises:
        ReportGenerationError: If the snapshots cannot be paired.

    """
    return render_markdown(build_comparison(old, new, commit_log, generated_on))


def format_duration(seconds: float) -> str:
    """Format seconds with trailing zeros trimmed, e.g. 12.0 -> "12s"."""
    return f"{_trim(seconds, 3)}s"


def format_signed(value: float, unit: str, places: int = 3) -> str:
    """Format a delta with an explicit sign, e.g. -1.5 -> "-1.5s"."""
    text = _trim(value, places)
    if text != "0" and not text.startswith("-"):
        text = "+" + text
    return f"{text}{unit}"


def _trim(value: float, places: int) -> str:
    text = f"{value:.{places}f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _pair_packages(
    old: tuple[PackageResult, ...],
    new: tuple[PackageResult, ...],
) -> tuple[PackageComparison, ...]:
    old_names = [r.package for r in old]
    new_names = [r.package for r in new]
    if old_names != new_names:
        missing = sorted(set(old_names) ^ set(new_names))
        detail = f"differing packages: {', '.join(missing)}" if missing else "order differs"
        raise ReportGenerationError(
            f"Old and new snapshots ran different package lists ({detail})"
        )
    return tuple(
        PackageComparison(package=o.package, old=o, new=n) for o, n in zip(old, new)
    )


def _pair_benchmarks(
    old: dict[str, BenchmarkMetrics],
    new: dict[str, BenchmarkMetrics],
) -> tuple[BenchmarkComparison, ...]:
    return tuple(
        BenchmarkComparison(name=name, old=old.get(name), new=new.get(name))
        for name in sorted(old.keys() | new.keys())
    )


def _render_compile_time(report: ComparisonReport) -> list[str]:
    compile_time = report.compile_time
    return [
        "## Compile time",
        "",
        "| Revision | Rebuild time |",
        "|---|---:|",
        f"| old ({report.old_revision}) | {format_duration(compile_time.old_seconds)} |",
        f"| new ({report.new_revision}) | {format_duration(compile_time.new_seconds)} |",
        "",
        f"Delta: {format_signed(compile_time.delta_seconds, 's')}",
        "",
    ]


def _status(result: PackageResult) -> str:
    return "ok" if result.success else "FAIL"


def _render_packages(packages: tuple[PackageComparison, ...]) -> list[str]:
    lines = [
        "## Packages",
        "",
        "| Package | Old time | New time | Delta | Old | New |",
        "|---|---:|---:|---:|---|---|",
    ]
    for row in packages:
        lines.append(
            f"| {row.package} "
            f"| {format_duration(row.old.duration_seconds)} "
            f"| {format_duration(row.new.duration_seconds)} "
            f"| {format_signed(row.delta_seconds, 's')} "
            f"| {_status(row.old)} | {_status(row.new)} |"
        )
    lines.append("")
    return lines


def _metric(value: float | None, unit: str = "") -> str:
    return _MISSING if value is None else f"{_trim(value, 2)}{unit}"


def _metric_delta(old: float | None, new: float | None, unit: str = "") -> str:
    if old is None or new is None:
        return _MISSING
    delta = new - old
    text = format_signed(delta, unit, places=2)
    if old:
        text += f" ({delta / old * 100:+.1f}%)"
    return text


def _value(metrics: BenchmarkMetrics | None, field: str) -> float | None:
    return None if metrics is None else getattr(metrics, field)


def _render_benchmarks(benchmarks: tuple[BenchmarkComparison, ...]) -> list[str]:
    lines = [
        "## Benchmarks",
        "",
        "| Benchmark | Old ns/op | New ns/op | Delta | Old allocs/op | New allocs/op "
        "| Delta | Old B/op | New B/op | Delta | Note |",
        "|---|---:|---:|---:|---:|---:|---:|---:|---:|---:|---|",
    ]
    notes = {
        BenchmarkPresence.both: "",
        BenchmarkPresence.added: "new",
        BenchmarkPresence.removed: "removed",
    }
    for row in benchmarks:
        cells = [row.name]
        for field, unit in (("ns_per_op", "ns"), ("allocs_per_op", ""), ("bytes_per_op", "B")):
            old = _value(row.old, field)
            new = _value(row.new, field)
            cells += [_metric(old, unit), _metric(new, unit), _metric_delta(old, new, unit)]
        cells.append(notes[row.presence])
        lines.append("| " + " | ".join(cells) + " |")
    lines.append("")
    lines += _render_custom_metrics(benchmarks)
    return lines


def _render_custom_metrics(benchmarks: tuple[BenchmarkComparison, ...]) -> list[str]:
    # Units reported through b.ReportMetric, e.g. B/serial.
    rows: list[str] = []
    for row in benchmarks:
        old_extra = row.old.extra if row.old is not None else {}
        new_extra = row.new.extra if row.new is not None else {}
        for unit in sorted(old_extra.keys() | new_extra.keys()):
            old = old_extra.get(unit)
            new = new_extra.get(unit)
            rows.append(
                f"| {row.name} | {unit} | {_metric(old)} | {_metric(new)} "
                f"| {_metric_delta(old, new)} |"
            )
    if not rows:
        return []
    return [
        "### Custom metrics",
        "",
        "| Benchmark | Metric | Old | New | Delta |",
        "|---|---|---:|---:|---:|",
        *rows,
        "",
    ]

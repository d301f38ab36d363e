"""Parser for Go testing benchmark output.

Benchmark result lines look like::

    BenchmarkGogoprotobufMarshal-8   10000000   163 ns/op   64 B/op   1 allocs/op

The name loses its ``Benchmark`` prefix. The ``-GOMAXPROCS`` suffix is
stripped only when every result line carries the same one, since Go omits
it when GOMAXPROCS is 1 and sub-benchmark names may end in -N themselves.
Value/unit pairs other than ns/op, B/op and allocs/op are kept as extra
metrics. Every other line (PASS, ok, goos:, log output) is ignored.
"""

from __future__ import annotations

import re

from toolchain_report.models.results import BenchmarkMetrics

__all__ = ["parse_benchmark_output"]

_RESULT_LINE = re.compile(
    r"^Benchmark(?P<name>\S+)\s+(?P<iterations>\d+)\s+(?P<metrics>\S.*)$"
)
_PROCS_SUFFIX = re.compile(r"-\d+$")


def parse_benchmark_output(output: str) -> dict[str, BenchmarkMetrics]:
    """Parse benchmark result lines into metrics keyed by benchmark name.

    Args:
        output: Standard output of `go test -bench`.

    Returns:
        Metrics per benchmark name. If a name repeats, the last line wins.
        Empty if no result line was found.

    """
    parsed: list[tuple[str, BenchmarkMetrics]] = []
    for line in output.splitlines():
        match = _RESULT_LINE.match(line.strip())
        if match is None:
            continue
        metrics = _parse_metrics(match.group("metrics"))
        if metrics is None or "ns/op" not in metrics:
            continue
        parsed.append(
            (
                match.group("name"),
                BenchmarkMetrics(
                    iterations=int(match.group("iterations")),
                    ns_per_op=metrics.pop("ns/op"),
                    bytes_per_op=metrics.pop("B/op", None),
                    allocs_per_op=metrics.pop("allocs/op", None),
                    extra=metrics,
                ),
            )
        )

    suffix = _procs_suffix([name for name, _ in parsed])
    results: dict[str, BenchmarkMetrics] = {}
    for name, metrics in parsed:
        if suffix:
            name = name[: -len(suffix)]
        results[name] = metrics
    return results


def _procs_suffix(names: list[str]) -> str | None:
    """Return the -GOMAXPROCS suffix if every name ends with the same one.

    Go leaves the suffix off when GOMAXPROCS is 1, so a trailing -N that
    is not shared by every line belongs to the benchmark name.
    """
    suffixes = set()
    for name in names:
        match = _PROCS_SUFFIX.search(name)
        if match is None:
            return None
        suffixes.add(match.group())
    return suffixes.pop() if len(suffixes) == 1 else None


def _parse_metrics(text: str) -> dict[str, float] | None:
    fields = text.split()
    if len(fields) % 2:
        return None
    metrics: dict[str, float] = {}
    for value, unit in zip(fields[::2], fields[1::2]):
        try:
            metrics[unit] = float(value)
        except ValueError:
            return None
    return metrics

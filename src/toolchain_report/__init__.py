"""toolchain-report: A/B performance comparison of two toolchain revisions.

Rebuilds a toolchain at two revisions, builds and tests a fixed corpus of
real-world packages under each, runs a serialization benchmark suite, and
writes a markdown comparison report.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]

"""Corpus registry.

The corpus is the ordered list of packages built and tested under each
revision, plus the benchmark suite run once per revision. It is passed
into the run as a value so tests can substitute a small synthetic corpus.
"""

from __future__ import annotations

from pydantic import Field, field_validator

from toolchain_report.config.defaults import DEFAULT_BENCHMARK, DEFAULT_CORPUS_PACKAGES
from toolchain_report.models.base import BaseSchema

__all__ = ["Corpus", "default_corpus"]


class Corpus(BaseSchema):
    """Ordered package identifiers and the benchmark suite identifier.

    Attributes:
        packages: Package identifiers in the order they are run and reported.
        benchmark: Benchmark suite identifier.

    """

    packages: tuple[str, ...] = Field(..., min_length=1)
    benchmark: str = Field(..., min_length=1)

    @field_validator("packages")
    @classmethod
    def _validate_packages(cls, packages: tuple[str, ...]) -> tuple[str, ...]:
        stripped = tuple(p.strip() for p in packages)
        if any(not p for p in stripped):
            raise ValueError("package identifiers must be non-empty")
        duplicates = sorted({p for p in stripped if stripped.count(p) > 1})
        if duplicates:
            raise ValueError(f"duplicate package identifiers: {', '.join(duplicates)}")
        return stripped


def default_corpus() -> Corpus:
    """Return the built-in corpus of real-world Go programs."""
    return Corpus(packages=DEFAULT_CORPUS_PACKAGES, benchmark=DEFAULT_BENCHMARK)

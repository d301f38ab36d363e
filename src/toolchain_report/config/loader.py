"""Corpus file loader.

This module loads a corpus definition from a YAML file of the form::

    packages:
      - github.com/boltdb/bolt/cmd/bolt
      - golang.org/x/tools/cmd/guru
    benchmark: github.com/alecthomas/go_serialization_benchmarks

The benchmark key is optional and defaults to the built-in suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from toolchain_report.config.corpus import Corpus
from toolchain_report.config.defaults import DEFAULT_BENCHMARK
from toolchain_report.config.exceptions import ConfigurationError

__all__ = ["load_corpus", "load_yaml_file"]


def load_yaml_file(
    path: Path,
    error_class: type[Exception] = ConfigurationError,
    label: str = "File",
) -> dict[str, Any]:
    """Load and validate a YAML file, returning the parsed dict.

    Handles file existence check, YAML parsing, empty-file check,
    and mapping-type validation.

    Args:
        path: Path to the YAML file.
        error_class: Exception class to raise on validation errors.
        label: Human-readable label for error messages (e.g. "Corpus file").

    Returns:
        Parsed dictionary from the YAML file.

    Raises:
        error_class: If the file is missing, unreadable, not valid YAML,
            empty, or not a mapping.

    """
    if not path.exists():
        raise error_class(f"{label} not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise error_class(f"Failed to parse YAML file {path}: {e}") from e
    except OSError as e:
        raise error_class(f"Failed to read YAML file {path}: {e}") from e

    if data is None:
        raise error_class(f"Empty YAML file: {path}")

    if not isinstance(data, dict):
        raise error_class(
            f"Invalid YAML structure: expected mapping, got {type(data).__name__}"
        )

    return data


def load_corpus(path: Path | str) -> Corpus:
    """Load a corpus definition from a YAML file.

    Args:
        path: Path to the YAML file to load. Can be a string or Path object.

    Returns:
        Corpus: The parsed corpus, packages in file order.

    Raises:
        ConfigurationError: If the file is missing, malformed, or the
            package list is empty or contains duplicates.

    """
    path = Path(path)
    data = load_yaml_file(path, label="Corpus file")

    packages = data.get("packages")
    if not isinstance(packages, list) or not all(isinstance(p, str) for p in packages):
        raise ConfigurationError(
            f"Corpus file {path}: 'packages' must be a list of strings"
        )

    benchmark = data.get("benchmark", DEFAULT_BENCHMARK)
    if not isinstance(benchmark, str):
        raise ConfigurationError(f"Corpus file {path}: 'benchmark' must be a string")

    try:
        return Corpus(packages=tuple(packages), benchmark=benchmark)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid corpus in {path}: {e}") from e

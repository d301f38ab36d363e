"""CLI argument validation and settings resolution.

This module merges parsed arguments over environment settings and checks
the result before any external process is started.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from toolchain_report.cli.exceptions import UsageError
from toolchain_report.config.defaults import SAMPLE_COUNT_MAX, SAMPLE_COUNT_MIN
from toolchain_report.config.settings import Settings
from toolchain_report.models.enums import SampleAggregation

__all__ = ["resolve_settings"]


def resolve_settings(args: argparse.Namespace, settings: Settings) -> Settings:
    """Apply command-line overrides to settings and validate the result.

    Args:
        args: Parsed command-line arguments.
        settings: Settings loaded from the environment.

    Returns:
        A new Settings instance with the overrides applied.

    Raises:
        UsageError: If a value is out of range or the toolchain root is
            missing or not a directory.

    """
    overrides: dict[str, Any] = {}
    if args.toolchain_root:
        overrides["toolchain_root"] = Path(args.toolchain_root)
    if args.workspace:
        overrides["workspace"] = Path(args.workspace)
    if args.output:
        overrides["report_path"] = Path(args.output)
    if args.corpus:
        overrides["corpus_file"] = Path(args.corpus)
    if args.samples is not None:
        if not SAMPLE_COUNT_MIN <= args.samples <= SAMPLE_COUNT_MAX:
            raise UsageError(
                f"--samples must be between {SAMPLE_COUNT_MIN} and {SAMPLE_COUNT_MAX}"
            )
        overrides["sample_count"] = args.samples
    if args.aggregation:
        overrides["sample_aggregation"] = SampleAggregation(args.aggregation)
    if args.no_fetch:
        overrides["fetch_toolchain"] = False

    resolved = settings.model_copy(update=overrides)

    if resolved.toolchain_root is None:
        raise UsageError(
            "No toolchain checkout given: pass --toolchain-root or set "
            "TOOLCHAIN_REPORT_TOOLCHAIN_ROOT (or GOROOT)"
        )
    if not resolved.toolchain_root.is_dir():
        raise UsageError(f"Toolchain checkout is not a directory: {resolved.toolchain_root}")
    if args.old_revision.strip() == "" or args.new_revision.strip() == "":
        raise UsageError("Revision identifiers must not be empty")

    return resolved

"""CLI argument parser configuration.

This module provides the argument parser for the toolchain-report CLI.
"""

import argparse

from toolchain_report import __version__
from toolchain_report.models.enums import SampleAggregation

__all__ = ["create_parser"]


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Options left unset fall back to TOOLCHAIN_REPORT_* environment settings.

    Returns:
        An ArgumentParser configured with all CLI options.

    """
    parser = argparse.ArgumentParser(
        prog="toolchain-report",
        description=(
            "Rebuild a toolchain at two revisions, build and test a corpus of "
            "real-world packages and run a benchmark suite under each, and "
            "write a markdown comparison report."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Compare two release tags using the Go checkout in $GOROOT
  toolchain-report go1.20 go1.21

  # Keep fetched sources between runs and write the report elsewhere
  TEST_GOPATH=~/report-gopath toolchain-report --output out/report.md go1.20 master

  # Use a smaller corpus and three samples per package
  toolchain-report --corpus corpus.yaml --samples 3 --aggregation median HEAD~10 HEAD
""",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument("old_revision", help="Baseline revision (tag, branch or commit)")
    parser.add_argument("new_revision", help="Candidate revision (tag, branch or commit)")

    parser.add_argument(
        "--toolchain-root",
        type=str,
        default=None,
        help="Toolchain source checkout (default: $TOOLCHAIN_REPORT_TOOLCHAIN_ROOT or $GOROOT)",
    )
    parser.add_argument(
        "--workspace",
        type=str,
        default=None,
        help="Persistent workspace root (default: a temporary directory removed at exit)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Report file to write (default: report.md)",
    )
    parser.add_argument(
        "--corpus",
        type=str,
        default=None,
        help="YAML file listing the packages and benchmark suite to run",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=None,
        help="Build+test samples per package (default: 1)",
    )
    parser.add_argument(
        "--aggregation",
        choices=[a.value for a in SampleAggregation],
        default=None,
        help="How repeated samples are reduced to one duration (default: min)",
    )
    parser.add_argument(
        "--no-fetch",
        action="store_true",
        help="Do not fetch from the toolchain remote before checking out revisions",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines",
    )

    return parser

"""Command-line interface for toolchain-report."""

from toolchain_report.cli.main import build_run, main
from toolchain_report.cli.parser import create_parser

__all__ = ["build_run", "create_parser", "main"]

"""CLI main entry point.

This module provides the main entry point for the toolchain-report CLI.
"""

import sys
import traceback

from pydantic import ValidationError

from toolchain_report.cli.exceptions import UsageError
from toolchain_report.cli.parser import create_parser
from toolchain_report.cli.validators import resolve_settings
from toolchain_report.config.corpus import Corpus, default_corpus
from toolchain_report.config.exceptions import ConfigurationError
from toolchain_report.config.loader import load_corpus
from toolchain_report.config.settings import Settings, get_settings
from toolchain_report.drivers.git import GitClient
from toolchain_report.drivers.go import GoBuildDriver
from toolchain_report.exceptions import ToolchainReportError
from toolchain_report.logging_config import configure_logging, get_logger
from toolchain_report.orchestrator.run import ComparisonRun
from toolchain_report.toolchain.controller import ToolchainController

__all__ = ["build_run", "main"]

logger = get_logger(__name__)


def build_run(settings: Settings, corpus: Corpus) -> ComparisonRun:
    """Wire the Go driver, git client and controller into a ComparisonRun.

    Args:
        settings: Resolved settings; toolchain_root must be set.
        corpus: Packages and benchmark suite to measure.

    Returns:
        A ComparisonRun in the idle state.

    """
    if settings.toolchain_root is None:
        raise UsageError("No toolchain checkout configured")
    driver = GoBuildDriver(settings.toolchain_root, settings.timeouts)
    vcs = GitClient(timeout_seconds=settings.timeouts.vcs_seconds)
    controller = ToolchainController(
        settings.toolchain_root,
        vcs,
        driver,
        fetch_remote=settings.fetch_toolchain,
    )
    return ComparisonRun(
        corpus=corpus,
        controller=controller,
        driver=driver,
        workspace_root=settings.workspace,
        report_path=settings.report_path,
        sample_count=settings.sample_count,
        aggregation=settings.sample_aggregation,
    )


def main(argv: list[str] | None = None) -> int:
    """Run the CLI application.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code: 0 on success, 1 when the run fails, 2 for usage errors,
        130 when interrupted.

    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, json_output=args.json_logs)

    try:
        settings = resolve_settings(args, _load_settings())
        corpus = load_corpus(settings.corpus_file) if settings.corpus_file else default_corpus()
        run = build_run(settings, corpus)
        run.execute(args.old_revision, args.new_revision)

    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130

    except ToolchainReportError as e:
        logger.error("fatal_error", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except Exception as e:
        logger.exception("fatal_error", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            traceback.print_exc()
        return 1

    print(settings.report_path)
    return 0


def _load_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid environment settings: {e}") from e


if __name__ == "__main__":
    sys.exit(main())

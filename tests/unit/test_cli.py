"""Unit tests for the CLI module.

This module tests argument parsing, settings resolution, wiring of the
real drivers, and exit codes of main() with the run replaced by fakes.
"""

import importlib
from datetime import date
from pathlib import Path

import pytest

from conftest import FakeBuildDriver, FakeVCSClient
from toolchain_report import __version__
from toolchain_report.cli.exceptions import UsageError
from toolchain_report.cli.main import build_run, main
from toolchain_report.cli.parser import create_parser
from toolchain_report.cli.validators import resolve_settings
from toolchain_report.config.corpus import Corpus, default_corpus
from toolchain_report.config.settings import Settings
from toolchain_report.drivers.git import GitClient
from toolchain_report.drivers.go import GoBuildDriver
from toolchain_report.models.enums import SampleAggregation
from toolchain_report.orchestrator.run import ComparisonRun
from toolchain_report.toolchain.controller import ToolchainController

cli_main = importlib.import_module("toolchain_report.cli.main")

_ENV_VARS = (
    "GOROOT",
    "TEST_GOPATH",
    "TOOLCHAIN_REPORT_TOOLCHAIN_ROOT",
    "TOOLCHAIN_REPORT_WORKSPACE",
    "TOOLCHAIN_REPORT_SAMPLE_COUNT",
    "TOOLCHAIN_REPORT_CORPUS_FILE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove settings variables inherited from the developer's shell."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def goroot(tmp_path: Path) -> Path:
    """An existing toolchain checkout directory."""
    root = tmp_path / "go"
    root.mkdir()
    return root


class TestParser:
    """Tests for create_parser."""

    def test_two_revisions(self) -> None:
        """Test that both revisions are parsed positionally."""
        args = create_parser().parse_args(["go1.20", "go1.21"])

        assert args.old_revision == "go1.20"
        assert args.new_revision == "go1.21"
        assert args.output is None
        assert args.samples is None
        assert args.verbose is False

    @pytest.mark.parametrize("argv", [[], ["go1.20"], ["a", "b", "c"]])
    def test_wrong_argument_count(self, argv: list[str]) -> None:
        """Test that anything but two revisions exits with a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(argv)

        assert exc_info.value.code == 2

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that --version prints the version and exits cleanly."""
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_invalid_aggregation(self) -> None:
        """Test that an unknown aggregation is rejected."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--aggregation", "max", "a", "b"])


class TestResolveSettings:
    """Tests for resolve_settings."""

    def test_overrides_applied(self, goroot: Path, tmp_path: Path) -> None:
        """Test that command-line options override environment settings."""
        args = create_parser().parse_args(
            [
                "--toolchain-root",
                str(goroot),
                "--workspace",
                str(tmp_path / "ws"),
                "--output",
                "out.md",
                "--samples",
                "5",
                "--aggregation",
                "mean",
                "--no-fetch",
                "a",
                "b",
            ]
        )

        settings = resolve_settings(args, Settings())

        assert settings.toolchain_root == goroot
        assert settings.workspace == tmp_path / "ws"
        assert settings.report_path == Path("out.md")
        assert settings.sample_count == 5
        assert settings.sample_aggregation is SampleAggregation.mean
        assert settings.fetch_toolchain is False

    def test_environment_kept(self, goroot: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that unset options keep the environment values."""
        monkeypatch.setenv("GOROOT", str(goroot))
        args = create_parser().parse_args(["a", "b"])

        settings = resolve_settings(args, Settings())

        assert settings.toolchain_root == goroot
        assert settings.fetch_toolchain is True

    def test_missing_toolchain_root(self) -> None:
        """Test that a missing toolchain checkout is a usage error."""
        args = create_parser().parse_args(["a", "b"])

        with pytest.raises(UsageError, match="toolchain"):
            resolve_settings(args, Settings())

    def test_toolchain_root_not_a_directory(self, tmp_path: Path) -> None:
        """Test that a toolchain root that is not a directory is a usage error."""
        args = create_parser().parse_args(["--toolchain-root", str(tmp_path / "nope"), "a", "b"])

        with pytest.raises(UsageError, match="not a directory"):
            resolve_settings(args, Settings())

    @pytest.mark.parametrize("samples", ["0", "101"])
    def test_samples_out_of_range(self, goroot: Path, samples: str) -> None:
        """Test that an out-of-range sample count is a usage error."""
        args = create_parser().parse_args(
            ["--toolchain-root", str(goroot), "--samples", samples, "a", "b"]
        )

        with pytest.raises(UsageError, match="--samples"):
            resolve_settings(args, Settings())

    def test_blank_revision(self, goroot: Path) -> None:
        """Test that a blank revision identifier is a usage error."""
        args = create_parser().parse_args(["--toolchain-root", str(goroot), " ", "b"])

        with pytest.raises(UsageError, match="empty"):
            resolve_settings(args, Settings())


class TestBuildRun:
    """Tests for build_run."""

    def test_wires_go_and_git(self, goroot: Path, tmp_path: Path) -> None:
        """Test that the run is built on the Go driver and git client."""
        settings = Settings(
            toolchain_root=goroot,
            workspace=tmp_path / "ws",
            report_path=tmp_path / "r.md",
            sample_count=2,
            fetch_toolchain=False,
        )

        run = build_run(settings, default_corpus())

        assert isinstance(run.driver, GoBuildDriver)
        assert run.driver.goroot == goroot
        assert isinstance(run.controller.vcs, GitClient)
        assert run.controller.vcs.timeout_seconds == settings.timeouts.vcs_seconds
        assert run.controller.driver is run.driver
        assert run.controller.fetch_remote is False
        assert run.workspace_root == tmp_path / "ws"
        assert run.report_path == tmp_path / "r.md"
        assert run.sample_count == 2


class TestMain:
    """Tests for main()."""

    @pytest.fixture
    def fake_build_run(
        self,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
        fake_vcs: FakeVCSClient,
        fake_driver: FakeBuildDriver,
    ) -> list[Corpus]:
        """Replace build_run with one over the fakes; records the corpus used."""
        seen: list[Corpus] = []

        def _build(settings: Settings, corpus: Corpus) -> ComparisonRun:
            seen.append(corpus)
            controller = ToolchainController(settings.toolchain_root, fake_vcs, fake_driver)
            return ComparisonRun(
                Corpus(packages=("pkgA",), benchmark="bench"),
                controller,
                fake_driver,
                workspace_root=tmp_path / "ws",
                report_path=settings.report_path,
                today=lambda: date(2024, 3, 5),
            )

        monkeypatch.setattr(cli_main, "build_run", _build)
        return seen

    def test_success(
        self,
        goroot: Path,
        tmp_path: Path,
        fake_build_run: list[Corpus],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test that a successful run writes the report and exits 0."""
        report = tmp_path / "report.md"

        code = main(["--toolchain-root", str(goroot), "--output", str(report), "old", "new"])

        assert code == 0
        assert report.read_text().startswith("# March 5, 2024 Report")
        assert str(report) in capsys.readouterr().out
        assert fake_build_run == [default_corpus()]

    def test_corpus_file(
        self, goroot: Path, tmp_path: Path, fixtures_dir: Path, fake_build_run: list[Corpus]
    ) -> None:
        """Test that --corpus loads the given corpus file."""
        main(
            [
                "--toolchain-root",
                str(goroot),
                "--output",
                str(tmp_path / "report.md"),
                "--corpus",
                str(fixtures_dir / "corpus.yaml"),
                "old",
                "new",
            ]
        )

        assert fake_build_run[0].packages[0] == "github.com/boltdb/bolt/cmd/bolt"

    def test_failed_run(
        self,
        goroot: Path,
        tmp_path: Path,
        fake_build_run: list[Corpus],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test that a failing run exits 1 and writes no report."""
        report = tmp_path / "report.md"

        code = main(["--toolchain-root", str(goroot), "--output", str(report), "old", "missing"])

        assert code == 1
        assert not report.exists()
        assert "Error:" in capsys.readouterr().err

    def test_bad_corpus_file(
        self, goroot: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that an unreadable corpus file exits 1 before anything runs."""
        code = main(
            ["--toolchain-root", str(goroot), "--corpus", str(tmp_path / "none.yaml"), "a", "b"]
        )

        assert code == 1
        assert "Corpus file not found" in capsys.readouterr().err

    def test_missing_toolchain_root(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that a missing toolchain checkout exits 2."""
        code = main(["old", "new"])

        assert code == 2
        assert "No toolchain checkout" in capsys.readouterr().err

    def test_invalid_environment(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that invalid environment settings exit 1."""
        monkeypatch.setenv("TOOLCHAIN_REPORT_SAMPLE_COUNT", "zero")

        code = main(["old", "new"])

        assert code == 1
        assert "Invalid environment settings" in capsys.readouterr().err

    def test_interrupted(
        self, goroot: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that Ctrl-C exits 130."""

        def _interrupt(settings: Settings, corpus: Corpus) -> ComparisonRun:
            raise KeyboardInterrupt

        monkeypatch.setattr(cli_main, "build_run", _interrupt)

        assert main(["--toolchain-root", str(goroot), "old", "new"]) == 130

    def test_wrong_argument_count(self) -> None:
        """Test that a single revision exits with status 2."""
        with pytest.raises(SystemExit) as exc_info:
            main(["go1.20"])

        assert exc_info.value.code == 2

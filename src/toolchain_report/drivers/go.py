"""Go toolchain build driver.

Drives a Go toolchain built from a source checkout: ``src/make.bash``
rebuilds it, and the resulting ``bin/go`` fetches, builds, tests and
benchmarks packages inside a GOPATH-style workspace::

    <workspace>/src/      fetched package sources
    <workspace>/pkg/      compiled packages        (artifact)
    <workspace>/bin/      installed commands       (artifact)
    <workspace>/.cache/   go build cache           (artifact)

Module mode is disabled so every package resolves from the workspace.
"""

from __future__ import annotations

import os
from pathlib import Path

from toolchain_report.config.settings import TimeoutSettings
from toolchain_report.drivers.base import BuildDriver, BuildTestOutcome
from toolchain_report.drivers.exceptions import CommandError
from toolchain_report.drivers.process import CommandResult, run_command
from toolchain_report.logging_config import get_logger

__all__ = ["GoBuildDriver"]

logger = get_logger(__name__)


class GoBuildDriver(BuildDriver):
    """BuildDriver for a Go toolchain source checkout.

    Attributes:
        goroot: Root of the Go source checkout (contains src/make.bash).
        timeouts: Per-process timeouts.

    """

    def __init__(self, goroot: Path, timeouts: TimeoutSettings | None = None) -> None:
        """Initialize the driver.

        Args:
            goroot: Root of the Go source checkout.
            timeouts: Per-process timeouts (defaults if None).

        """
        self.goroot = Path(goroot)
        self.timeouts = timeouts or TimeoutSettings()

    @property
    def name(self) -> str:
        """Return the driver identifier."""
        return "go"

    @property
    def go_binary(self) -> Path:
        """Path to the go command built from the checkout."""
        return self.goroot / "bin" / "go"

    def rebuild(self) -> None:
        """Run make.bash in the checkout's src directory."""
        src_dir = self.goroot / "src"
        if not (src_dir / "make.bash").is_file():
            raise CommandError(
                ["./make.bash"], f"not found in {src_dir}; is {self.goroot} a Go source tree?"
            )
        env = dict(os.environ)
        env.pop("GOROOT", None)
        run_command(
            ["bash", "make.bash"],
            cwd=src_dir,
            env=env,
            timeout=self.timeouts.rebuild_seconds,
        ).check()

    def fetch(self, workspace_root: Path, package: str) -> None:
        """Download a package and its test dependencies without installing.

        `go get -d` leaves an existing checkout untouched, so repeated
        fetches are no-ops.
        """
        self._go(
            workspace_root,
            "get",
            "-d",
            "-t",
            package,
            timeout=self.timeouts.fetch_seconds,
        ).check()

    def build_and_test(self, workspace_root: Path, package: str) -> BuildTestOutcome:
        """Install the package, then run its tests.

        Install and test durations are summed. A failing install skips the
        test step and counts as a failed sample.
        """
        source_dir = self.source_dir(workspace_root, package)
        if not source_dir.is_dir():
            raise CommandError(
                [str(self.go_binary), "install", package],
                f"cannot run: package source missing at {source_dir}",
            )

        timeout = self.timeouts.test_seconds
        install = self._checked_harness(
            self._go(workspace_root, "install", package, timeout=timeout)
        )
        if not install.ok:
            logger.debug("package_install_failed", package=package, output=install.output)
            return BuildTestOutcome(
                success=False,
                duration_seconds=install.duration_seconds,
                output=install.output,
            )

        test = self._checked_harness(
            self._go(workspace_root, "test", "-count=1", package, timeout=timeout)
        )
        return BuildTestOutcome(
            success=test.ok,
            duration_seconds=install.duration_seconds + test.duration_seconds,
            output=install.output + test.output,
        )

    def run_benchmark(self, workspace_root: Path, benchmark: str) -> str:
        """Run every benchmark in the suite with allocation reporting."""
        result = self._go(
            workspace_root,
            "test",
            "-run=NONE",
            "-bench=.",
            "-benchmem",
            benchmark,
            timeout=self.timeouts.benchmark_seconds,
        ).check()
        return result.stdout

    def artifact_dirs(self, workspace_root: Path) -> list[Path]:
        """Compiled packages, installed commands and the build cache."""
        return [workspace_root / "pkg", workspace_root / "bin", workspace_root / ".cache"]

    def source_dir(self, workspace_root: Path, package: str) -> Path:
        """Directory a package's source is fetched into."""
        return workspace_root / "src" / package

    def environment(self, workspace_root: Path) -> dict[str, str]:
        """Process environment that pins the toolchain and the workspace."""
        env = dict(os.environ)
        env.update(
            GOROOT=str(self.goroot),
            GOPATH=str(workspace_root),
            GOCACHE=str(workspace_root / ".cache" / "go-build"),
            GO111MODULE="off",
            GOFLAGS="",
        )
        env["PATH"] = os.pathsep.join(
            part for part in (str(self.goroot / "bin"), env.get("PATH", "")) if part
        )
        return env

    def _go(self, workspace_root: Path, *args: str, timeout: float) -> CommandResult:
        return run_command(
            [str(self.go_binary), *args],
            cwd=workspace_root,
            env=self.environment(workspace_root),
            timeout=timeout,
        )

    @staticmethod
    def _checked_harness(result: CommandResult) -> CommandResult:
        # A signal means the toolchain crashed, not that the tests failed.
        if result.signaled:
            raise CommandError(
                result.args,
                f"was killed by signal {-result.returncode}",
                returncode=result.returncode,
                output=result.output,
            )
        return result

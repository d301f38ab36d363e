"""Blocking external process execution.

Every toolchain and version control invocation goes through run_command,
which captures output, measures wall-clock duration and enforces a
timeout. Processes are never run in the background. Each command leads its
own session, so a timeout kills the whole process group rather than only
the direct child.
"""

from __future__ import annotations

import os
import signal
import subprocess
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from toolchain_report.drivers.exceptions import CommandError, CommandTimeoutError
from toolchain_report.logging_config import get_logger

__all__ = ["CommandResult", "run_command"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a finished external command.

    Attributes:
        args: The command line.
        returncode: Exit status; negative when killed by a signal.
        stdout: Captured standard output.
        stderr: Captured standard error.
        duration_seconds: Wall-clock time from start to exit.

    """

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    duration_seconds: float

    @property
    def ok(self) -> bool:
        """True if the command exited with status 0."""
        return self.returncode == 0

    @property
    def signaled(self) -> bool:
        """True if the command was killed by a signal (crash, OOM kill)."""
        return self.returncode < 0

    @property
    def output(self) -> str:
        """Standard output followed by standard error."""
        return "\n".join(part for part in (self.stdout, self.stderr) if part)

    def check(self) -> CommandResult:
        """Return self, or raise CommandError if the command failed."""
        if not self.ok:
            raise CommandError(
                self.args,
                f"exited with status {self.returncode}",
                returncode=self.returncode,
                output=self.output,
            )
        return self


def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> CommandResult:
    """Run a command to completion and capture its output.

    A non-zero exit status is not an error here; callers decide what it
    means. Use CommandResult.check() to treat it as one.

    Args:
        args: Command line, executable first.
        cwd: Working directory.
        env: Full process environment; inherits the current one if None.
        timeout: Seconds after which the process and its children are killed.

    Returns:
        The finished command's CommandResult.

    Raises:
        CommandError: If the executable cannot be started.
        CommandTimeoutError: If the process outlives the timeout.

    """
    argv = tuple(str(a) for a in args)
    logger.debug("command_started", args=argv, cwd=str(cwd) if cwd else None)

    start = time.perf_counter()
    try:
        proc = subprocess.Popen(
            argv,
            cwd=cwd,
            env=dict(env) if env is not None else None,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
            start_new_session=True,
        )
    except OSError as e:
        raise CommandError(argv, f"could not be started: {e}") from e

    with proc:
        try:
            stdout, stderr = proc.communicate(timeout=timeout)
        except subprocess.TimeoutExpired as e:
            _kill_process_group(proc)
            stdout, stderr = proc.communicate()
            raise CommandTimeoutError(
                argv, timeout or 0.0, output=(stdout or "") + (stderr or "")
            ) from e
        except BaseException:
            _kill_process_group(proc)
            raise
    duration = time.perf_counter() - start

    logger.debug(
        "command_finished",
        args=argv,
        returncode=proc.returncode,
        duration_seconds=round(duration, 3),
    )

    return CommandResult(
        args=argv,
        returncode=proc.returncode,
        stdout=stdout or "",
        stderr=stderr or "",
        duration_seconds=duration,
    )


def _kill_process_group(proc: subprocess.Popen) -> None:
    """Kill the command and everything it started.

    The command leads its own session, so its process group also holds
    the compilers, test binaries and other children it spawned.
    """
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass
    logger.warning("command_killed", args=proc.args, pid=proc.pid)

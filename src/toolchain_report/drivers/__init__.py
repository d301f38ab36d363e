"""Drivers for the external tools the harness runs.

This package provides the BuildDriver and VCSClient interfaces, their Go
and git implementations, and the blocking process runner they share.
"""

from toolchain_report.drivers.base import BuildDriver, BuildTestOutcome, VCSClient
from toolchain_report.drivers.exceptions import (
    CommandError,
    CommandTimeoutError,
    DriverError,
)
from toolchain_report.drivers.git import GitClient
from toolchain_report.drivers.go import GoBuildDriver
from toolchain_report.drivers.process import CommandResult, run_command

__all__ = [
    "BuildDriver",
    "BuildTestOutcome",
    "CommandError",
    "CommandResult",
    "CommandTimeoutError",
    "DriverError",
    "GitClient",
    "GoBuildDriver",
    "run_command",
    "VCSClient",
]

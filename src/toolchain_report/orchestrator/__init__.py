"""Orchestration of a full A/B comparison run."""

from toolchain_report.orchestrator.exceptions import InvalidRunStateError, OrchestratorError
from toolchain_report.orchestrator.run import ComparisonRun
from toolchain_report.orchestrator.state_machine import StateMachineMixin

__all__ = [
    "ComparisonRun",
    "InvalidRunStateError",
    "OrchestratorError",
    "StateMachineMixin",
]

"""State machine abstractions for toolchain-report.

This module provides a generic mixin for forward-only state machines,
used by the comparison run to make step ordering explicit.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Generic, TypeVar

from toolchain_report.orchestrator.exceptions import InvalidRunStateError

__all__ = ["StateMachineMixin"]

StateT = TypeVar("StateT")


class StateMachineMixin(Generic[StateT]):
    """Mixin providing common state machine operations.

    Type Parameters:
        StateT: The enum type representing possible states.

    Usage:
        Define class attributes:
        - _VALID_TRANSITIONS: dict[StateT, set[StateT]] - transition rules
        - _TERMINAL_STATES: set[StateT] - states with no outgoing transitions

        Define abstract methods to access current state:
        - _get_current_state() -> StateT
        - _set_current_state(state) -> None

    Example:
        class Job(StateMachineMixin[JobState]):
            _VALID_TRANSITIONS = {
                JobState.pending: {JobState.running, JobState.failed},
                JobState.running: {JobState.done, JobState.failed},
            }
            _TERMINAL_STATES = {JobState.done, JobState.failed}

    """

    _VALID_TRANSITIONS: dict[StateT, set[StateT]]
    _TERMINAL_STATES: set[StateT]

    @abstractmethod
    def _get_current_state(self) -> StateT:
        """Get the current state of the entity."""
        ...

    @abstractmethod
    def _set_current_state(self, state: StateT) -> None:
        """Store a new current state."""
        ...

    def can_transition_to(self, new_state: StateT) -> bool:
        """Check if a transition to the given state is valid.

        Args:
            new_state: The target state to check.

        Returns:
            True if the transition is allowed, False otherwise.

        """
        current = self._get_current_state()
        return new_state in self._VALID_TRANSITIONS.get(current, set())

    def is_terminal(self) -> bool:
        """Check if the entity is in a terminal state."""
        return self._get_current_state() in self._TERMINAL_STATES

    def get_valid_transitions(self) -> list[StateT]:
        """Get the states reachable from the current state, sorted by name."""
        current = self._get_current_state()
        return sorted(self._VALID_TRANSITIONS.get(current, set()), key=str)

    def _transition(self, new_state: StateT) -> None:
        """Move to new_state.

        Raises:
            InvalidRunStateError: If the transition is not allowed.

        """
        current = self._get_current_state()
        if not self.can_transition_to(new_state):
            raise InvalidRunStateError(
                f"Cannot move from {_label(current)} to {_label(new_state)}"
            )
        self._set_current_state(new_state)


def _label(state: object) -> str:
    return str(getattr(state, "value", state))

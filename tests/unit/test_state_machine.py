"""Unit tests for the execution state machine."""

import pytest

from servicekit.state_machine import (
    ExecutionState,
    ExecutionStateMachine,
    ExecutionStateTransitionError,
)


class TestExecutionState:
    """Tests for ExecutionState enum."""

    def test_all_states_defined(self) -> None:
        """All expected states are defined."""
        expected_states = [
            "PENDING",
            "COMPOSED",
            "SUBMITTED",
            "SUCCEEDED",
            "FAILED",
            "CANCELLED",
        ]
        actual_states = [s.name for s in ExecutionState]
        assert sorted(actual_states) == sorted(expected_states)


class TestExecutionStateMachine:
    """Tests for ExecutionStateMachine."""

    def test_initial_state_is_pending(self) -> None:
        """State machine starts in PENDING state."""
        sm = ExecutionStateMachine("req-1")
        assert sm.state == ExecutionState.PENDING
        assert not sm.is_terminal()

    @pytest.mark.parametrize(
        "terminal",
        [ExecutionState.SUCCEEDED, ExecutionState.FAILED, ExecutionState.CANCELLED],
    )
    def test_happy_path_to_terminal(self, terminal: ExecutionState) -> None:
        """Composed, submitted, then one terminal state."""
        sm = ExecutionStateMachine("req-1")

        sm.transition(ExecutionState.COMPOSED)
        sm.transition(ExecutionState.SUBMITTED)
        sm.transition(terminal)

        assert sm.state == terminal
        assert sm.is_terminal()

    def test_composition_failure(self) -> None:
        """PENDING can fail directly."""
        sm = ExecutionStateMachine("req-1")

        sm.transition(ExecutionState.FAILED)

        assert sm.is_terminal()

    def test_cannot_skip_composition(self) -> None:
        """Submission requires composition."""
        sm = ExecutionStateMachine("req-1")

        with pytest.raises(ExecutionStateTransitionError) as exc_info:
            sm.transition(ExecutionState.SUBMITTED)

        assert exc_info.value.from_state == ExecutionState.PENDING
        assert exc_info.value.to_state == ExecutionState.SUBMITTED

    def test_cannot_succeed_before_submission(self) -> None:
        """Success requires submission."""
        sm = ExecutionStateMachine("req-1")
        sm.transition(ExecutionState.COMPOSED)

        assert not sm.can_transition(ExecutionState.SUCCEEDED)
        with pytest.raises(ExecutionStateTransitionError):
            sm.transition(ExecutionState.SUCCEEDED)

    @pytest.mark.parametrize(
        "terminal",
        [ExecutionState.SUCCEEDED, ExecutionState.FAILED, ExecutionState.CANCELLED],
    )
    def test_terminal_states_are_final(self, terminal: ExecutionState) -> None:
        """No transition leaves a terminal state."""
        sm = ExecutionStateMachine("req-1")
        sm.transition(ExecutionState.COMPOSED)
        sm.transition(ExecutionState.SUBMITTED)
        sm.transition(terminal)

        for state in ExecutionState:
            assert not sm.can_transition(state)
        with pytest.raises(ExecutionStateTransitionError):
            sm.transition(ExecutionState.FAILED)

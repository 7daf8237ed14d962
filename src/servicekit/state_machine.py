"""Execution state machine for a single request."""

from enum import Enum

import structlog


logger = structlog.get_logger()


class ExecutionState(Enum):
    """States of one request execution.

    State transitions:
    PENDING -> COMPOSED -> SUBMITTED -> SUCCEEDED | FAILED | CANCELLED
    PENDING -> FAILED when composition fails.
    PENDING and COMPOSED may also move to CANCELLED.
    """

    PENDING = "pending"
    COMPOSED = "composed"
    SUBMITTED = "submitted"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


# Valid state transitions (from_state -> [to_states])
_VALID_TRANSITIONS: dict[ExecutionState, list[ExecutionState]] = {
    ExecutionState.PENDING: [
        ExecutionState.COMPOSED,
        ExecutionState.FAILED,
        ExecutionState.CANCELLED,
    ],
    ExecutionState.COMPOSED: [
        ExecutionState.SUBMITTED,
        ExecutionState.FAILED,
        ExecutionState.CANCELLED,
    ],
    ExecutionState.SUBMITTED: [
        ExecutionState.SUCCEEDED,
        ExecutionState.FAILED,
        ExecutionState.CANCELLED,
    ],
    ExecutionState.SUCCEEDED: [],
    ExecutionState.FAILED: [],
    ExecutionState.CANCELLED: [],
}

_TERMINAL_STATES = frozenset(
    {ExecutionState.SUCCEEDED, ExecutionState.FAILED, ExecutionState.CANCELLED}
)


class ExecutionStateTransitionError(Exception):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, from_state: ExecutionState, to_state: ExecutionState) -> None:
        """Initialize the error.

        Args:
            from_state: Current state.
            to_state: Attempted target state.
        """
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid execution state transition: {from_state.value} -> {to_state.value}"
        )


class ExecutionStateMachine:
    """State machine for one request execution.

    Terminal states are final, which keeps an execution from resolving
    more than once.
    """

    def __init__(self, request_id: str) -> None:
        """Initialize the state machine.

        Args:
            request_id: Unique request identifier for logging.
        """
        self._state = ExecutionState.PENDING
        self._request_id = request_id
        self._log = logger.bind(
            component="service",
            request_id=request_id,
        )

    @property
    def state(self) -> ExecutionState:
        """Get the current state."""
        return self._state

    def is_terminal(self) -> bool:
        """Check if in a terminal state."""
        return self._state in _TERMINAL_STATES

    def can_transition(self, to_state: ExecutionState) -> bool:
        """Check if a transition to the given state is valid.

        Args:
            to_state: Target state.

        Returns:
            True if transition is valid.
        """
        return to_state in _VALID_TRANSITIONS.get(self._state, [])

    def transition(self, to_state: ExecutionState) -> None:
        """Transition to a new state.

        Args:
            to_state: Target state.

        Raises:
            ExecutionStateTransitionError: If transition is invalid.
        """
        if not self.can_transition(to_state):
            raise ExecutionStateTransitionError(self._state, to_state)

        old_state = self._state
        self._state = to_state

        self._log.debug(
            "execution_state_transition",
            from_state=old_state.value,
            to_state=to_state.value,
        )

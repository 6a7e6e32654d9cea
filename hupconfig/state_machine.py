"""Load-cycle state machine implementation."""

from enum import Enum, auto
from typing import ClassVar


class ConfigState(Enum):
    """Configuration load states.

    State transitions:
        UNLOADED -> LOADING: First load started
        LOADING -> VALIDATED: Both decode passes applied, required fields set
        LOADING -> FAILED: Decoding or validation error occurred
        VALIDATED -> READY: Load cycle finished
        READY -> LOADING: Reload started
        FAILED -> LOADING: Retry after a failed load
    """

    UNLOADED = auto()
    LOADING = auto()
    VALIDATED = auto()
    READY = auto()
    FAILED = auto()


class ConfigStateError(Exception):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, from_state: ConfigState, to_state: ConfigState) -> None:
        """Initialize the error.

        Args:
            from_state: The current state.
            to_state: The attempted target state.
        """
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid state transition: {from_state.name} -> {to_state.name}"
        )


class ConfigStateMachine:
    """State machine for the load/reload cycle.

    Unlike a one-shot load, a reloadable store re-enters LOADING from
    READY or FAILED on every cycle.
    """

    VALID_TRANSITIONS: ClassVar[dict[ConfigState, set[ConfigState]]] = {
        ConfigState.UNLOADED: {ConfigState.LOADING},
        ConfigState.LOADING: {ConfigState.VALIDATED, ConfigState.FAILED},
        ConfigState.VALIDATED: {ConfigState.READY, ConfigState.FAILED},
        ConfigState.READY: {ConfigState.LOADING},
        ConfigState.FAILED: {ConfigState.LOADING},
    }

    def __init__(self) -> None:
        """Initialize the state machine in UNLOADED state."""
        self._state = ConfigState.UNLOADED

    @property
    def state(self) -> ConfigState:
        """Get the current state."""
        return self._state

    def transition(self, to_state: ConfigState) -> None:
        """Move to ``to_state``.

        Raises:
            ConfigStateError: If ``to_state`` is not reachable from the
                current state, for example LOADING while a cycle is in flight.
        """
        if to_state not in self.VALID_TRANSITIONS[self._state]:
            raise ConfigStateError(self._state, to_state)
        self._state = to_state

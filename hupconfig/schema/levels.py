"""Debug-level vocabulary and rank comparison."""

import logging
from enum import Enum
from typing import Final


class DebugLevel(str, Enum):
    """Ordered debug verbosity levels.

    error < warning < info < verbose
    """

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    VERBOSE = "verbose"

    @property
    def rank(self) -> int:
        """Get the rank of this level."""
        return DEBUG_LEVEL_RANKS[self.value]

    @property
    def logging_level(self) -> int:
        """Get the matching standard library logging level."""
        return _LOGGING_LEVELS[self]


DEBUG_LEVEL_RANKS: Final[dict[str, int]] = {
    DebugLevel.ERROR.value: 0,
    DebugLevel.WARNING.value: 1,
    DebugLevel.INFO.value: 2,
    DebugLevel.VERBOSE.value: 3,
}

_LOGGING_LEVELS: Final[dict[DebugLevel, int]] = {
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARNING: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.VERBOSE: logging.DEBUG,
}

# An unknown current level ranks below every known level.
UNKNOWN_CURRENT_RANK: Final = -1


def level_at_least(current: str, level: str) -> bool:
    """Check whether ``current`` is at least as verbose as ``level``.

    Args:
        current: The configured debug level.
        level: The level to compare against.

    Returns:
        True if ``current`` ranks at or above ``level``. An unknown
        ``level`` ranks as error, so it is reached by any ``current``.
    """
    if level not in DEBUG_LEVEL_RANKS:
        return True
    return DEBUG_LEVEL_RANKS.get(current, UNKNOWN_CURRENT_RANK) >= DEBUG_LEVEL_RANKS[level]

"""Reload signal sources.

The process-level handler for a signal can only be installed from the main
thread, and only one handler exists per signal. :class:`PosixSignalSource`
installs a single dispatching handler per signal number and fans each
occurrence out to every subscriber.
"""

import signal
import threading
from collections.abc import Callable
from types import FrameType
from typing import Any, ClassVar, Protocol

import structlog

from hupconfig.constants import COMPONENT_RELOAD


logger = structlog.get_logger()

SignalCallback = Callable[[], None]


class SignalSource(Protocol):
    """Protocol for reload signal sources.

    Allows dependency injection of the signal channel for testing.
    """

    def subscribe(self, callback: SignalCallback) -> None:
        """Call ``callback`` on every signal occurrence."""
        ...

    def unsubscribe(self, callback: SignalCallback) -> None:
        """Stop calling ``callback``."""
        ...


class _SignalHub:
    """Dispatches one process signal to many subscribers.

    Callbacks run inside the signal handler and must not block.
    """

    def __init__(self, signum: int) -> None:
        self._signum = signum
        # Replaced as a whole so the handler never needs the lock.
        self._callbacks: tuple[SignalCallback, ...] = ()
        self._previous: Any = None
        self._lock = threading.Lock()

    def add(self, callback: SignalCallback) -> None:
        with self._lock:
            if not self._callbacks:
                self._previous = signal.signal(self._signum, self._handle)
                logger.info(
                    "signal_handler_installed",
                    component=COMPONENT_RELOAD,
                    signal=signal.Signals(self._signum).name,
                )
            self._callbacks = (*self._callbacks, callback)

    def remove(self, callback: SignalCallback) -> None:
        with self._lock:
            if callback not in self._callbacks:
                return
            remaining = list(self._callbacks)
            remaining.remove(callback)
            self._callbacks = tuple(remaining)
            if not self._callbacks:
                previous = self._previous if self._previous is not None else signal.SIG_DFL
                signal.signal(self._signum, previous)
                self._previous = None
                logger.info(
                    "signal_handler_restored",
                    component=COMPONENT_RELOAD,
                    signal=signal.Signals(self._signum).name,
                )

    def _handle(self, signum: int, frame: FrameType | None) -> None:
        for callback in self._callbacks:
            callback()


class PosixSignalSource:
    """Signal source backed by a process signal (SIGHUP by default).

    The first ``subscribe`` for a signal number installs the handler; the
    last ``unsubscribe`` restores the previous one. Both must be called from
    the main thread.
    """

    _hubs: ClassVar[dict[int, _SignalHub]] = {}
    _hubs_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, signum: int | None = None) -> None:
        """Initialize the source.

        Args:
            signum: Signal number to listen on (default: SIGHUP).

        Raises:
            RuntimeError: If SIGHUP is not available on this platform.
        """
        if signum is None:
            sighup = getattr(signal, "SIGHUP", None)
            if sighup is None:
                raise RuntimeError("SIGHUP is not available on this platform")
            signum = int(sighup)
        self._signum = signum

    @property
    def signum(self) -> int:
        """Get the signal number."""
        return self._signum

    def _hub(self) -> _SignalHub:
        with self._hubs_lock:
            hub = self._hubs.get(self._signum)
            if hub is None:
                hub = _SignalHub(self._signum)
                self._hubs[self._signum] = hub
            return hub

    def subscribe(self, callback: SignalCallback) -> None:
        """Call ``callback`` on every occurrence of the signal.

        Raises:
            ValueError: If the handler must be installed off the main thread.
        """
        self._hub().add(callback)

    def unsubscribe(self, callback: SignalCallback) -> None:
        """Stop calling ``callback``."""
        self._hub().remove(callback)

"""Signal-triggered configuration reload."""

import os
import queue
import sys
import threading
import weakref
from collections.abc import Callable
from typing import Any

import structlog

from hupconfig.constants import COMPONENT_RELOAD, EXIT_RELOAD_FAILED
from hupconfig.errors import InvalidTargetError
from hupconfig.loader import ConfigLoader
from hupconfig.observability.logging import reload_context
from hupconfig.settings import ReloadFailurePolicy, get_settings
from hupconfig.signals import PosixSignalSource, SignalSource
from hupconfig.store import ConfigStore


logger = structlog.get_logger()

Terminator = Callable[[str], None]

_SIGNALLED = object()
_STOP = object()

# Handles of armed stores; read and written under the store's guard.
_ARMED_HANDLES: "weakref.WeakKeyDictionary[ConfigStore[Any], WatchHandle]" = (
    weakref.WeakKeyDictionary()
)


def terminate_process(message: str) -> None:
    """Write ``message`` to stderr and exit the process immediately.

    ``os._exit`` is used because the caller is a background thread, where
    ``sys.exit`` would only end the thread.
    """
    sys.stderr.write(message + "\n")
    sys.stderr.flush()
    os._exit(EXIT_RELOAD_FAILED)


class WatchHandle:
    """Background reload task for one armed store.

    Signal occurrences are queued by the signal handler and consumed one at
    a time by a daemon thread, so reloads never overlap.
    """

    def __init__(
        self,
        store: ConfigStore[Any],
        loader: ConfigLoader,
        signal_source: SignalSource,
        failure_policy: ReloadFailurePolicy,
        terminate: Terminator,
    ) -> None:
        self._store = store
        self._loader = loader
        self._signal_source = signal_source
        self._failure_policy = failure_policy
        self._terminate = terminate
        self._queue: queue.SimpleQueue[object] = queue.SimpleQueue()
        self._cancelled = threading.Event()
        self._reloads = threading.Condition()
        self._reload_count = 0
        self._failure_count = 0
        self._thread = threading.Thread(
            target=self._run,
            name=f"hupconfig-reload-{type(store).__name__}",
            daemon=True,
        )
        self._log = logger.bind(
            component=COMPONENT_RELOAD,
            source_location=store.source_location,
            failure_policy=failure_policy.value,
        )

    @property
    def reload_count(self) -> int:
        """Get the number of reloads attempted."""
        with self._reloads:
            return self._reload_count

    @property
    def failure_count(self) -> int:
        """Get the number of reloads that failed."""
        with self._reloads:
            return self._failure_count

    @property
    def is_running(self) -> bool:
        """Check whether the background thread is alive."""
        return self._thread.is_alive()

    @property
    def failure_policy(self) -> ReloadFailurePolicy:
        """Get the reload failure policy."""
        return self._failure_policy

    def start(self) -> None:
        """Subscribe to the signal source and start the background thread."""
        self._signal_source.subscribe(self._on_signal)
        self._thread.start()
        self._log.info("reload_watcher_started")

    def cancel(self, timeout: float | None = None) -> None:
        """Stop watching for reload signals.

        A reload already in progress completes first. The store stays
        marked as armed.

        Args:
            timeout: Seconds to wait for the thread to exit.
        """
        if self._cancelled.is_set():
            return
        self._cancelled.set()
        self._signal_source.unsubscribe(self._on_signal)
        self._queue.put(_STOP)
        if threading.current_thread() is not self._thread:
            self._thread.join(timeout)
        self._log.info("reload_watcher_cancelled")

    def join(self, timeout: float | None = None) -> None:
        """Wait for the background thread to exit."""
        self._thread.join(timeout)

    def wait_for_reloads(self, count: int, timeout: float | None = None) -> bool:
        """Block until at least ``count`` reloads have been attempted.

        Args:
            count: Number of reloads to wait for.
            timeout: Maximum seconds to wait.

        Returns:
            True if the count was reached, False on timeout.
        """
        with self._reloads:
            return self._reloads.wait_for(lambda: self._reload_count >= count, timeout)

    def _on_signal(self) -> None:
        # Runs inside the signal handler: only enqueue.
        self._queue.put(_SIGNALLED)

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                return
            with reload_context(self._store.source_location, self.reload_count + 1):
                self._reload()

    def _reload(self) -> None:
        keep_previous = self._failure_policy is ReloadFailurePolicy.KEEP_PREVIOUS
        self._loader.metrics.record_reload()
        self._log.info("config_reload_requested")
        failed = False
        try:
            self._loader.load(self._store, rollback=keep_previous)
        except Exception as e:
            failed = True
            if keep_previous:
                self._log.error(
                    "config_reload_failed",
                    action="kept_previous",
                    error_type=type(e).__name__,
                    error=str(e),
                )
            else:
                message = f"config file error: {e}"
                self._log.critical(
                    "config_reload_failed",
                    action="terminate",
                    error_type=type(e).__name__,
                    error=str(e),
                )
                self._terminate(message)
        else:
            self._log.info("config_reloaded")
        finally:
            with self._reloads:
                self._reload_count += 1
                if failed:
                    self._failure_count += 1
                self._reloads.notify_all()


class ReloadWatcher:
    """Arms config stores for reload on SIGHUP.

    Example:
        store = ConfigStore(AppConfig(), "/etc/app.yaml")
        load(store)
        ReloadWatcher().arm(store)
    """

    def __init__(
        self,
        loader: ConfigLoader | None = None,
        *,
        failure_policy: ReloadFailurePolicy | None = None,
        signal_source: SignalSource | None = None,
        terminate: Terminator | None = None,
    ) -> None:
        """Initialize the watcher.

        Args:
            loader: Loader used for each reload (default: YAML + environment).
            failure_policy: What to do when a reload fails (default: from
                EngineSettings, FATAL unless overridden).
            signal_source: Source of reload signals (default: SIGHUP).
            terminate: Called with a message on fatal reload failure
                (default: :func:`terminate_process`).
        """
        self._loader = loader or ConfigLoader()
        self._failure_policy = failure_policy or get_settings().reload_failure_policy
        self._signal_source = signal_source
        self._terminate = terminate or terminate_process

    def arm(self, store: ConfigStore[Any]) -> "WatchHandle | None":
        """Start reloading ``store`` on every reload signal.

        Arming an already armed store is a no-op that returns its existing
        handle, or None if the store was marked armed by other means.

        Args:
            store: The config store to reload.

        Returns:
            The handle of the background reload task.

        Raises:
            InvalidTargetError: If ``store`` is not a ConfigStore.
        """
        if not isinstance(store, ConfigStore):
            raise InvalidTargetError(
                f"arm only accepts ConfigStore instances, got {type(store).__name__}"
            )

        with store.guard():
            if store.reload_armed:
                logger.debug(
                    "reload_already_armed",
                    component=COMPONENT_RELOAD,
                    source_location=store.source_location,
                )
                return _ARMED_HANDLES.get(store)

            signal_source = self._signal_source or PosixSignalSource()
            handle = WatchHandle(
                store=store,
                loader=self._loader,
                signal_source=signal_source,
                failure_policy=self._failure_policy,
                terminate=self._terminate,
            )
            handle.start()
            store.mark_reload_armed()
            _ARMED_HANDLES[store] = handle
            return handle


def arm(store: ConfigStore[Any], **kwargs: Any) -> "WatchHandle | None":
    """Arm ``store`` for reload with a default ReloadWatcher.

    Args:
        store: The config store to reload.
        **kwargs: Passed to :class:`ReloadWatcher`.

    Returns:
        The handle of the background reload task.
    """
    return ReloadWatcher(**kwargs).arm(store)

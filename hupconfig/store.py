"""Guarded handle owning a configuration model and its lock."""

import os
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Generic, TypeVar

from hupconfig.errors import InvalidTargetError
from hupconfig.schema.base import ReloadableConfig
from hupconfig.schema.levels import level_at_least
from hupconfig.state_machine import ConfigState, ConfigStateMachine


ConfigT = TypeVar("ConfigT", bound=ReloadableConfig)
R = TypeVar("R")


class ConfigStore(Generic[ConfigT]):
    """Owns a configuration model, its source location and its guard.

    All reads and writes of the model go through :meth:`guard`, which holds
    the exclusive-access lock for the duration of the ``with`` block. A load
    cycle holds the same lock from the first decode until validation ends,
    so no reader observes a partially merged model.

    Example:
        store = ConfigStore(AppConfig(), "/etc/app.yaml")
        with store.guard() as config:
            port = config.port
    """

    def __init__(self, config: ConfigT, source_location: str | os.PathLike[str]) -> None:
        """Initialize the store.

        Args:
            config: The model instance, optionally pre-populated with defaults.
            source_location: Path of the configuration file.

        Raises:
            InvalidTargetError: If ``config`` is not a ReloadableConfig instance.
            ValueError: If ``source_location`` is empty.
        """
        if not isinstance(config, ReloadableConfig):
            raise InvalidTargetError(
                "ConfigStore only accepts ReloadableConfig instances, "
                f"got {type(config).__name__}"
            )
        self._config = config
        self._lock = threading.RLock()
        self._source_location = _check_location(source_location)
        self._reload_armed = False
        self._source_checksum: str | None = None
        self._state_machine = ConfigStateMachine()

    @property
    def source_location(self) -> str:
        """Get the configuration file path."""
        with self._lock:
            return self._source_location

    @source_location.setter
    def source_location(self, value: str | os.PathLike[str]) -> None:
        """Set the configuration file path.

        Raises:
            ValueError: If the value is empty.
        """
        location = _check_location(value)
        with self._lock:
            self._source_location = location

    @property
    def reload_armed(self) -> bool:
        """Check whether a reload watcher has been attached."""
        with self._lock:
            return self._reload_armed

    def mark_reload_armed(self) -> bool:
        """Mark the store as armed for reload.

        Returns:
            True if the store was not armed before, False otherwise.
        """
        with self._lock:
            if self._reload_armed:
                return False
            self._reload_armed = True
            return True

    @property
    def state(self) -> ConfigState:
        """Get the state of the last load cycle."""
        with self._lock:
            return self._state_machine.state

    @property
    def state_machine(self) -> ConfigStateMachine:
        """Get the load-cycle state machine. Mutate only under the guard."""
        return self._state_machine

    @property
    def source_checksum(self) -> str | None:
        """Get the SHA-256 of the last decoded file contents."""
        with self._lock:
            return self._source_checksum

    @source_checksum.setter
    def source_checksum(self, value: str | None) -> None:
        with self._lock:
            self._source_checksum = value

    @property
    def config_type(self) -> type[ConfigT]:
        """Get the model class held by the store."""
        return type(self._config)

    @contextmanager
    def guard(self) -> Iterator[ConfigT]:
        """Hold the exclusive-access guard and yield the model.

        The guard is re-entrant and released on every exit path.

        Yields:
            The configuration model.
        """
        with self._lock:
            yield self._config

    def read(self, fn: Callable[[ConfigT], R]) -> R:
        """Call ``fn`` with the model while holding the guard.

        Args:
            fn: Function reading from the model.

        Returns:
            Whatever ``fn`` returns.
        """
        with self.guard() as config:
            return fn(config)

    def snapshot(self) -> ConfigT:
        """Get a deep copy of the model taken under the guard."""
        with self.guard() as config:
            return config.model_copy(deep=True)

    def restore(self, snapshot: ConfigT) -> None:
        """Copy every field of ``snapshot`` back into the held model.

        Args:
            snapshot: A copy previously returned by :meth:`snapshot`.
        """
        with self.guard() as config:
            for name in type(config).model_fields:
                # Bypass assignment validation: the snapshot is already valid.
                object.__setattr__(config, name, getattr(snapshot, name))
            object.__setattr__(
                config, "__pydantic_fields_set__", set(snapshot.model_fields_set)
            )

    def debug_level_at_least(self, level: str) -> bool:
        """Check whether the configured debug level is at least ``level``.

        Levels rank error < warning < info < verbose. An unknown configured
        level never reaches a known ``level``; an unknown ``level`` ranks as
        error and is always reached.

        Args:
            level: The level to compare against.

        Returns:
            True if the configured level ranks at or above ``level``.
        """
        with self.guard() as config:
            return level_at_least(config.debug, level)


def _check_location(value: str | os.PathLike[str]) -> str:
    location = os.fspath(value)
    if not location:
        raise ValueError("source location must not be empty")
    return location

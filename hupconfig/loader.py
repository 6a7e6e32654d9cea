"""Configuration loader: one load or reload cycle under the store guard."""

import hashlib
import os
import time
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from hupconfig.constants import COMPONENT_CONFIG
from hupconfig.decoders.base import EnvDecoder, FieldDecodeFailure, FileDecoder
from hupconfig.decoders.env_decoder import EnvironDecoder
from hupconfig.decoders.yaml_decoder import YamlFileDecoder
from hupconfig.errors import DecodeError, EnvDecodeError, InvalidTargetError
from hupconfig.observability.metrics import LoadMetrics
from hupconfig.settings import get_settings
from hupconfig.state_machine import ConfigState
from hupconfig.store import ConfigStore
from hupconfig.validator import validate_required_fields


logger = structlog.get_logger()


@dataclass(frozen=True)
class LoadResult:
    """Outcome of a successful load cycle.

    Attributes:
        file_applied: Whether the configuration file was read and decoded.
        file_checksum: SHA-256 of the file contents, if it was read.
        file_fields: Fields assigned from the file.
        env_fields: Fields assigned from the environment.
        duration_ms: Duration of the cycle in milliseconds.
    """

    file_applied: bool
    file_checksum: str | None
    file_fields: tuple[str, ...]
    env_fields: tuple[str, ...]
    duration_ms: float


class ConfigLoader:
    """Loads (or reloads) a config store from its file and the environment.

    A cycle runs entirely under the store guard:
    read file -> decode file -> decode environment -> validate required.

    An unreadable file is skipped without error; environment overrides and
    validation still run. Decode and validation errors abort the cycle and
    are raised to the caller.
    """

    def __init__(
        self,
        file_decoder: FileDecoder | None = None,
        env_decoder: EnvDecoder | None = None,
        environ: Mapping[str, str] | None = None,
        metrics: LoadMetrics | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            file_decoder: Decoder for file contents (default: YAML).
            env_decoder: Decoder for environment overrides.
            environ: Environment to read (default: ``os.environ`` at load time).
            metrics: Metrics sink (default: the shared LoadMetrics instance).
        """
        self._file_decoder = file_decoder or YamlFileDecoder()
        self._env_decoder = env_decoder or EnvironDecoder(
            list_separator=get_settings().env_list_separator
        )
        self._environ = environ
        self._metrics = metrics

    @property
    def metrics(self) -> LoadMetrics:
        """Get the metrics sink."""
        if self._metrics is not None:
            return self._metrics
        return LoadMetrics.get_instance()

    def load(self, store: ConfigStore[Any], *, rollback: bool = False) -> LoadResult:
        """Run one load cycle.

        Args:
            store: The config store to populate.
            rollback: Restore the previous field values if the cycle fails.
                Without it, fields decoded before the failure keep their
                new values.

        Returns:
            LoadResult describing what was applied.

        Raises:
            InvalidTargetError: If ``store`` is not a ConfigStore.
            DecodeError: If the file contents cannot be decoded.
            EnvDecodeError: If an environment override cannot be decoded.
            MissingRequiredFieldsError: If required fields are unset after merge.
        """
        if not isinstance(store, ConfigStore):
            raise InvalidTargetError(
                f"load only accepts ConfigStore instances, got {type(store).__name__}"
            )

        start_time = time.perf_counter()
        metrics = self.metrics
        metrics.record_load_started()

        with store.guard() as config:
            log = logger.bind(
                component=COMPONENT_CONFIG,
                source_location=store.source_location,
                config_type=type(config).__name__,
            )
            snapshot = store.snapshot() if rollback else None
            previous_checksum = store.source_checksum
            log.info("config_load_started", phase="LOADING", rollback=rollback)

            store.state_machine.transition(ConfigState.LOADING)
            try:
                file_checksum, file_fields = self._apply_file(store, config, log)
                env_fields = self._apply_env(config)
                log.info("config_env_applied", fields=env_fields)

                validate_required_fields(config)
                store.state_machine.transition(ConfigState.VALIDATED)

                duration_ms = (time.perf_counter() - start_time) * 1000
                metrics.record_load_duration(duration_ms)
                store.state_machine.transition(ConfigState.READY)
            except BaseException as e:
                # Interrupts also end the cycle so the next load can start.
                store.state_machine.transition(ConfigState.FAILED)
                if snapshot is not None:
                    store.restore(snapshot)
                    store.source_checksum = previous_checksum
                metrics.record_load_failure()
                log.error(
                    "config_load_failed",
                    phase="FAILED",
                    error_type=type(e).__name__,
                    error=str(e),
                    rolled_back=snapshot is not None,
                )
                raise

            log.info("config_ready", phase="READY", load_duration_ms=duration_ms)

        return LoadResult(
            file_applied=file_checksum is not None,
            file_checksum=file_checksum,
            file_fields=tuple(file_fields),
            env_fields=tuple(env_fields),
            duration_ms=duration_ms,
        )

    def _apply_file(
        self,
        store: ConfigStore[Any],
        config: Any,
        log: structlog.stdlib.BoundLogger,
    ) -> tuple[str | None, list[str]]:
        """Read and decode the config file, skipping it if unreadable.

        Returns:
            Tuple of (checksum or None if skipped, assigned field names).
        """
        location = store.source_location
        try:
            data = Path(location).read_bytes()
        except FileNotFoundError:
            self.metrics.record_file_skipped()
            log.debug("config_file_skipped", reason="not_found")
            return None, []
        except OSError as e:
            # Unreadable files are not fatal either, but worth a warning.
            self.metrics.record_file_skipped()
            log.warning("config_file_skipped", reason="unreadable", error=str(e))
            return None, []

        checksum = hashlib.sha256(data).hexdigest()
        try:
            file_fields = self._file_decoder.decode(data, config)
        except FieldDecodeFailure as e:
            raise DecodeError(location, e.errors) from e

        store.source_checksum = checksum
        log.info(
            "config_file_decoded",
            file_sha256=checksum,
            fields=file_fields,
        )
        return checksum, file_fields

    def _apply_env(self, config: Any) -> list[str]:
        environ = self._environ if self._environ is not None else os.environ
        try:
            return self._env_decoder.decode(environ, config)
        except FieldDecodeFailure as e:
            raise EnvDecodeError(e.key, e.errors) from e


def load(store: ConfigStore[Any], *, rollback: bool = False) -> LoadResult:
    """Load a config store with the default YAML and environment decoders.

    Args:
        store: The config store to populate.
        rollback: Restore the previous field values if the cycle fails.

    Returns:
        LoadResult describing what was applied.
    """
    return ConfigLoader().load(store, rollback=rollback)

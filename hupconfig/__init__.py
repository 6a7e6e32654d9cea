"""Layered, hot-reloadable configuration.

A :class:`ReloadableConfig` model is populated from a YAML file and from
environment overrides by :func:`load`, checked for required fields, and
optionally reloaded on SIGHUP via :func:`arm`.
"""

from hupconfig.errors import (
    DecodeError,
    EnvDecodeError,
    HupConfigError,
    InvalidTargetError,
    MissingRequiredFieldsError,
    NotAnAggregateError,
    UninspectableValueError,
)
from hupconfig.inspection import is_unset
from hupconfig.loader import ConfigLoader, LoadResult, load
from hupconfig.schema import DebugLevel, ReloadableConfig, setting
from hupconfig.settings import EngineSettings, ReloadFailurePolicy
from hupconfig.state_machine import ConfigState
from hupconfig.store import ConfigStore
from hupconfig.validator import find_missing_required_fields, validate_required_fields
from hupconfig.watcher import ReloadWatcher, WatchHandle, arm


__all__ = [
    "ConfigLoader",
    "ConfigState",
    "ConfigStore",
    "DebugLevel",
    "DecodeError",
    "EngineSettings",
    "EnvDecodeError",
    "HupConfigError",
    "InvalidTargetError",
    "LoadResult",
    "MissingRequiredFieldsError",
    "NotAnAggregateError",
    "ReloadFailurePolicy",
    "ReloadWatcher",
    "ReloadableConfig",
    "UninspectableValueError",
    "WatchHandle",
    "arm",
    "find_missing_required_fields",
    "is_unset",
    "load",
    "setting",
    "validate_required_fields",
]

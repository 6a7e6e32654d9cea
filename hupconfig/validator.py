"""Required-field validation for configuration models."""

import dataclasses
from typing import Any

from pydantic import BaseModel

from hupconfig.constants import META_REQUIRED
from hupconfig.errors import (
    InvalidTargetError,
    MissingRequiredFieldsError,
    NotAnAggregateError,
)
from hupconfig.inspection import is_unset, runtime_is_unset
from hupconfig.schema.base import ReloadableConfig
from hupconfig.schema.fields import field_metadata
from hupconfig.store import ConfigStore


def _model_missing(target: BaseModel) -> list[str]:
    model_cls = type(target)
    if isinstance(target, ReloadableConfig):
        return [
            spec.name
            for spec in model_cls.field_specs()
            if spec.required and spec.is_unset(getattr(target, spec.name))
        ]
    return [
        name
        for name, info in model_cls.model_fields.items()
        if field_metadata(model_cls, name).get(META_REQUIRED)
        and is_unset(getattr(target, name), info.annotation)
    ]


def _dataclass_missing(target: Any) -> list[str]:
    missing = []
    for f in dataclasses.fields(target):
        if not f.metadata.get(META_REQUIRED):
            continue
        value = getattr(target, f.name)
        annotation = f.type if not isinstance(f.type, str) else None
        if annotation is None:
            unset = runtime_is_unset(value)
        else:
            unset = is_unset(value, annotation)
        if unset:
            missing.append(f.name)
    return missing


def find_missing_required_fields(target: Any) -> list[str]:
    """Find required fields whose value is still unset.

    Args:
        target: A configuration model, a dataclass instance, or a
            ConfigStore holding a model.

    Returns:
        Names of unset required fields, in declaration order.

    Raises:
        InvalidTargetError: If ``target`` is None.
        NotAnAggregateError: If ``target`` does not resolve to a model or
            dataclass instance.
    """
    if target is None:
        raise InvalidTargetError("validation target must not be None")
    if isinstance(target, ConfigStore):
        # One level of indirection: validate the held model under its guard.
        with target.guard() as config:
            return _aggregate_missing(config)
    return _aggregate_missing(target)


def _aggregate_missing(aggregate: Any) -> list[str]:
    if isinstance(aggregate, BaseModel):
        return _model_missing(aggregate)
    if dataclasses.is_dataclass(aggregate) and not isinstance(aggregate, type):
        return _dataclass_missing(aggregate)
    raise NotAnAggregateError(
        f"validation target must be a model or dataclass, got {type(aggregate).__name__}"
    )


def validate_required_fields(target: Any) -> None:
    """Check that every required field of ``target`` is set.

    Args:
        target: A configuration model, a dataclass instance, or a
            ConfigStore holding a model.

    Raises:
        MissingRequiredFieldsError: If any required field is unset.
        InvalidTargetError: If ``target`` is None.
        NotAnAggregateError: If ``target`` is not an aggregate.
    """
    missing = find_missing_required_fields(target)
    if missing:
        raise MissingRequiredFieldsError(missing)

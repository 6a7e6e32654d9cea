"""Environment variable decoder."""

import dataclasses
import json
import types
from collections.abc import Mapping, Sequence, Set
from typing import Annotated, Any, Union, get_args, get_origin

import structlog
from pydantic import BaseModel

from hupconfig.constants import DEFAULT_ENV_LIST_SEPARATOR
from hupconfig.decoders.base import FieldDecodeFailure, assign_field
from hupconfig.schema.base import ReloadableConfig


logger = structlog.get_logger()


def _strip_optional(annotation: Any) -> Any:
    """Unwrap ``Annotated`` and ``X | None`` down to ``X`` where possible."""
    if get_origin(annotation) is Annotated:
        return _strip_optional(get_args(annotation)[0])
    if get_origin(annotation) in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return _strip_optional(args[0])
    return annotation


def _value_kind(annotation: Any) -> str:
    """Classify how a raw environment string is turned into a value.

    Returns:
        "list" for separator-split values, "json" for structured values,
        "scalar" for values handed to pydantic as-is.
    """
    tp = _strip_optional(annotation)
    origin = get_origin(tp) or tp
    if not isinstance(origin, type):
        return "scalar"
    if origin is tuple or issubclass(origin, (BaseModel, Mapping)):
        return "json"
    if dataclasses.is_dataclass(origin):
        return "json"
    if issubclass(origin, Set) or (
        issubclass(origin, Sequence) and not issubclass(origin, (str, bytes))
    ):
        return "list"
    return "scalar"


class EnvironDecoder:
    """Decodes environment variables into fields declared with ``env``.

    Scalars are coerced by pydantic ("8080" -> 8080, "true" -> True).
    Lists and sets are split on a separator. Mappings, tuples and nested
    models are parsed as JSON. Variables that are not present leave their
    field untouched; a present empty variable is applied as-is.
    """

    def __init__(self, list_separator: str = DEFAULT_ENV_LIST_SEPARATOR) -> None:
        """Initialize the decoder.

        Args:
            list_separator: Separator for list and set values.
        """
        self._list_separator = list_separator

    def _parse(self, raw: str, annotation: Any, variable: str) -> object:
        kind = _value_kind(annotation)
        if kind == "list":
            return [] if raw == "" else raw.split(self._list_separator)
        if kind == "json":
            try:
                return json.loads(raw)
            except json.JSONDecodeError as e:
                raise FieldDecodeFailure(
                    variable,
                    [{"loc": variable, "msg": str(e), "type": "json_invalid"}],
                ) from e
        return raw

    def decode(self, environ: Mapping[str, str], target: ReloadableConfig) -> list[str]:
        """Apply environment overrides to ``target``.

        Args:
            environ: Process environment.
            target: Model to assign fields on.

        Returns:
            Names of the fields that were assigned, in declaration order.

        Raises:
            FieldDecodeFailure: If a variable cannot be parsed or validated.
        """
        assigned = []
        for spec in type(target).field_specs():
            if spec.env_key is None or spec.env_key not in environ:
                continue
            value = self._parse(environ[spec.env_key], spec.annotation, spec.env_key)
            assign_field(target, spec.name, value, spec.env_key)
            assigned.append(spec.name)

        logger.debug("env_fields_decoded", field_count=len(assigned))
        return assigned

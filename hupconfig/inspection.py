"""Zero-value inspection for configuration fields.

A value is *unset* when it is still in its type's default state:

- optional references are unset only when ``None``; a present ``""`` is set,
- lists, mappings, sets, variadic tuples and callables are unset only when
  ``None``,
- fixed-size tuples are unset when every element is unset,
- enums with a scalar mix-in (``IntEnum``, ``StrEnum``) are unset when the
  member equals the scalar zero; plain enum members are always set,
- nested models and dataclasses are unset when every field is unset,
- scalars are unset when equal to ``type()`` (``0``, ``""``, ``False``...).

Checkers are built from the declared annotation so that ``Optional[str]``
and ``str`` can treat ``""`` differently. Without an annotation the runtime
type of the value is used.
"""

import dataclasses
import functools
import types
import typing
from collections.abc import Callable, Mapping, Sequence, Set
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, ForwardRef, Literal, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel

from hupconfig.errors import UninspectableValueError


UnsetChecker = Callable[[Any], bool]

_SCALAR_TYPES: tuple[type, ...] = (bool, int, float, complex, str, bytes, Decimal)
_REFERENCE_VALUES: tuple[type, ...] = (list, dict, set, frozenset, bytearray)


def _is_none(value: Any) -> bool:
    return value is None


def _is_aggregate(value: Any) -> bool:
    """Check whether a value is a structured aggregate (model or dataclass)."""
    if isinstance(value, BaseModel):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _is_union(annotation: Any) -> bool:
    return get_origin(annotation) in (Union, types.UnionType)


def _scalar_checker(tp: type) -> UnsetChecker:
    zero = tp()

    def check(value: Any) -> bool:
        return value is None or value == zero

    return check


def _tuple_checker(args: tuple[Any, ...]) -> UnsetChecker:
    if not args or (len(args) == 2 and args[1] is Ellipsis):
        # Variadic tuples are sequences.
        return _is_none

    item_checks = [unset_checker(arg) for arg in args]

    def check_fixed(value: Any) -> bool:
        if value is None:
            return True
        return all(check(item) for check, item in zip(item_checks, value, strict=False))

    return check_fixed


def _aggregate_checker(value: Any) -> bool:
    return value is None or aggregate_is_unset(value)


def _enum_zero(tp: type) -> Any:
    """Get the scalar zero an enum compares against, or None for plain enums."""
    for base in tp.__mro__:
        if base in _SCALAR_TYPES:
            return base()
    return None


def _enum_checker(tp: type) -> UnsetChecker:
    zero = _enum_zero(tp)
    if zero is None:
        return _is_none

    def check(value: Any) -> bool:
        return value is None or value == zero

    return check


def unset_checker(annotation: Any) -> UnsetChecker:
    """Build the "is default" capability for a declared type.

    Args:
        annotation: A type annotation, as found on a pydantic field or
            dataclass field.

    Returns:
        A predicate answering whether a value of that type is unset.

    Raises:
        UninspectableValueError: If the annotation is not a resolvable type
            (an unresolved forward reference or a type variable).
    """
    if annotation is None or annotation is Any:
        return runtime_is_unset
    if annotation is type(None):
        return _is_none
    if isinstance(annotation, (str, ForwardRef, TypeVar)):
        raise UninspectableValueError(annotation)

    origin = get_origin(annotation)
    if origin is Annotated:
        return unset_checker(get_args(annotation)[0])
    if _is_union(annotation):
        if type(None) in get_args(annotation):
            return _is_none
        return runtime_is_unset
    if origin is Literal:
        return runtime_is_unset
    if origin is tuple or annotation is tuple:
        return _tuple_checker(get_args(annotation))

    tp = origin if origin is not None else annotation
    if not isinstance(tp, type):
        raise UninspectableValueError(annotation)

    if issubclass(tp, BaseModel) or dataclasses.is_dataclass(tp):
        return _aggregate_checker
    if issubclass(tp, Enum):
        return _enum_checker(tp)
    if issubclass(tp, _SCALAR_TYPES):
        return _scalar_checker(tp)
    if issubclass(tp, (Mapping, Set)) or (
        issubclass(tp, Sequence) and not issubclass(tp, (str, bytes))
    ):
        return _is_none
    if issubclass(tp, Callable):  # type: ignore[arg-type]
        return _is_none

    try:
        zero = tp()
    except TypeError:
        # No default construction: behaves like a reference.
        return _is_none

    def check_other(value: Any) -> bool:
        return value is None or value == zero

    return check_other


def runtime_is_unset(value: Any) -> bool:
    """Decide whether a value is unset from its runtime type alone."""
    if value is None:
        return True
    if _is_aggregate(value):
        return aggregate_is_unset(value)
    if isinstance(value, tuple):
        return all(runtime_is_unset(item) for item in value)
    if isinstance(value, Enum):
        return _enum_checker(type(value))(value)
    if isinstance(value, _SCALAR_TYPES):
        return bool(value == type(value)())
    if isinstance(value, _REFERENCE_VALUES) or callable(value):
        return False
    try:
        zero = type(value)()
    except TypeError:
        return False
    return bool(value == zero)


@functools.lru_cache(maxsize=None)
def _field_checkers(cls: type) -> tuple[tuple[str, UnsetChecker], ...]:
    """Build (name, checker) pairs for every field of an aggregate type."""
    if issubclass(cls, BaseModel):
        return tuple(
            (name, unset_checker(info.annotation))
            for name, info in cls.model_fields.items()
        )
    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        hints = {}
    return tuple(
        (f.name, unset_checker(hints.get(f.name)))
        for f in dataclasses.fields(cls)
    )


def aggregate_is_unset(value: Any) -> bool:
    """Check whether every field of a model or dataclass is unset.

    Args:
        value: A pydantic model or dataclass instance.

    Returns:
        True if all fields hold their default state.
    """
    return all(
        check(getattr(value, name)) for name, check in _field_checkers(type(value))
    )


def is_unset(value: Any, annotation: Any = None) -> bool:
    """Check whether a value is in its type's unset state.

    Args:
        value: The value to inspect. It is never mutated.
        annotation: The declared type of the value, when known.

    Returns:
        True if the value is unset.

    Raises:
        UninspectableValueError: If the annotation cannot be inspected.
    """
    return unset_checker(annotation)(value)

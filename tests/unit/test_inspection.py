"""Unit tests for zero-value inspection."""

from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Any, Optional, TypeVar

import pytest
from pydantic import BaseModel

from hupconfig.errors import UninspectableValueError
from hupconfig.inspection import aggregate_is_unset, is_unset, runtime_is_unset, unset_checker


class Color(Enum):
    RED = "red"


class Priority(IntEnum):
    NONE = 0
    HIGH = 2


class Inner(BaseModel):
    host: str = ""
    port: int = 0


class Outer(BaseModel):
    inner: Inner = Inner()
    tags: list[str] | None = None


@dataclass
class Point:
    x: int = 0
    y: int = 0


class TestScalars:
    """Tests for scalar zero values."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("value", "annotation"),
        [
            (0, int),
            (0.0, float),
            (False, bool),
            ("", str),
            (b"", bytes),
            (Decimal("0"), Decimal),
        ],
    )
    def test_default_scalar_is_unset(self, value: object, annotation: type) -> None:
        """Test that a scalar equal to its type's default is unset."""
        assert is_unset(value, annotation) is True

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("value", "annotation"),
        [
            (8080, int),
            (0.5, float),
            (True, bool),
            ("info", str),
            (b"x", bytes),
        ],
    )
    def test_non_default_scalar_is_set(self, value: object, annotation: type) -> None:
        """Test that a non-default scalar is set."""
        assert is_unset(value, annotation) is False

    @pytest.mark.unit
    def test_plain_enum_member_is_set(self) -> None:
        """Test that plain enum members are never unset."""
        assert is_unset(Color.RED, Color) is False
        assert is_unset(None, Color) is True

    @pytest.mark.unit
    def test_scalar_enum_zero_member_is_unset(self) -> None:
        """Test that a scalar enum member equal to the scalar zero is unset."""
        assert is_unset(Priority.NONE, Priority) is True
        assert is_unset(Priority.HIGH, Priority) is False
        assert runtime_is_unset(Priority.NONE) is True
        assert runtime_is_unset(Priority.HIGH) is False


class TestReferences:
    """Tests for optional references and collections."""

    @pytest.mark.unit
    def test_optional_none_is_unset(self) -> None:
        """Test that an absent optional reference is unset."""
        assert is_unset(None, str | None) is True
        assert is_unset(None, Optional[int]) is True  # noqa: UP007

    @pytest.mark.unit
    def test_optional_empty_string_is_set(self) -> None:
        """Test that a present reference to an empty value counts as set."""
        assert is_unset("", str | None) is False
        assert is_unset(0, Optional[int]) is False  # noqa: UP007

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "annotation",
        [list[str], dict[str, int], set[int], frozenset[str]],
    )
    def test_empty_collection_is_set(self, annotation: Any) -> None:
        """Test that an empty but present collection is set."""
        empty = get_empty(annotation)
        assert is_unset(empty, annotation) is False
        assert is_unset(None, annotation) is True

    @pytest.mark.unit
    def test_callable_is_unset_only_when_none(self) -> None:
        """Test that callables follow reference semantics."""
        annotation = Callable[[], int]
        assert is_unset(None, annotation) is True
        assert is_unset(lambda: 0, annotation) is False


class TestTuples:
    """Tests for fixed-size tuples."""

    @pytest.mark.unit
    def test_all_zero_tuple_is_unset(self) -> None:
        """Test that a tuple of default elements is unset."""
        assert is_unset((0, ""), tuple[int, str]) is True

    @pytest.mark.unit
    def test_tuple_with_one_set_element_is_set(self) -> None:
        """Test that one set element makes the tuple set."""
        assert is_unset((0, "x"), tuple[int, str]) is False

    @pytest.mark.unit
    def test_variadic_tuple_is_a_sequence(self) -> None:
        """Test that variadic tuples are unset only when absent."""
        assert is_unset(None, tuple[int, ...]) is True
        assert is_unset((), tuple[int, ...]) is False
        assert is_unset((0, 0, 0), tuple[int, ...]) is False


class TestAggregates:
    """Tests for nested models and dataclasses."""

    @pytest.mark.unit
    def test_default_model_is_unset(self) -> None:
        """Test that a model with only default fields is unset."""
        assert is_unset(Inner(), Inner) is True
        assert aggregate_is_unset(Inner()) is True

    @pytest.mark.unit
    def test_model_with_one_field_set_is_set(self) -> None:
        """Test that one set field makes the model set."""
        assert is_unset(Inner(port=1), Inner) is False

    @pytest.mark.unit
    def test_nested_model_recursion(self) -> None:
        """Test recursion into nested models."""
        assert is_unset(Outer(), Outer) is True
        assert is_unset(Outer(inner=Inner(host="db")), Outer) is False
        assert is_unset(Outer(tags=[]), Outer) is False

    @pytest.mark.unit
    def test_dataclass(self) -> None:
        """Test that dataclasses are inspected field by field."""
        assert is_unset(Point(), Point) is True
        assert is_unset(Point(y=2), Point) is False


class TestRuntimeFallback:
    """Tests for inspection without an annotation."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, True),
            (0, True),
            ("", True),
            (5, False),
            ([], False),
            ({}, False),
            ((0, ""), True),
            (Inner(), True),
            (Point(x=1), False),
            (Color.RED, False),
        ],
    )
    def test_runtime_is_unset(self, value: object, expected: bool) -> None:
        """Test runtime-type inspection."""
        assert runtime_is_unset(value) is expected
        assert is_unset(value) is expected

    @pytest.mark.unit
    def test_any_annotation_uses_runtime_type(self) -> None:
        """Test that Any falls back to the runtime value."""
        assert is_unset(0, Any) is True
        assert is_unset("x", Any) is False


class TestInspectionErrors:
    """Tests for values that cannot be inspected."""

    @pytest.mark.unit
    def test_type_variable_is_uninspectable(self) -> None:
        """Test that type variables raise UninspectableValueError."""
        with pytest.raises(UninspectableValueError):
            unset_checker(TypeVar("T"))

    @pytest.mark.unit
    def test_forward_reference_is_uninspectable(self) -> None:
        """Test that unresolved forward references raise."""
        with pytest.raises(UninspectableValueError):
            unset_checker("Missing")

    @pytest.mark.unit
    def test_input_is_not_mutated(self) -> None:
        """Test that inspection leaves the value untouched."""
        value = Outer(inner=Inner(host="db"), tags=["a"])
        before = value.model_dump()
        is_unset(value, Outer)
        assert value.model_dump() == before


def get_empty(annotation: Any) -> object:
    """Build an empty instance of a collection annotation."""
    origin = getattr(annotation, "__origin__", annotation)
    return origin()

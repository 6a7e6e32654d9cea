"""Unit tests for error hints and error messages."""

import pytest

from hupconfig.error_hints import ERROR_HINTS, format_validation_error, get_error_hint
from hupconfig.errors import DecodeError, EnvDecodeError, MissingRequiredFieldsError


class TestGetErrorHint:
    """Tests for get_error_hint function."""

    @pytest.mark.unit
    def test_returns_hint_for_known_error_type(self) -> None:
        """Test that known error types return their hints."""
        hint = get_error_hint("int_parsing")
        assert hint == ERROR_HINTS["int_parsing"]
        assert "integer" in hint.lower()

    @pytest.mark.unit
    def test_returns_default_for_unknown_error_type(self) -> None:
        """Test that unknown error types return default hint."""
        hint = get_error_hint("some_unknown_error_type")
        assert "documentation" in hint.lower()

    @pytest.mark.unit
    def test_engine_failure_kinds_have_hints(self) -> None:
        """Test that the engine's own failure kinds have hints."""
        for error_type in ["yaml_parse_error", "yaml_not_mapping", "json_invalid"]:
            assert error_type in ERROR_HINTS, f"Missing hint for {error_type}"


class TestFormatValidationError:
    """Tests for format_validation_error function."""

    @pytest.mark.unit
    def test_formats_error_with_hint(self) -> None:
        """Test error formatting with hint included."""
        formatted = format_validation_error(
            location="timeout",
            message="Input should be a valid integer",
            error_type="int_parsing",
            include_hint=True,
        )
        assert "timeout" in formatted
        assert "Input should be a valid integer" in formatted
        assert "Hint:" in formatted

    @pytest.mark.unit
    def test_formats_error_without_hint(self) -> None:
        """Test error formatting without hint."""
        formatted = format_validation_error(
            location="timeout",
            message="Input should be a valid integer",
            error_type="int_parsing",
            include_hint=False,
        )
        assert "Hint:" not in formatted


class TestErrorMessages:
    """Tests for error classes built on the hints."""

    @pytest.mark.unit
    def test_decode_error_message(self) -> None:
        """Test that DecodeError names the file and includes hints."""
        error = DecodeError(
            "/etc/app.yaml",
            [{"loc": "timeout", "msg": "bad", "type": "int_parsing"}],
        )
        assert "/etc/app.yaml" in str(error)
        assert "timeout: bad" in str(error)
        assert "Hint:" in str(error)
        assert error.source_location == "/etc/app.yaml"

    @pytest.mark.unit
    def test_env_decode_error_message(self) -> None:
        """Test that EnvDecodeError names the variable."""
        error = EnvDecodeError("PORT", [{"loc": "PORT", "msg": "bad", "type": "int_parsing"}])
        assert "PORT" in str(error)
        assert error.variable == "PORT"

    @pytest.mark.unit
    def test_missing_required_fields_message(self) -> None:
        """Test that missing names are enumerated in order."""
        error = MissingRequiredFieldsError(["port", "host"])
        assert str(error) == "The following fields have missing values: port, host"
        assert error.missing == ["port", "host"]

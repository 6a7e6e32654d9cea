"""Error hints for configuration decoding errors.

Provides user-friendly hints with actionable remediation steps
for common decoding failures.
"""

from typing import Final


# Mapping of error types to user-friendly hints
ERROR_HINTS: Final[dict[str, str]] = {
    # Type errors
    "int_parsing": "This value must be an integer (whole number).",
    "int_type": "This value must be an integer (whole number).",
    "float_parsing": "This value must be a number.",
    "float_type": "This value must be a number.",
    "bool_parsing": "This value must be true or false.",
    "bool_type": "This value must be true or false.",
    "string_type": "This value must be a text string.",
    "list_type": "This value must be a list/array.",
    "dict_type": "This value must be an object/mapping.",
    "model_type": "This value must be an object/mapping.",
    "tuple_type": "This value must be a list with a fixed number of items.",
    "enum": "Check the allowed values in the documentation.",
    "literal_error": "Check the allowed values in the documentation.",
    # Environment-specific errors
    "json_invalid": "Structured environment values must be valid JSON.",
    # File errors
    "yaml_parse_error": "Invalid YAML syntax. Check for proper indentation and formatting.",
    "yaml_not_mapping": "The top level of the configuration file must be a mapping.",
}


def get_error_hint(error_type: str) -> str:
    """Get a user-friendly hint for a decoding error.

    Args:
        error_type: The Pydantic error type (e.g., 'int_parsing') or one of
            the engine's own failure kinds (e.g., 'yaml_parse_error').

    Returns:
        A user-friendly hint string.
    """
    return ERROR_HINTS.get(
        error_type, "Check the configuration documentation for valid values."
    )


def format_validation_error(
    location: str,
    message: str,
    error_type: str,
    *,
    include_hint: bool = True,
) -> str:
    """Format a decoding error with optional hint.

    Args:
        location: The error location (e.g., 'timeout' or 'PORT').
        message: The original error message.
        error_type: The error type.
        include_hint: Whether to include a hint.

    Returns:
        Formatted error string.
    """
    base = f"{location}: {message}"
    if include_hint:
        hint = get_error_hint(error_type)
        return f"{base}\n    Hint: {hint}"
    return base

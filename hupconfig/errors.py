"""Exceptions raised by the configuration engine.

Two families live here. Subclasses of ``HupConfigError`` describe bad
external input such as a malformed file or an unset required field, and
are raised out of ``ConfigLoader.load`` for the caller to handle.
Subclasses of ``TypeError`` describe misuse of the API by the owning
application; the engine never catches them.
"""

from hupconfig.error_hints import format_validation_error


class HupConfigError(Exception):
    """Base exception for recoverable configuration errors."""


class DecodeError(HupConfigError):
    """Raised when the configuration file cannot be decoded into the target.

    Fields assigned before the failing one keep their decoded values.
    """

    def __init__(
        self,
        source_location: str,
        errors: list[dict[str, str]],
    ) -> None:
        """Initialize the decode error.

        Args:
            source_location: Path of the file being decoded.
            errors: Error details with ``loc``, ``msg`` and ``type`` keys.
        """
        self.source_location = source_location
        self.errors = errors
        details = "\n".join(
            "  "
            + format_validation_error(err["loc"], err["msg"], err["type"])
            for err in errors
        )
        super().__init__(f"Failed to decode {source_location}:\n{details}")


class EnvDecodeError(HupConfigError):
    """Raised when an environment override cannot be decoded."""

    def __init__(self, variable: str, errors: list[dict[str, str]]) -> None:
        """Initialize the environment decode error.

        Args:
            variable: Environment variable that failed to decode.
            errors: Error details with ``loc``, ``msg`` and ``type`` keys.
        """
        self.variable = variable
        self.errors = errors
        details = "\n".join(
            "  "
            + format_validation_error(err["loc"], err["msg"], err["type"])
            for err in errors
        )
        super().__init__(f"Failed to decode environment variable {variable}:\n{details}")


class MissingRequiredFieldsError(HupConfigError):
    """Raised when required fields remain unset after a merge."""

    def __init__(self, missing: list[str]) -> None:
        """Initialize the error.

        Args:
            missing: Names of the unset required fields, in declaration order.
        """
        self.missing = list(missing)
        super().__init__(
            "The following fields have missing values: " + ", ".join(self.missing)
        )


class InvalidTargetError(TypeError):
    """Raised when a load or reload target is not a config handle."""


class NotAnAggregateError(TypeError):
    """Raised when a target does not resolve to a structured model."""


class UninspectableValueError(TypeError):
    """Raised when no default state can be determined for a type."""

    def __init__(self, annotation: object) -> None:
        self.annotation = annotation
        super().__init__(f"Cannot determine the unset state of {annotation!r}")

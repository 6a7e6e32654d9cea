"""Decoder protocols and shared field assignment."""

from collections.abc import Mapping
from typing import Protocol

from pydantic import ValidationError

from hupconfig.schema.base import ReloadableConfig


class FieldDecodeFailure(Exception):
    """Raised by decoders when a source value cannot be applied.

    The loader converts it into DecodeError or EnvDecodeError.
    """

    def __init__(self, key: str, errors: list[dict[str, str]]) -> None:
        """Initialize the failure.

        Args:
            key: File key or environment variable that failed.
            errors: Error details with ``loc``, ``msg`` and ``type`` keys.
        """
        self.key = key
        self.errors = errors
        super().__init__(f"Failed to decode {key}: {len(errors)} errors")


class FileDecoder(Protocol):
    """Protocol for file-format decoders.

    Allows replacing the YAML decoder with another tag-driven format.
    """

    def decode(self, data: bytes, target: ReloadableConfig) -> list[str]:
        """Decode raw file contents into ``target``.

        Args:
            data: Raw file contents.
            target: Model to assign fields on.

        Returns:
            Names of the fields that were assigned.

        Raises:
            FieldDecodeFailure: If the contents cannot be decoded.
        """
        ...


class EnvDecoder(Protocol):
    """Protocol for environment decoders."""

    def decode(self, environ: Mapping[str, str], target: ReloadableConfig) -> list[str]:
        """Decode environment overrides into ``target``.

        Args:
            environ: Process environment.
            target: Model to assign fields on.

        Returns:
            Names of the fields that were assigned.

        Raises:
            FieldDecodeFailure: If a variable cannot be decoded.
        """
        ...


def validation_error_details(error: ValidationError, key: str) -> list[dict[str, str]]:
    """Convert a pydantic ValidationError into error detail dicts.

    The field name at the head of each location is replaced by ``key`` so
    messages refer to what the user wrote.
    """
    details = []
    for err in error.errors():
        loc = [key, *(str(part) for part in err["loc"][1:])]
        details.append(
            {
                "loc": ".".join(loc),
                "msg": err["msg"],
                "type": err["type"],
            }
        )
    return details


def assign_field(target: ReloadableConfig, name: str, value: object, key: str) -> None:
    """Assign one field with validation.

    Args:
        target: Model to assign on.
        name: Field name.
        value: Raw value from the source.
        key: File key or environment variable, used in error locations.

    Raises:
        FieldDecodeFailure: If pydantic rejects the value.
    """
    try:
        setattr(target, name, value)
    except ValidationError as e:
        raise FieldDecodeFailure(key, validation_error_details(e, key)) from e

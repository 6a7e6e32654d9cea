"""Field metadata surface for configuration models.

Each field may declare a YAML key, an environment variable and a required
marker via :func:`setting`. The metadata is collected into a table of
:class:`FieldSpec` entries when the model class is defined.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import Field
from pydantic_core import PydanticUndefined

from hupconfig.constants import META_ENV_KEY, META_FILE_KEY, META_REQUIRED
from hupconfig.inspection import UnsetChecker, unset_checker


if TYPE_CHECKING:
    from collections.abc import Callable

    from pydantic import BaseModel


def setting(
    default: Any = PydanticUndefined,
    *,
    file_key: str | None = None,
    env: str | None = None,
    required: bool = False,
    default_factory: "Callable[[], Any] | None" = None,
    description: str | None = None,
) -> Any:
    """Declare a configuration field.

    Args:
        default: Default value of the field.
        file_key: Key of the field in the configuration file.
        env: Name of the environment variable overriding the field.
        required: Whether the field must be set after loading.
        default_factory: Factory for mutable defaults.
        description: Human-readable description.

    Returns:
        A pydantic ``FieldInfo`` carrying the metadata.
    """
    extra: dict[str, Any] = {
        META_FILE_KEY: file_key,
        META_ENV_KEY: env,
        META_REQUIRED: required,
    }
    if default_factory is not None:
        return Field(
            default_factory=default_factory,
            description=description,
            json_schema_extra=extra,
        )
    return Field(default, description=description, json_schema_extra=extra)


@dataclass(frozen=True)
class FieldSpec:
    """Descriptor of a single configuration field.

    Attributes:
        name: Attribute name on the model.
        annotation: Declared type of the field.
        file_key: Key in the configuration file, if any.
        env_key: Environment variable name, if any.
        required: Whether the field must be set after loading.
        is_unset: Predicate deciding whether a value is in its default state.
    """

    name: str
    annotation: Any
    file_key: str | None
    env_key: str | None
    required: bool
    is_unset: UnsetChecker


def field_metadata(model_cls: "type[BaseModel]", name: str) -> dict[str, Any]:
    """Get the ``setting`` metadata recorded on a pydantic field."""
    extra = model_cls.model_fields[name].json_schema_extra
    if isinstance(extra, dict):
        return extra
    return {}


def build_field_specs(model_cls: "type[BaseModel]") -> tuple[FieldSpec, ...]:
    """Build the field descriptor table of a model, in declaration order.

    Args:
        model_cls: The pydantic model class.

    Returns:
        One FieldSpec per field.
    """
    specs = []
    for name, info in model_cls.model_fields.items():
        meta = field_metadata(model_cls, name)
        specs.append(
            FieldSpec(
                name=name,
                annotation=info.annotation,
                file_key=meta.get(META_FILE_KEY),
                env_key=meta.get(META_ENV_KEY),
                required=bool(meta.get(META_REQUIRED, False)),
                is_unset=unset_checker(info.annotation),
            )
        )
    return tuple(specs)

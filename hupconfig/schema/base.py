"""Base class for reloadable configuration models."""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict

from hupconfig.schema.fields import FieldSpec, build_field_specs, setting


class ReloadableConfig(BaseModel):
    """Mutable configuration populated from a file and the environment.

    Subclasses declare their fields with :func:`setting`. Assignments are
    validated, so decoders can set fields one at a time.

    Attributes:
        debug: Debug verbosity, one of error, warning, info, verbose.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    __field_specs__: ClassVar[tuple[FieldSpec, ...]] = ()

    debug: str = setting("", file_key="debug", env="DEBUG")

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        """Build the field descriptor table once the subclass is complete."""
        super().__pydantic_init_subclass__(**kwargs)
        cls.__field_specs__ = build_field_specs(cls)

    @classmethod
    def field_specs(cls) -> tuple[FieldSpec, ...]:
        """Get the field descriptor table in declaration order."""
        return cls.__field_specs__


ReloadableConfig.__field_specs__ = build_field_specs(ReloadableConfig)

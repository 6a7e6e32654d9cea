"""Schema surface for configuration models."""

from hupconfig.schema.base import ReloadableConfig
from hupconfig.schema.fields import FieldSpec, build_field_specs, setting
from hupconfig.schema.levels import DebugLevel, level_at_least


__all__ = [
    "DebugLevel",
    "FieldSpec",
    "ReloadableConfig",
    "build_field_specs",
    "level_at_least",
    "setting",
]

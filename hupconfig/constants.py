"""Constants for the configuration engine."""

from typing import Final


# Log component names
COMPONENT_CONFIG: Final = "config"
COMPONENT_RELOAD: Final = "reload"

# Metadata keys stored in pydantic json_schema_extra / dataclass field metadata
META_FILE_KEY: Final = "file_key"
META_ENV_KEY: Final = "env"
META_REQUIRED: Final = "required"

# Default separator for list-like environment values
DEFAULT_ENV_LIST_SEPARATOR: Final = ","

# Process exit status used when a signal-triggered reload fails fatally
EXIT_RELOAD_FAILED: Final = 78

# Engine settings environment prefix
SETTINGS_ENV_PREFIX: Final = "HUPCONFIG_"

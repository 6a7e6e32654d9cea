"""Engine settings powered by Pydantic BaseSettings."""

import logging
from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hupconfig.constants import DEFAULT_ENV_LIST_SEPARATOR, SETTINGS_ENV_PREFIX


class ReloadFailurePolicy(str, Enum):
    """What a reload watcher does when a signal-triggered load fails.

    - FATAL: terminate the process with a descriptive message
    - KEEP_PREVIOUS: roll back to the previous config and keep running
    """

    FATAL = "fatal"
    KEEP_PREVIOUS = "keep_previous"


class EngineSettings(BaseSettings):
    """Settings of the configuration engine itself."""

    model_config = SettingsConfigDict(
        env_prefix=SETTINGS_ENV_PREFIX, case_sensitive=False
    )

    log_level: str = Field(default="INFO")
    json_logs: bool = Field(default=True)
    reload_failure_policy: ReloadFailurePolicy = Field(
        default=ReloadFailurePolicy.FATAL
    )
    env_list_separator: str = Field(default=DEFAULT_ENV_LIST_SEPARATOR, min_length=1)

    def logging_level(self) -> int:
        """Resolve ``log_level`` to a standard library logging level.

        Raises:
            ValueError: If the level name is unknown.
        """
        numeric_level = getattr(logging, self.log_level.upper(), None)
        if not isinstance(numeric_level, int):
            raise ValueError(f"Invalid log level: {self.log_level}")
        return numeric_level


def get_settings() -> EngineSettings:
    """Get a settings instance."""
    return EngineSettings()

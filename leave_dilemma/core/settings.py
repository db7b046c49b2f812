"""Process-level settings read from the environment.

Run parameters live in ``SimulationConfig``; these settings only
cover how the process behaves around a run.

Environment variable support:
    LEAVE_DILEMMA_LOG_LEVEL=DEBUG
    LEAVE_DILEMMA_LOG_JSON=true
    LEAVE_DILEMMA_DEFAULT_SEED=42
    LEAVE_DILEMMA_DEFAULT_STEPS=1000
"""

from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LeaveDilemmaSettings(BaseSettings):
    """Environment-driven settings.

    Example:
        settings = LeaveDilemmaSettings(log_level="DEBUG")
        print(settings.default_steps)
    """

    model_config = SettingsConfigDict(
        env_prefix="LEAVE_DILEMMA_",
        extra="ignore",
        validate_default=True,
    )

    log_level: str = Field(
        default="WARNING",
        description="Application log level",
    )
    log_json: bool | None = Field(
        default=None,
        description="Emit JSON logs; unset chooses by TTY",
    )
    default_seed: int | None = Field(
        default=None,
        description="Seed used when a run does not specify one",
    )
    default_steps: int = Field(
        default=1000,
        ge=1,
        description="Number of steps for a batch run",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        upper = v.upper()
        if upper not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of {', '.join(VALID_LOG_LEVELS)}"
            )
        return upper


def get_settings(**overrides: Any) -> LeaveDilemmaSettings:
    """Build settings from the environment plus explicit overrides."""
    return LeaveDilemmaSettings(**overrides)


@lru_cache
def get_cached_settings() -> LeaveDilemmaSettings:
    """Get cached settings instance.

    The cache can be cleared with ``get_cached_settings.cache_clear()``.
    """
    return get_settings()

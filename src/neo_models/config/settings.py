"""
Environment settings for neo-models.

Settings are read from environment variables prefixed with NEO_MODELS_
(or a .env file) and cached for the lifetime of the process.
"""
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import Defaults, NoAccessBehavior, parse_enum


class ModelSettings(BaseSettings):
    """Library-wide settings for the lifecycle engine."""

    model_config = SettingsConfigDict(
        env_prefix="NEO_MODELS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Severity recorded for authorization denials
    no_access_behavior: NoAccessBehavior = Field(
        default=NoAccessBehavior.SHOW_ERROR,
        description="Severity of broken rules recorded on denied actions",
    )

    # Data source used when a definition names none
    default_data_source: str = Field(
        default=Defaults.DATA_SOURCE,
        description="Data source passed to the connection manager",
    )

    # Raise on unknown names in transfer objects instead of ignoring them
    strict_transfer: bool = Field(
        default=False,
        description="Reject unknown property names in from_cto/from_dto",
    )

    @field_validator("no_access_behavior", mode="before")
    @classmethod
    def _parse_no_access_behavior(cls, value):
        return parse_enum(NoAccessBehavior, value)

    @field_validator("default_data_source")
    @classmethod
    def _check_data_source(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("default_data_source must be a non-empty string")
        return value.strip()


@lru_cache(maxsize=1)
def get_settings() -> ModelSettings:
    """Get settings from environment variables."""
    return ModelSettings()

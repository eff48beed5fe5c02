"""Logger configuration.

``LoggerConfig`` is the validated object a ``ContextLogger`` is built from.
``Settings`` is an opt-in way to produce one from environment variables; the
logger itself never reads the environment.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .formatters import Formatter, formatter_from_name
from .levels import Level, level_from_name


class LoggerConfig(BaseModel):
    """Formatter, minimum level and the context keys copied into every entry."""

    model_config = ConfigDict(frozen=True)

    formatter: Formatter = Formatter.JSON
    level: Level = Level.INFO
    context_keys: tuple[Any, ...] = ()

    @field_validator("formatter", mode="before")
    @classmethod
    def resolve_formatter(cls, value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, Formatter):
            return formatter_from_name(value)
        return value

    @field_validator("level", mode="before")
    @classmethod
    def resolve_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return level_from_name(value)
        return value


class Settings(BaseSettings):
    """Logger settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    log_formatter: str = Field(default="json", alias="LOG_FORMATTER")
    log_level: str = Field(default="info", alias="LOG_LEVEL")
    log_context_keys: str = Field(default="", alias="LOG_CONTEXT_KEYS")

    @property
    def context_keys(self) -> tuple[str, ...]:
        """Comma separated ``LOG_CONTEXT_KEYS`` as a tuple, blanks dropped."""
        return tuple(key.strip() for key in self.log_context_keys.split(",") if key.strip())

    def to_config(self) -> LoggerConfig:
        return LoggerConfig(
            formatter=self.log_formatter,
            level=self.log_level,
            context_keys=self.context_keys,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()

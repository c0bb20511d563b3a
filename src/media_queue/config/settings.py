"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. All nested settings are frozen after
initialization.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.shared.constants import (
    DatabaseURLSchemes,
    HistoryConstants,
    LogLevels,
    QueueConstants,
)
from ..domain.shared.messages import ErrorMessages
from ..domain.shared.types import (
    BusyTimeoutMs,
    ConnectionTimeoutS,
    DoubleClickWindowMs,
    NonEmptyStr,
    RecentLimitInt,
    RestartThresholdSeconds,
    ResumePositionSeconds,
)


class DatabaseSettings(BaseModel):
    """Database configuration for the durable key-value store."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(
        default="sqlite:///data/queue.db",
        validation_alias=AliasChoices("url", "database_url", "db_url"),
    )
    busy_timeout_ms: BusyTimeoutMs = Field(
        default=5000,
        validation_alias=AliasChoices("busy_timeout_ms", "busy_timeout"),
    )
    connection_timeout_s: ConnectionTimeoutS = Field(
        default=10,
        validation_alias=AliasChoices("connection_timeout_s", "connection_timeout"),
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate database URL format."""
        if not v.startswith(DatabaseURLSchemes.SQLITE):
            raise ValueError(ErrorMessages.INVALID_DATABASE_URL)
        return v


class QueueSettings(BaseModel):
    """Queue sequencing policy and persisted-state layout."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    schema_version: NonEmptyStr = QueueConstants.SCHEMA_VERSION
    state_key: NonEmptyStr = QueueConstants.STATE_KEY
    version_key: NonEmptyStr = QueueConstants.VERSION_KEY
    restart_threshold_seconds: RestartThresholdSeconds = Field(
        default=QueueConstants.RESTART_THRESHOLD_SECONDS,
        validation_alias=AliasChoices("restart_threshold_seconds", "restart_threshold"),
    )
    double_click_window_ms: DoubleClickWindowMs = Field(
        default=QueueConstants.DOUBLE_CLICK_WINDOW_MS,
        validation_alias=AliasChoices("double_click_window_ms", "double_click_window"),
    )


class HistorySettings(BaseModel):
    """Recently played list and resume point."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    schema_version: NonEmptyStr = HistoryConstants.SCHEMA_VERSION
    recent_key: NonEmptyStr = HistoryConstants.RECENT_KEY
    recent_version_key: NonEmptyStr = HistoryConstants.RECENT_VERSION_KEY
    last_played_key: NonEmptyStr = HistoryConstants.LAST_PLAYED_KEY
    recent_limit: RecentLimitInt = Field(
        default=HistoryConstants.RECENT_LIMIT,
        validation_alias=AliasChoices("recent_limit", "max_recent"),
    )
    resume_min_position_seconds: ResumePositionSeconds = Field(
        default=HistoryConstants.RESUME_MIN_POSITION_SECONDS,
        validation_alias=AliasChoices("resume_min_position_seconds", "resume_after"),
    )


class Settings(BaseSettings):
    """Application settings container.

    Automatically loads configuration from environment variables.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - DATABASE__URL, DATABASE__BUSY_TIMEOUT_MS (nested with delimiter)
    - QUEUE__RESTART_THRESHOLD_SECONDS, QUEUE__DOUBLE_CLICK_WINDOW_MS, etc.
    - HISTORY__RECENT_LIMIT, HISTORY__RESUME_MIN_POSITION_SECONDS
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    queue: QueueSettings = Field(default_factory=QueueSettings)
    history: HistorySettings = Field(default_factory=HistorySettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        v_upper = v.upper()
        if v_upper not in LogLevels.ALL:
            raise ValueError(
                ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=sorted(LogLevels.ALL))
            )
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are automatically loaded from:
    1. .env file (if present)
    2. Environment variables
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()

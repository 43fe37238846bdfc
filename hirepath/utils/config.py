"""
Configuration management for HirePath.

Each concern reads its own env prefix (DB_, MATCH_, WORKFLOW_, LOG_, APP_);
APP_ values may also come from a .env file.
"""

from pathlib import Path
from typing import Literal
from urllib.parse import quote_plus

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Base paths
ROOT_DIR = Path(__file__).parent.parent.parent


class DatabaseSettings(BaseSettings):
    """MongoDB database configuration."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    host: str = "localhost"
    port: int = 27017
    name: str = "hirepath"
    username: str | None = None
    password: str | None = None

    # Every storage call is bounded by this timeout
    timeout_ms: int = 5000

    @property
    def connection_string(self) -> str:
        """MongoDB URI; credentials are URL-encoded."""
        host = self.host.strip()
        if self.username and self.password:
            return f"mongodb://{quote_plus(self.username)}:{quote_plus(self.password)}@{host}:{self.port}"
        return f"mongodb://{host}:{self.port}"


class MatchingSettings(BaseSettings):
    """Recommendation and scoring configuration."""

    model_config = SettingsConfigDict(env_prefix="MATCH_")

    # Recommendation pages are never larger than 20
    default_limit: int = Field(default=10, ge=1, le=20)
    max_limit: int = Field(default=20, ge=1, le=20)

    # 1 scores jobs inline; more fans scoring out to a thread pool
    max_workers: int = 1

    # TTL for the caller-owned recommendation cache
    cache_ttl_seconds: float = Field(default=60, ge=0)

    @field_validator("max_workers")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_workers must be at least 1")
        return v

    @model_validator(mode="after")
    def default_within_max(self) -> "MatchingSettings":
        if self.default_limit > self.max_limit:
            raise ValueError("default_limit cannot exceed max_limit")
        return self


class WorkflowSettings(BaseSettings):
    """Application lifecycle configuration."""

    model_config = SettingsConfigDict(env_prefix="WORKFLOW_")

    # Bounded wait for the per-(job, candidate) lock
    lock_timeout_seconds: float = Field(default=5.0, gt=0)
    # Optimistic-version conflicts retried before giving up as StorageUnavailable
    max_conflict_retries: int = Field(default=3, ge=0)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    file_path: Path = ROOT_DIR / "logs" / "hirepath.log"
    rotation: str = "10 MB"
    retention: str = "30 days"
    console_output: bool = True
    file_output: bool = True


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    name: str = "HirePath"
    version: str = "0.1.0"
    description: str = "Job matching and application lifecycle core"
    debug: bool = False

    # Environment
    environment: Literal["development", "production", "testing"] = "development"

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)
    workflow: WorkflowSettings = Field(default_factory=WorkflowSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Global settings instance (singleton pattern)
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reload_settings() -> AppSettings:
    """Force reload settings from environment."""
    global _settings
    _settings = AppSettings()
    return _settings

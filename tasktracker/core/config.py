"""Configuration management for the task tracker."""

import logging
import os

from pydantic import BaseModel, Field


class AppConfig(BaseModel):
    """Application configuration."""
    log_level: str = "INFO"
    default_hours_per_day: int = Field(default=8, ge=1, le=24)
    default_work_days_per_week: int = Field(default=5, ge=1, le=7)


def load_app_config() -> AppConfig:
    """Load application configuration from environment variables."""
    return AppConfig(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        default_hours_per_day=int(os.getenv("DEFAULT_HOURS_PER_DAY", "8")),
        default_work_days_per_week=int(os.getenv("DEFAULT_WORK_DAYS_PER_WEEK", "5")),
    )


def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


class DatabaseSettings(BaseModel):
    """PostgreSQL connection settings."""
    host: str = "localhost"
    port: int = 5432
    database: str = "tasktracker"
    user: str = "tasktracker"
    password: str = ""
    min_size: int = Field(default=1, ge=1)
    max_size: int = Field(default=10, ge=1)


def load_database_settings() -> DatabaseSettings:
    """Load database settings from DB_* environment variables."""
    return DatabaseSettings(
        host=os.getenv("DB_HOST", "localhost"),
        port=int(os.getenv("DB_PORT", "5432")),
        database=os.getenv("DB_NAME", "tasktracker"),
        user=os.getenv("DB_USER", "tasktracker"),
        password=os.getenv("DB_PASSWORD", ""),
        min_size=int(os.getenv("DB_POOL_MIN", "1")),
        max_size=int(os.getenv("DB_POOL_MAX", "10")),
    )

"""
Configuration Management for Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Limits, storage locations and simulated export delays are read from
EXPENSE_TRACKER_* variables (or a .env file) and validated at startup.
"""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Storage
    storage_backend: str = Field(
        default="file",
        pattern="^(file|memory)$",
        description="Where collections are persisted"
    )
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding one JSON blob per collection"
    )
    export_dir: Path = Field(
        default=Path("exports"),
        description="Directory that downloaded export artifacts are written to"
    )

    # Expense validation limits
    max_amount: Decimal = Field(
        default=Decimal("999999.99"),
        gt=0,
        description="Largest amount a single expense may carry"
    )
    max_description_length: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Maximum description length in characters"
    )

    # Collection caps
    history_limit: int = Field(
        default=50,
        ge=1,
        description="Number of export history entries kept (newest first)"
    )
    share_limit: int = Field(
        default=10,
        ge=1,
        description="Number of share links kept (newest first)"
    )
    share_expiry_days: int = Field(
        default=7,
        ge=1,
        description="Lifetime of a share link in days"
    )
    share_base_url: str = Field(
        default="https://expenses.app/shared",
        description="Prefix of generated share URLs"
    )

    # Simulated latency (seconds)
    export_delay_seconds: float = Field(
        default=1.2,
        ge=0.0,
        le=30.0,
        description="Simulated processing time of a template export"
    )
    quick_export_delay_seconds: float = Field(
        default=0.6,
        ge=0.0,
        le=30.0,
        description="Simulated processing time of an ad-hoc export"
    )

    # Presentation
    daily_window_days: int = Field(
        default=30,
        ge=0,
        le=366,
        description="Days before today covered by the daily chart series"
    )
    currency_symbol: str = Field(
        default="$",
        max_length=3,
        description="Symbol used when formatting currency"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum level of emitted log events"
    )
    json_logs: bool = Field(
        default=True,
        description="Render logs as JSON (False = console renderer)"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {v}")
        return level

    @field_validator('share_base_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results

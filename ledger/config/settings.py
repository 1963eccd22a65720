"""
Configuration Management for the Personal Finance Ledger

Uses pydantic-settings for type-safe configuration from environment variables.
Every setting is optional; the defaults reproduce a plain run with a
``transactions.txt`` file in the working directory.

DESIGN DECISION: All configuration is centralized here.
All variables share the ``LEDGER_`` prefix and may also come from a ``.env``
file next to the working directory.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ledger.models.transaction import check_record_text


class StorageSettings(BaseSettings):
    """Ledger file configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    file_path: Path = Field(
        default=Path("transactions.txt"),
        description="Path of the ledger file"
    )
    file_encoding: str = Field(
        default="utf-8",
        description="Text encoding used to read and write the ledger file"
    )
    atomic_writes: bool = Field(
        default=False,
        description="Write to a temporary sibling file and rename it over the ledger"
    )


class LedgerSettings(BaseSettings):
    """Ledger behaviour configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    default_currency: str = Field(
        default="UAH",
        max_length=16,
        description="Currency label applied to new transactions at startup"
    )
    next_id_policy: Literal["last", "max"] = Field(
        default="last",
        description=(
            "How the next ID is derived after loading: 'last' uses the last "
            "stored record, 'max' the highest stored ID"
        )
    )

    @field_validator('default_currency')
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        """Currency labels are kept uppercase and may not break the record format."""
        return check_record_text(v.strip().upper(), "Currency label")


class AppSettings(BaseSettings):
    """
    Console application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    debug_mode: bool = Field(
        default=False,
        description="Enable debug logging"
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level for structured log output on stderr"
    )
    max_input_attempts: Optional[int] = Field(
        default=None,
        ge=1,
        description="Maximum prompts per field before an action is cancelled (unset = no limit)"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def effective_log_level(self) -> str:
        """Debug mode wins over the configured level."""
        return "DEBUG" if self.debug_mode else self.log_level


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
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()

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

    Returns a dict of {setting_name: is_valid}, with a
    ``<name>_error`` entry for every group that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "ledger", "app"):
        try:
            _ = getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results

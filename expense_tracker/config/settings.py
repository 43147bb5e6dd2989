"""
Configuration Management for Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Nothing else in the package reads the environment directly.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageBackend(str, Enum):
    """Where the serialized ledger lives."""
    JSON_FILE = "json_file"
    MEMORY = "memory"  # Session only, nothing survives a restart


class StorageSettings(BaseSettings):
    """Durable slot configuration."""
    
    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    backend: StorageBackend = Field(
        default=StorageBackend.JSON_FILE,
        description="Storage backend for the ledger slot"
    )
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding one JSON file per slot key"
    )
    slot_key: str = Field(
        default="expenses",
        min_length=1,
        max_length=64,
        description="Name of the slot holding the serialized ledger"
    )
    
    @field_validator('slot_key')
    @classmethod
    def validate_slot_key(cls, v: str) -> str:
        """Slot keys become file names, so keep them to a safe alphabet."""
        if not all(ch.isalnum() or ch in "-_" for ch in v):
            raise ValueError(
                f"Invalid slot key '{v}'. Use letters, digits, '-' or '_' only."
            )
        return v
    
    @field_validator('data_dir')
    @classmethod
    def expand_data_dir(cls, v: Path) -> Path:
        return v.expanduser()


class AppSettings(BaseSettings):
    """
    Main application settings.
    
    Loads configuration from environment variables and .env file.
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level for structured logs"
    )
    
    # Money display
    currency_symbol: str = Field(
        default="R$",
        max_length=5,
        description="Currency symbol shown before amounts"
    )
    decimal_separator: str = Field(
        default=",",
        min_length=1,
        max_length=1,
        description="Decimal separator used when displaying amounts"
    )
    thousands_separator: str = Field(
        default=".",
        max_length=1,
        description="Thousands separator used when displaying amounts"
    )
    
    # Validation thresholds
    max_expense_amount: float = Field(
        default=1000000.0,
        gt=0,
        description="Amounts above this are accepted but flagged for a second look"
    )
    future_date_tolerance_days: int = Field(
        default=7,
        ge=0,
        description="How many days in the future an expense date can be before it is flagged"
    )
    
    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level
    
    @model_validator(mode='after')
    def validate_separators(self) -> 'AppSettings':
        """Amounts would be unreadable if both separators matched."""
        if self.decimal_separator == self.thousands_separator:
            raise ValueError("Decimal and thousands separators must differ")
        return self


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
    
    # Sub-settings are loaded lazily to allow partial configuration
    
    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()
    
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
    
    Returns a dict of {setting_name: is_valid}, plus a
    "<setting_name>_error" entry for each group that failed.
    Useful for startup checks.
    """
    results = {}
    
    settings = get_settings()
    
    try:
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)
    
    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)
    
    return results

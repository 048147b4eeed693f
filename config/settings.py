"""Unified application settings - single source of truth for all configuration"""

import tempfile
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STORAGE_DIR_NAME = "FileStorage"

# ============================================================================
# APP SETTINGS
# ============================================================================


class AppSettings(BaseSettings):
    """Application-level settings"""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )

    name: str = Field(default="local-file-store", description="Application name")
    version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")


# ============================================================================
# STORAGE SETTINGS
# ============================================================================


class StorageSettings(BaseSettings):
    """File storage settings"""

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        case_sensitive=False,
    )

    # Storage backend type
    type: Literal["LOCAL", "S3"] = Field(default="LOCAL", description="Storage backend type")

    # LOCAL storage settings
    base_path: str | None = Field(
        default=None,
        description="Local storage root path (None = <system temp dir>/FileStorage)",
    )
    max_size_gb: int | None = Field(default=None, ge=1, description="Max local storage size (GB)")
    chunk_size: int = Field(default=64 * 1024, ge=1024, description="Read/write chunk size in bytes")

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v):
        """Accept lowercase backend names"""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("base_path")
    @classmethod
    def blank_base_path_is_unset(cls, v: str | None) -> str | None:
        """Treat an empty STORAGE_BASE_PATH as unset"""
        if v is not None and not v.strip():
            return None
        return v

    @property
    def resolved_base_path(self) -> Path:
        """Configured base path, or the temp-dir fallback"""
        if self.base_path:
            return Path(self.base_path).expanduser()
        return Path(tempfile.gettempdir()) / DEFAULT_STORAGE_DIR_NAME


# ============================================================================
# MAIN SETTINGS
# ============================================================================


class Settings(BaseSettings):
    """Main application settings - single source of truth"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=AppSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get settings singleton instance"""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)"""
    global _settings_instance
    _settings_instance = None

"""Application configuration module.

This module contains settings for the URL shortener application,
loaded from environment variables with appropriate defaults.

The ``ENVIRONMENT`` variable selects the configuration profile: values are
read from ``.env`` first and then from ``.env.<environment>``, so a profile
file only needs to hold the values that differ.
"""

from __future__ import annotations

import os
import string
from enum import Enum
from pathlib import Path
from typing import Any, List, Union
import logging

from pydantic import field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

ALLOWED_CODE_LENGTHS = (6, 8)


class EnvironmentType(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


def profile_env_files() -> tuple:
    """Return the env files for the active profile, lowest priority first."""
    environment = os.getenv("ENVIRONMENT", EnvironmentType.DEVELOPMENT.value).lower()
    return (".env", f".env.{environment}")


class Settings(BaseSettings):
    """Application settings loaded from environment variables with defaults.

    Settings are loaded from environment variables, with fallback to
    values in the profile's env files if present, and finally to the
    default values specified here.
    """
    model_config = SettingsConfigDict(
        env_file=profile_env_files(),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment setting
    ENVIRONMENT: EnvironmentType = EnvironmentType.DEVELOPMENT

    # App Information
    APP_NAME: str = "Shortlink"
    APP_VERSION: str = "1.0.0"
    APP_DESCRIPTION: str = "API for shortening URLs and viewing history"
    DEBUG: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5004
    BASE_URL: str = "http://localhost"  # Scheme and host of generated short links

    # CORS settings
    CORS_ORIGINS: Union[List[str], str] = ["*"]

    # Short code generation
    SHORT_CODE_LENGTH: int = 6
    SHORT_CODE_ALPHABET: str = string.ascii_letters + string.digits + "_-"

    # Persistence
    DATABASE_URL: str = "sqlite+aiosqlite:///./shortlink.db"
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 300
    DB_ECHO: bool = False

    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_FILENAME: str = "app.log"
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "7 days"
    LOG_FORMAT: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {name}:{line} | {message}"
    LOG_JSON: bool = True
    LOG_TO_FILE: bool = True
    REQUEST_LOGGING_ENABLED: bool = True

    # Validators
    @field_validator("SHORT_CODE_LENGTH")
    def validate_code_length(cls, v: int) -> int:
        if v not in ALLOWED_CODE_LENGTHS:
            raise ValueError(
                f"SHORT_CODE_LENGTH must be one of {ALLOWED_CODE_LENGTHS}, got {v}"
            )
        return v

    @field_validator("SHORT_CODE_ALPHABET")
    def validate_alphabet(cls, v: str) -> str:
        if len(set(v)) < 2:
            raise ValueError("SHORT_CODE_ALPHABET needs at least two distinct characters")
        if "/" in v or "?" in v or "#" in v:
            raise ValueError("SHORT_CODE_ALPHABET must not contain URL delimiters")
        return v

    @field_validator("BASE_URL")
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("CORS_ORIGINS", mode="before")
    def validate_list_or_string(cls, v: Any) -> List[str]:
        """Convert comma-separated string to list if needed."""
        if isinstance(v, str):
            if not v.strip():
                return []
            if v == "*":
                return ["*"]
            return [item.strip() for item in v.split(",")]
        return v

    # Computed fields
    @computed_field
    @property
    def SHORT_URL_BASE(self) -> str:
        """Prefix of every generated short URL: base URL joined with the port."""
        return f"{self.BASE_URL}:{self.PORT}"

    @property
    def docs_enabled(self) -> bool:
        return self.DEBUG or self.ENVIRONMENT != EnvironmentType.PRODUCTION


# Create a singleton instance of the settings
settings = Settings()

#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Environment driven defaults for renderer construction
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from .constants import DEFAULT_WIDTH, DEFAULT_BACKEND, SUPPORTED_BACKENDS, LOG_LEVEL, LOG_LEVELS


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class RenderSettings(BaseSettings):
    """Renderer settings"""

    # ========== Layout ==========
    default_width: int = Field(default=DEFAULT_WIDTH, ge=1)  # character cells
    default_backend: str = DEFAULT_BACKEND  # text | raw

    # ========== Logging ==========
    log_level: str = LOG_LEVEL  # applied to the "celltext" logger

    class Config:
        env_prefix = "CELLTEXT_"
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Allow unrelated keys in .env

    @field_validator("default_backend")
    @classmethod
    def _known_backend(cls, value: str) -> str:
        value = value.lower()
        if value not in SUPPORTED_BACKENDS:
            raise ValueError(f"Unsupported backend: {value} (expected one of {SUPPORTED_BACKENDS})")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"Unsupported log level: {value} (expected one of {LOG_LEVELS})")
        return value


@lru_cache()
def get_settings() -> RenderSettings:
    """Return the process-wide settings instance"""
    return RenderSettings()

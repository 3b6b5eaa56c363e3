"""Application configuration using Pydantic Settings.

This module centralizes all configuration values that may vary between environments.
Values can be overridden via environment variables or .env file.
"""
import os
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # ===== Store Backend =====
    CITY_STORE_BACKEND: str = os.getenv("CITY_STORE_BACKEND", "firestore")  # firestore | memory
    CITIES_COLLECTION: str = os.getenv("CITIES_COLLECTION", "cities")

    # ===== Firestore =====
    FIRESTORE_PROJECT_ID: Optional[str] = os.getenv("FIRESTORE_PROJECT_ID") or None
    FIRESTORE_DATABASE: str = os.getenv("FIRESTORE_DATABASE", "(default)")
    GOOGLE_APPLICATION_CREDENTIALS: Optional[str] = os.getenv("GOOGLE_APPLICATION_CREDENTIALS") or None
    FIRESTORE_WATCH_POLL_SECONDS: float = float(os.getenv("FIRESTORE_WATCH_POLL_SECONDS", "1.0"))

    # ===== Swipe Gesture =====
    SWIPE_THRESHOLD_PX: int = int(os.getenv("SWIPE_THRESHOLD_PX", "200"))
    MAX_VERTICAL_SLOP: float = float(os.getenv("MAX_VERTICAL_SLOP", "100.0"))

    # ===== Logging & Debug =====
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    class Config:
        env_file = ".env"
        case_sensitive = True
        # Allow extra fields from .env that aren't defined here
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure singleton pattern - settings are loaded once.
    """
    return Settings()


# Global settings instance for easy import
settings = get_settings()

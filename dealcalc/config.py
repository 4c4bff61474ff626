"""
Application configuration using Pydantic Settings.
"""

import os
from functools import lru_cache
from pydantic_settings import BaseSettings


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./deals.db"

    # App settings
    app_name: str = "Deal Calculator"
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    # Projections
    default_projection_months: int = 360
    max_projection_months: int = 600

    # Scenario listing
    scenario_page_limit: int = 50

    class Config:
        env_file = get_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

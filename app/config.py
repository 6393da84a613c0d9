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

    # Database (saved deals)
    database_url: str = "sqlite:///./dev.db"

    # App settings
    app_name: str = "Alight Calculator Suite"
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Benchmark defaults
    default_country: str = "US"
    default_industry: str = "real-estate"

    # Saved deals
    max_saved_deals: int = 50

    # AI narrative gateway (OpenAI-compatible chat completions)
    ai_api_key: str = ""
    ai_base_url: str = "https://ai.gateway.lovable.dev/v1"
    ai_model: str = "google/gemini-3-flash-preview"
    ai_inline_max_tokens: int = 120
    ai_memo_max_tokens: int = 2000

    class Config:
        env_file = get_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

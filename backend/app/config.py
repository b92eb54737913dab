"""
Application configuration using Pydantic Settings.
All environment variables are loaded here with sensible defaults.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Relational store (both required, checked when the engine is built)
    store_url: Optional[str] = None  # e.g., postgresql+asyncpg://postgres@db.<project>.supabase.co:5432/postgres
    store_service_key: Optional[str] = None  # Privileged service key, used as the connection password

    # Interpretation provider ("placeholder" until a text-generation service is wired in)
    interpretation_provider: str = "placeholder"

    # GET on /api/interpret is kept for early testing; production turns it off
    allow_get_submissions: bool = True

    # Environment
    environment: str = "dev"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()

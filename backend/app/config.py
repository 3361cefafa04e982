"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

MIB = 1024 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Logging
    log_level: str = "INFO"

    # Seed user created at start-up
    seed_username: str = "default"
    seed_password: str = "password"

    # OpenAI
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o"

    # Timeouts (seconds)
    ai_timeout_seconds: float = 30.0
    extraction_timeout_seconds: float = 10.0

    # Extraction
    extraction_user_agent: str = "Mozilla/5.0 (compatible; ReadAI/1.0; +https://readai.app)"
    words_per_minute: int = 200

    # Uploads
    max_pdf_bytes: int = 10 * MIB

    # Summaries are trimmed to this many characters before the AI call
    summary_max_chars: int = 12000


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()

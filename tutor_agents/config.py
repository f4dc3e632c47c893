"""Application configuration management.

This module handles all configuration settings using pydantic-settings
for type-safe environment variable loading.
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    For local development, create a .env file in the project root.
    """

    # Application
    app_name: str = "AI Tutor Multi-Agent API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # API Configuration
    api_prefix: str = "/api"

    # CORS Settings
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Gemini Configuration
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-1.5-flash"
    model_temperature: float = 0.7
    max_output_tokens: int = 2048
    llm_timeout_seconds: float = 60.0
    # 1 means a single attempt: failed generations are never retried
    llm_max_attempts: int = 1

    # Agents
    context_window: int = 5

    # Rate limiting (per client address, chat endpoint only)
    rate_limit_enabled: bool = True
    rate_limit: str = "100 per 15 minutes"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


# Global settings instance
settings = Settings()

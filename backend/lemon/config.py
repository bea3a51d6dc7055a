"""
Lemon Backend Configuration
Environment variables and settings management
"""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    service_name: str = "Lemon Travel API"

    # CORS
    cors_origins: str = "*"

    # LLM Configuration (OpenAI-compatible API)
    llm_api_key: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("llm_api_key", "openai_api_key"),
    )
    llm_base_url: Optional[str] = None
    llm_model: str = "gpt-4o-mini"  # Chat, route and hotel calls
    itinerary_model: str = "gpt-3.5-turbo"  # Free-text /plan-trip itineraries
    llm_timeout_seconds: float = 60.0

    # Function-calling schema for trip query collection
    trip_query_schema_path: Optional[str] = None

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins string into list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

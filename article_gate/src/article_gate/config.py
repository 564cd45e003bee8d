"""
Configuration management using Pydantic Settings.

All configuration is loaded from environment variables with sensible defaults.
"""

from typing import Optional
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # OpenAI
    openai_api_key: Optional[str] = Field(None, description="OpenAI API key")
    openai_model: str = Field("gpt-5", description="OpenAI model for outline/article generation")
    openai_timeout: float = Field(600.0, description="Timeout for a single generation call (seconds)")

    # Generation targets
    default_language: str = Field("العربية", description="Language used when the request omits one")
    target_word_count: int = Field(1500, description="Article length requested from the generator")

    # Gate thresholds
    min_word_count: int = Field(1200, description="Minimum words in the stripped article body")
    min_secondary_keywords: int = Field(3, description="Minimum secondary keywords per article")
    min_sources: int = Field(3, description="Minimum source URLs per article request")
    max_sources: int = Field(6, description="Maximum source URLs per article request")

    # Server
    port: int = Field(8787, description="HTTP server port")
    cors_origins: str = Field("*", description="Allowed CORS origins, comma-separated")
    max_body_bytes: int = Field(2 * 1024 * 1024, description="Maximum accepted request body size")
    vercel: Optional[str] = Field(None, description="Set to '1' when running on a serverless host")

    # Logging
    log_level: str = Field("INFO", description="Log level")
    log_json: bool = Field(False, description="Output logs as JSON")

    @field_validator("max_sources")
    @classmethod
    def validate_source_bounds(cls, v: int, info) -> int:
        """Ensure the source-count range is not empty."""
        min_sources = info.data.get("min_sources", 0)
        if v < min_sources:
            raise ValueError(f"max_sources ({v}) must be >= min_sources ({min_sources})")
        return v

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_serverless(self) -> bool:
        """Check if the process is invoked on demand instead of listening."""
        return self.vercel == "1"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Clear cache to allow re-reading settings (useful for tests)
def clear_settings_cache():
    """Clear the settings cache."""
    get_settings.cache_clear()

"""Configuration management for the application."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database (self-hosted relational backend)
    database_url: str = Field(default="sqlite:///./bonapp.db")

    # Which gateway services talk to: local SQL tables or the hosted data API
    data_backend: Literal["sql", "rest"] = Field(default="sql")
    data_api_url: str = Field(default="http://localhost:54321")
    data_api_key: str = Field(default="")
    request_timeout: float = Field(default=30.0)

    # JWT issued by the hosted identity provider
    jwt_secret: str = Field(default="change-me-in-production")
    jwt_algorithm: str = Field(default="HS256")
    jwt_audience: str | None = Field(default="authenticated")

    # Logging
    log_level: str = Field(default="INFO")

    # API
    environment: str = Field(default="development")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.environment == "production":
            if self.jwt_secret == "change-me-in-production":  # noqa: S105
                raise ValueError("JWT_SECRET must be changed in production")
            if self.data_backend == "sql" and "localhost" in self.database_url:
                raise ValueError("DATABASE_URL should not use localhost in production")
            if self.data_backend == "rest" and not self.data_api_key:
                raise ValueError("DATA_API_KEY is required for the rest backend in production")
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

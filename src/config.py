"""Configuration management for the application."""

import re
from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def normalize_database_url(value: str) -> str:
    """Clean up a connection string copied out of a .env file or dashboard."""
    url = value.strip()
    if url.startswith("DATABASE_URL="):
        url = url[len("DATABASE_URL=") :].strip()
    return re.sub(r"^['\"]|['\"]$", "", url).strip()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(...)
    serverless: bool = Field(default=False, validation_alias=AliasChoices("serverless", "vercel"))

    # Redis (Celery broker)
    redis_url: str = Field(default="redis://localhost:6379/0")

    # JWT
    jwt_secret: str = Field(default="change-me-in-production")
    jwt_algorithm: str = Field(default="HS256")
    jwt_expiration_minutes: int = Field(default=10080)  # 7 days
    remember_me_days: int = Field(default=30)
    password_reset_minutes: int = Field(default=60)

    # Stripe
    stripe_secret_key: str | None = Field(default=None)
    stripe_webhook_secret: str | None = Field(default=None)

    # Outbound email
    smtp_host: str | None = Field(default=None)
    smtp_port: int = Field(default=587)
    smtp_username: str | None = Field(default=None)
    smtp_password: str | None = Field(default=None)
    email_from_address: str = Field(default="no-reply@localhost")
    app_url: str = Field(default="http://localhost:3000")

    # API
    environment: str = Field(default="development")
    log_level: str | None = Field(default=None)

    @field_validator("database_url")
    @classmethod
    def clean_database_url(cls, value: str) -> str:
        url = normalize_database_url(value)
        if not url:
            raise ValueError("DATABASE_URL is not defined in environment variables")
        if "://" not in url:
            raise ValueError("DATABASE_URL must be a URL such as postgresql://user@host/db")
        return url

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.environment == "production":
            if self.jwt_secret == "change-me-in-production":  # noqa: S105
                raise ValueError("JWT_SECRET must be changed in production")
            if "localhost" in self.database_url:
                raise ValueError("DATABASE_URL should not use localhost in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        return self.environment == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

import json
from typing import Any

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration backed by Pydantic BaseSettings.
    Values are loaded from environment variables and the optional .env file.
    """

    # API Configuration
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Commerce Hub"
    PROJECT_DESCRIPTION: str = "Multi-tenant commerce back office with AI sales assistant"
    VERSION: str = "0.1.0"

    # PostgreSQL Database Settings
    DATABASE_URL: str | None = Field(None, description="Full async database URL (overrides DB_* settings)")
    DB_HOST: str = Field("localhost", description="PostgreSQL host")
    DB_PORT: int = Field(5432, description="PostgreSQL port")
    DB_NAME: str = Field("commerce_hub", description="Database name")
    DB_USER: str = Field("postgres", description="PostgreSQL user")
    DB_PASSWORD: str | None = Field(None, description="PostgreSQL password")
    DB_ECHO: bool = Field(False, description="Log SQL queries (debug only)")

    # Database connection pool settings
    DB_POOL_SIZE: int = Field(20, description="Connection pool size")
    DB_MAX_OVERFLOW: int = Field(30, description="Maximum pool overflow")
    DB_POOL_RECYCLE: int = Field(3600, description="Recycle connections every N seconds")
    DB_POOL_TIMEOUT: int = Field(30, description="Seconds to wait for a pooled connection")

    # Language model (OpenAI-compatible API)
    LLM_API_KEY: str | None = Field(None, description="API key for the OpenAI-compatible endpoint")
    LLM_BASE_URL: str = Field("https://api.openai.com/v1", description="Base URL of the OpenAI-compatible API")
    LLM_MODEL: str = Field("gpt-4o-mini", description="Chat model used by the sales assistant")
    LLM_REQUEST_TIMEOUT: int = Field(30, description="Timeout for LLM requests in seconds")
    LLM_MAX_RETRIES: int = Field(0, description="Client-side retries for LLM requests")

    # Intent classifier context window
    CLASSIFIER_MAX_PRODUCTS: int = Field(20, description="Products included in the classifier prompt")
    CLASSIFIER_MAX_KNOWLEDGE: int = Field(10, description="Knowledge base entries included in the classifier prompt")

    # Logging
    LOG_LEVEL: str = Field("INFO", description="Root log level")
    LOG_FORMAT: str = Field("colored", description="Log format: colored, json or plain")
    LOG_FILE: str | None = Field(None, description="Optional JSON log file")

    # Application Settings
    DEBUG: bool = Field(False, description="Debug mode")
    ENVIRONMENT: str = Field("production", description="Runtime environment")
    CORS_ORIGINS: list[str] = Field(default=["http://localhost:5173"], description="Allowed CORS origins")

    # Sentry Configuration
    SENTRY_DSN: str | None = Field(default=None, description="Sentry DSN for error tracking")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def __init__(self, **data: Any):
        super().__init__(**data)

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, value):
        """Accept a JSON array or a comma-separated string."""
        if isinstance(value, str):
            value = value.strip()
            if value.startswith("[") and value.endswith("]"):
                try:
                    parsed = json.loads(value)
                    if isinstance(parsed, list):
                        return [str(origin).strip() for origin in parsed if origin]
                except json.JSONDecodeError:
                    pass
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v):
        if v not in ("colored", "json", "plain"):
            raise ValueError("LOG_FORMAT must be one of: colored, json, plain")
        return v

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def validate_pool_size(cls, v):
        if v < 1:
            raise ValueError("DB_POOL_SIZE must be at least 1")
        if v > 100:
            raise ValueError("DB_POOL_SIZE should not exceed 100")
        return v

    @field_validator("DB_MAX_OVERFLOW")
    @classmethod
    def validate_max_overflow(cls, v):
        if v < 0:
            raise ValueError("DB_MAX_OVERFLOW must be 0 or greater")
        if v > 200:
            raise ValueError("DB_MAX_OVERFLOW should not exceed 200")
        return v

    @field_validator("CLASSIFIER_MAX_PRODUCTS", "CLASSIFIER_MAX_KNOWLEDGE")
    @classmethod
    def validate_context_caps(cls, v):
        if v < 0:
            raise ValueError("Classifier context caps must be 0 or greater")
        return v

    @computed_field
    @property
    def async_database_url(self) -> str:
        """Async (asyncpg) connection URL used by the application."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.DB_PASSWORD:
            return (
                f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
                f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
            )
        return f"postgresql+asyncpg://{self.DB_USER}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @computed_field
    @property
    def database_url(self) -> str:
        """Synchronous connection URL, used by Alembic migrations."""
        return self.async_database_url.replace("+asyncpg", "").replace("+aiosqlite", "")

    @computed_field
    @property
    def is_development(self) -> bool:
        return self.DEBUG or self.ENVIRONMENT.lower() in ["development", "dev", "local"]


_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """
    Return the cached settings instance.
    Environment variables are only read once per process.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Drop the cached settings (used by tests that tweak the environment)."""
    global _settings_instance
    _settings_instance = None

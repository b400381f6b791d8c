import os
from functools import lru_cache
from typing import Any, Dict, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # App config
    PROJECT_NAME: str = "Local Library"
    PROJECT_VERSION: str = "0.1.0"
    PROJECT_DESCRIPTION: str = "Catalog of authors, books, genres and book copies"
    APP_ENV: str = "development"
    DEBUG: bool = True
    DOCS_URL: str = "/docs"
    OPENAPI_URL: str = "/openapi.json"

    # Server config
    SERVER_HOST: str = "127.0.0.1"
    SERVER_PORT: int = 8000

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./locallibrary.db"
    DATABASE_ECHO: bool = False
    CREATE_TABLES: bool = True
    # Upper bound (seconds) for each concurrent read in a fan-out; None disables it
    AGGREGATE_TIMEOUT: Optional[float] = Field(default=None, gt=0)

    # Templates
    TEMPLATES_DIR: str = os.path.join(
        os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "templates"
    )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "color"
    LOG_REQUESTS: bool = True

    model_config = {
        "case_sensitive": True,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("APP_ENV")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Validate app environment."""
        allowed_envs = {"development", "testing", "production"}
        if v not in allowed_envs:
            raise ValueError(f"APP_ENV must be one of: {', '.join(sorted(allowed_envs))}")
        return v

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v not in {"color", "json"}:
            raise ValueError("LOG_FORMAT must be 'color' or 'json'")
        return v

    @model_validator(mode="after")
    def set_debug_based_on_env(self) -> "Settings":
        """Set DEBUG based on APP_ENV."""
        if self.APP_ENV == "production":
            self.DEBUG = False
        return self

    @property
    def fastapi_kwargs(self) -> Dict[str, Any]:
        """
        Get FastAPI configuration.

        Returns:
            Dictionary with FastAPI configuration
        """
        return {
            "debug": self.DEBUG,
            "docs_url": self.DOCS_URL if self.DEBUG else None,
            "openapi_url": self.OPENAPI_URL if self.DEBUG else None,
            "redoc_url": None,
            "title": self.PROJECT_NAME,
            "version": self.PROJECT_VERSION,
            "description": self.PROJECT_DESCRIPTION,
        }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance
    """
    return Settings()

"""
Todo API — Application Configuration
======================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by main.py; create_app() accepts an override for tests.
When:  Loaded once at module import time.

Environment variables (case-insensitive):
    APP_NAME      Service name used in startup logs and the OpenAPI title
    ENVIRONMENT   Deployment environment label (development, production, ...)
    HOST          Bind address for uvicorn
    PORT          Listen port (default 3000)
    LOG_LEVEL     DEBUG, INFO, WARNING, ERROR or CRITICAL
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for local development.
    """

    # ── Service ───────────────────────────────────────────────────────────
    app_name: str = Field(default="Todo API")
    environment: str = Field(default="development")

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # What: Controls verbosity of structured JSON logging
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


settings = Settings()

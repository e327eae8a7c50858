"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (accounting API URL, Twilio credentials, etc.)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from typing import Optional, Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # FinanZas accounting API
    FINANZAS_API_BASE_URL: str = Field(
        default="http://localhost:8080/api",
        description="Base URL of the FinanZas REST API"
    )
    FINANZAS_SITE_URL: str = Field(
        default="https://finanzas-dev.com.br",
        description="Public site where users copy their user id"
    )

    # WhatsApp/Twilio
    TWILIO_ACCOUNT_SID: Optional[str] = Field(
        default=None,
        description="Twilio account SID"
    )
    TWILIO_AUTH_TOKEN: Optional[str] = Field(
        default=None,
        description="Twilio auth token"
    )
    TWILIO_WHATSAPP_NUMBER: Optional[str] = Field(
        default=None,
        description="Sender number, e.g. whatsapp:+14155238886"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    PORT: int = Field(
        default=3000,
        description="Port the webhook server listens on"
    )
    API_PREFIX: str = Field(
        default="/api/v1",
        description="API route prefix"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    @field_validator("FINANZAS_API_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Endpoint paths are appended with a leading slash."""
        return v.rstrip("/")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()


def validate_settings(current: Optional[Settings] = None):
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    current = current or settings
    errors = []

    if not current.FINANZAS_API_BASE_URL:
        errors.append("FINANZAS_API_BASE_URL is required")

    # Production-specific validations
    twilio_credentials = (
        current.TWILIO_ACCOUNT_SID,
        current.TWILIO_AUTH_TOKEN,
        current.TWILIO_WHATSAPP_NUMBER,
    )
    if current.is_production and not all(twilio_credentials):
        errors.append(
            "TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN and TWILIO_WHATSAPP_NUMBER are required in production"
        )

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True

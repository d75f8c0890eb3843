"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables with validation.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable loading."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )
    
    # Environment
    ENVIRONMENT: str = Field(default="development")
    LOG_LEVEL: str = Field(default="INFO")
    APP_VERSION: str = Field(default="0.1.0")
    
    # Monitoring
    SENTRY_DSN: str = Field(default="")
    SENTRY_TRACES_SAMPLE_RATE: float = Field(default=0.1)
    
    # Firebase
    FIREBASE_CREDENTIALS_PATH: str = Field(
        default="",
        description="Service account JSON; application default credentials when empty"
    )
    FIREBASE_PROJECT_ID: str = Field(default="")
    STORAGE_BUCKET: str = Field(
        default="",
        description="Bucket for user files; the app's default bucket when empty"
    )
    
    # Email (SMTP)
    EMAIL_SMTP_HOST: str = Field(default="localhost")
    EMAIL_SMTP_PORT: int = Field(default=587)
    EMAIL_SMTP_USER: str = Field(default="")
    EMAIL_SMTP_PASSWORD: str = Field(default="")
    EMAIL_START_TLS: bool = Field(default=True)
    EMAIL_FROM: str = Field(default='"BudgetByMe" <noreply@BudgetByMe.com>')
    
    # Jobs
    EXPORT_LINK_EXPIRY_DAYS: int = Field(default=7)
    TRAVERSAL_CONCURRENCY: int = Field(
        default=16,
        description="Max concurrent store operations per fan-out level"
    )
    
    # API Configuration
    API_V1_PREFIX: str = Field(default="/api/v1")
    API_SECRET: str = Field(
        default="development-secret",
        description="Shared secret for the job trigger -> API communication"
    )
    
    @field_validator("TRAVERSAL_CONCURRENCY", "EXPORT_LINK_EXPIRY_DAYS")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Concurrency cap and link expiry must be at least 1."""
        if v < 1:
            raise ValueError("must be at least 1")
        return v
    
    @field_validator("EXPORT_LINK_EXPIRY_DAYS")
    @classmethod
    def validate_link_expiry(cls, v: int) -> int:
        """V4 signed URLs expire after at most 7 days."""
        if v > 7:
            raise ValueError("must be at most 7 days")
        return v


# Global settings instance
settings = Settings()

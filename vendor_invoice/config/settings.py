"""Application settings using Pydantic Settings."""
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration settings."""

    # Application
    APP_NAME: str = "Vendor Invoice Upsert Service"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Database
    DATABASE_URL: Optional[str] = None
    SQL_SECRET_ARN: Optional[str] = None
    AWS_REGION: Optional[str] = None
    CREATE_TABLES: bool = True

    # Upsert
    ACTOR_CODE: int = 2
    RETRY_DUPLICATE_AS_UPDATE: bool = False

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()

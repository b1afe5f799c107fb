"""
Application configuration management
"""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


DEFAULT_UPLOAD_PATH = "uploads/{user_id}/{type}/{filename}"


class Settings(BaseSettings):
    """Application settings"""

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # API Settings
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "FileUploader"

    # CORS Settings
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Upload defaults, merged under per-call options
    FILESYSTEM_DISK: str = "local"
    UPLOAD_VISIBILITY: str = "public"
    UPLOAD_PATH: str = DEFAULT_UPLOAD_PATH  # supports {user_id}, {type}, {filename}
    UPLOAD_USER_ID: Optional[int] = 1
    UPLOAD_SAFE: bool = False  # hash names instead of trusting the client filename
    MAX_UPLOAD_SIZE: int = 50 * 1024 * 1024  # 50MB

    # Disks
    STORAGE_ROOT: str = "./storage/app"
    LOCAL_STORAGE_URL: str = "/files"
    PUBLIC_STORAGE_ROOT: str = "./storage/app/public"
    PUBLIC_STORAGE_URL: str = "/storage"

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator("UPLOAD_USER_ID", mode="before")
    @classmethod
    def parse_upload_user_id(cls, v):
        # An empty env value falls back to the root user
        if v in ("", None):
            return 1
        return v


# Create settings instance
settings = Settings()

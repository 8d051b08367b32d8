# config/settings.py

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
import os
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "EcoMetrics"
    DEBUG: bool = False
    ENVIRONMENT: str = Field(default="development", pattern="^(development|staging|production)$")

    # CORS
    CORS_ORIGINS: str = ""

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        if not self.CORS_ORIGINS:
            return ["*"] if self.DEBUG else []
        return [s.strip() for s in self.CORS_ORIGINS.split(",") if s.strip()]

    # Database
    DATABASE_URL: str
    DB_POOL_SIZE: int = Field(default=20, ge=5, le=100)
    DB_MAX_OVERFLOW: int = Field(default=30, ge=5, le=100)
    DB_POOL_RECYCLE: int = Field(default=3600, ge=300)

    # Security
    SECRET_KEY: str = Field(min_length=8)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = Field(default=24, ge=1, le=24 * 30)

    # Object storage (S3)
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    AWS_REGION: str = "us-east-1"
    AWS_S3_BUCKET: Optional[str] = None
    EVIDENCE_PREFIX: str = "activity-evidence/"

    # Evidence uploads
    MAX_FILE_SIZE: int = Field(default=5 * 1024 * 1024, ge=1024)
    ALLOWED_FILE_TYPES: str = "image/jpeg,image/png,image/webp,image/gif,video/mp4"
    MIN_EVIDENCE_FILES: int = Field(default=1, ge=1)
    MAX_EVIDENCE_FILES: int = Field(default=5, ge=1, le=20)

    @property
    def allowed_file_types_list(self) -> List[str]:
        """Parse allowed MIME types from comma-separated string"""
        return [t.strip().lower() for t in self.ALLOWED_FILE_TYPES.split(",") if t.strip()]

    # Monitoring
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    # Server
    PORT: Optional[int] = Field(default=8000, ge=1, le=65535)

    @field_validator("SECRET_KEY")
    @classmethod
    def validate_secret(cls, v):
        """Ensure the signing secret is strong enough"""
        if len(v) < 8:
            raise ValueError("Secret key must be at least 8 characters long")
        if len(v) < 32:
            import warnings
            warnings.warn(f"Secret key is only {len(v)} characters. Consider using at least 32 characters for production.", UserWarning)
        return v

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v):
        """Validate database URL format; plain postgres URLs are pointed at psycopg 3"""
        for bare in ("postgres://", "postgresql://"):
            if v.startswith(bare):
                return "postgresql+psycopg://" + v[len(bare):]
        if not v.startswith(("postgresql+psycopg://", "sqlite://")):
            raise ValueError("Unsupported database URL format")
        return v

    @field_validator("CORS_ORIGINS")
    @classmethod
    def validate_cors_origins(cls, v):
        """Validate CORS origins in production"""
        environment = os.getenv("ENVIRONMENT", "development")
        if environment == "production" and ("*" in v or not v):
            raise ValueError("Wildcard CORS origins not allowed in production")
        return v

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()

"""
Application settings and configuration management.

All service configuration lives here: server, storage, cache TTL policy,
token verification, uploads and lifecycle policy switches.
"""
from enum import Enum
from typing import Optional, List, Dict
from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class CacheBackendType(str, Enum):
    """Supported key store backends for the response cache."""
    REDIS = "redis"
    MEMORY = "memory"
    NONE = "none"


class Settings(BaseSettings):
    """Job portal settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Core Application Settings
    app_name: str = Field(default="job-portal")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    environment: str = Field(default="development")

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5001)
    reload: bool = Field(default=False)
    api_prefix: str = Field(default="/api/v1")

    # Database Configuration (unset -> in-memory repositories)
    database_url: Optional[str] = Field(default=None)
    db_pool_min_size: int = Field(default=5)
    db_pool_max_size: int = Field(default=20)
    db_command_timeout: int = Field(default=60)

    # Cache Configuration
    redis_url: Optional[str] = Field(default=None)
    cache_backend: Optional[CacheBackendType] = Field(default=None)
    enable_response_cache: bool = Field(default=True)
    cache_ttl_default: int = Field(default=300)  # 5 minutes
    cache_ttl_jobs_list: int = Field(default=300)
    cache_ttl_jobs_detail: int = Field(default=300)

    # Token verification
    jwt_secret: SecretStr = Field(default="change-me-in-production-use-strong-secret-key")
    jwt_algorithm: str = Field(default="HS256")

    # Resume uploads
    upload_dir: str = Field(default="uploads")
    max_upload_size: int = Field(default=10 * 1024 * 1024)  # 10 MB

    # Application lifecycle policy
    allow_decision_reversal: bool = Field(default=False)

    # CORS Configuration
    cors_origins: str = Field(default="http://localhost:3000")

    # Pagination Configuration
    default_page_size: int = Field(default=10)
    max_page_size: int = Field(default=100)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment.lower() == "testing"

    @property
    def effective_cache_backend(self) -> CacheBackendType:
        """Resolve the cache backend, preferring Redis when a URL is configured."""
        if self.cache_backend is not None:
            return self.cache_backend
        if self.redis_url:
            return CacheBackendType.REDIS
        return CacheBackendType.MEMORY

    def get_cors_origins(self) -> List[str]:
        """Get CORS origins as list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def get_cache_key_prefix(self) -> str:
        """Get cache key prefix based on service and environment."""
        return f"{self.app_name}:{self.environment}:"

    def get_cache_ttls(self) -> Dict[str, int]:
        """Get the TTL policy keyed by cache prefix."""
        return {
            "default": self.cache_ttl_default,
            "jobs:list": self.cache_ttl_jobs_list,
            "jobs:detail": self.cache_ttl_jobs_detail,
        }


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

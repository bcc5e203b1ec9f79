# ==============================================================================
# SETTINGS CONFIGURATION - Catalog API Environment
# ==============================================================================
# Values come from environment variables or a local .env file
# Include limits are read by the include parser on every request
# ==============================================================================

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import List

from pydantic import Field, computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from catalog_api.core.constants import IncludeConstants


class DatabaseType(str, Enum):
    """Relational backends the catalog can run on."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"


class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """
    Catalog API configuration.

    Example:
        >>> from catalog_api.core.settings import settings
        >>> settings.INCLUDE_MAX_DEPTH
        3
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # --------------------------------------------------------------------------
    # APPLICATION
    # --------------------------------------------------------------------------
    APP_NAME: str = Field(default="Catalog API", description="Application display name")
    APP_VERSION: str = Field(default="1.0.0", description="Application semantic version")
    DEBUG: bool = Field(default=False, description="Echo SQL and expose error details")
    ENVIRONMENT: Environment = Field(default=Environment.DEVELOPMENT)
    LOG_LEVEL: str = Field(default="INFO", description="Root logging level")

    # --------------------------------------------------------------------------
    # HTTP
    # --------------------------------------------------------------------------
    API_V1_PREFIX: str = Field(default="/api/v1", description="Route prefix of the v1 routers")
    API_TITLE: str = Field(default="Catalog API")
    API_DESCRIPTION: str = Field(
        default=(
            "Products and categories with on-demand relations and "
            "components through the `include` query parameter"
        ),
    )
    CORS_ORIGINS: List[str] = Field(default=["*"], description="Allowed CORS origins")
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True)

    # --------------------------------------------------------------------------
    # DATABASE
    # --------------------------------------------------------------------------
    DATABASE_TYPE: DatabaseType = Field(
        default=DatabaseType.SQLITE,
        description="Active database backend (sqlite, postgresql)",
    )
    SQLITE_URL: str = Field(default="sqlite:///./catalog.db", description="SQLite database URL")

    POSTGRES_HOST: str = Field(default="localhost")
    POSTGRES_PORT: int = Field(default=5432, ge=1, le=65535)
    POSTGRES_USER: str = Field(default="postgres")
    POSTGRES_PASSWORD: str = Field(default="password")
    POSTGRES_DB: str = Field(default="catalog")

    DB_POOL_SIZE: int = Field(default=10, ge=1, le=100, description="Connection pool size")
    DB_MAX_OVERFLOW: int = Field(default=20, ge=0, le=100, description="Connections beyond the pool")
    DB_POOL_TIMEOUT: int = Field(default=30, ge=1, le=300, description="Seconds to wait for a connection")
    DB_POOL_RECYCLE: int = Field(default=3600, ge=60, description="Connection recycle time in seconds")

    # --------------------------------------------------------------------------
    # INCLUDE PARAMETER
    # --------------------------------------------------------------------------
    INCLUDE_MAX_DEPTH: int = Field(
        default=IncludeConstants.MAX_DEPTH,
        ge=1,
        description="Maximum segments of one include path (categories.products.images = 3)",
    )
    INCLUDE_MAX_RELATIONS: int = Field(
        default=IncludeConstants.MAX_RELATIONS,
        ge=1,
        description="Maximum include paths per request",
    )
    INCLUDE_SEPARATOR: str = Field(default=IncludeConstants.SEPARATOR, min_length=1)
    INCLUDE_NESTED_SEPARATOR: str = Field(default=IncludeConstants.NESTED_SEPARATOR, min_length=1)

    # --------------------------------------------------------------------------
    # DERIVED URLS
    # --------------------------------------------------------------------------
    @computed_field
    @property
    def postgres_url(self) -> str:
        """Async PostgreSQL URL (asyncpg driver)."""
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @computed_field
    @property
    def postgres_sync_url(self) -> str:
        """Sync PostgreSQL URL, used by offline Alembic migrations."""
        return self.postgres_url.replace("postgresql+asyncpg://", "postgresql://", 1)

    @computed_field
    @property
    def sqlite_async_url(self) -> str:
        """``SQLITE_URL`` rewritten for the aiosqlite driver."""
        if "aiosqlite" in self.SQLITE_URL:
            return self.SQLITE_URL
        return self.SQLITE_URL.replace("sqlite://", "sqlite+aiosqlite://", 1)

    # --------------------------------------------------------------------------
    # VALIDATORS
    # --------------------------------------------------------------------------
    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Accept a comma-separated string as well as a list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @model_validator(mode="after")
    def check_include_separators(self) -> "Settings":
        if self.INCLUDE_SEPARATOR == self.INCLUDE_NESTED_SEPARATOR:
            raise ValueError("INCLUDE_SEPARATOR and INCLUDE_NESTED_SEPARATOR must differ")
        return self


@lru_cache()
def get_settings() -> Settings:
    """Settings loaded once per process."""
    return Settings()


settings = get_settings()

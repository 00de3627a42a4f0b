"""
Environment-driven configuration for the hierarchy cascade API.

Every setting is read from the environment (or a local .env file) by
pydantic-settings. FastAPI code depends on get_settings(); tests build a
Settings instance directly:

    settings = Settings(_env_file=None, cascade_batch_budget=5)
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.constants import DEFAULT_BATCH_BUDGET, STORE_BATCH_HARD_LIMIT

ENVIRONMENTS = {"development", "staging", "production", "test"}
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Settings for one process of the API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Runtime
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="One of development, staging, production, test",
    )
    log_level: str = Field(default="INFO", description="Root logger level")
    cors_allowed_origins: str = Field(
        default="http://localhost:3000",
        description="Comma-separated list of origins allowed by CORS",
    )

    # -------------------------------------------------------------------------
    # Supabase
    # -------------------------------------------------------------------------
    supabase_url: Optional[str] = Field(default=None, description="Project URL")
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Service role key; ownership is enforced by the API, not RLS",
    )

    # -------------------------------------------------------------------------
    # Cascade engine
    # -------------------------------------------------------------------------
    cascade_batch_budget: int = Field(
        default=DEFAULT_BATCH_BUDGET,
        description=f"Writes per atomic batch, below the store limit of {STORE_BATCH_HARD_LIMIT}",
    )

    # -------------------------------------------------------------------------
    # Sentry
    # -------------------------------------------------------------------------
    sentry_dsn: Optional[str] = Field(default=None, description="Sentry DSN")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if v.lower() not in ENVIRONMENTS:
            raise ValueError(f"Invalid environment '{v}'. Must be one of: {ENVIRONMENTS}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.upper() not in LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {LOG_LEVELS}")
        return v.upper()

    @field_validator("cascade_batch_budget")
    @classmethod
    def validate_batch_budget(cls, v: int) -> int:
        """A batch must leave headroom below the store's hard limit."""
        if not 1 <= v < STORE_BATCH_HARD_LIMIT:
            raise ValueError(
                f"cascade_batch_budget must be between 1 and {STORE_BATCH_HARD_LIMIT - 1}, got {v}"
            )
        return v

    @property
    def supabase_key(self) -> Optional[str]:
        return self.supabase_service_role_key

    @property
    def cors_origins(self) -> List[str]:
        return [
            origin.strip()
            for origin in self.cors_allowed_origins.split(",")
            if origin.strip()
        ]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        return self.environment == "test"


@lru_cache
def get_settings() -> Settings:
    """
    Load settings once per process.

    Call get_settings.cache_clear() after changing the environment in tests.
    """
    return Settings()

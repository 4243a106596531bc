"""
Bravely Application Settings

Production-grade configuration management using Pydantic Settings.
All sensitive values are loaded from environment variables.

SECURITY: Never log or expose settings containing secrets.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration."""

    model_config = SettingsConfigDict(env_prefix="BRAVELY_DB_")

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    name: str = Field(default="bravely_db", description="Database name")
    user: str = Field(default="bravely_user", description="Database user")
    password: SecretStr = Field(default=SecretStr("dev_password"), description="Database password")
    pool_size: int = Field(default=10, ge=1, le=100, description="Connection pool size")
    max_overflow: int = Field(default=20, ge=0, le=100, description="Max overflow connections")

    @property
    def async_url(self) -> str:
        """Generate async database URL for SQLAlchemy."""
        password = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{password}@{self.host}:{self.port}/{self.name}"

    @property
    def sync_url(self) -> str:
        """Generate sync database URL for Alembic migrations."""
        password = self.password.get_secret_value()
        return f"postgresql://{self.user}:{password}@{self.host}:{self.port}/{self.name}"


class GoalSettings(BaseSettings):
    """
    Progressive goal configuration.

    Defaults are applied to new users; floors and ceilings bound
    every goal the growth engine produces.
    """

    model_config = SettingsConfigDict(env_prefix="BRAVELY_GOAL_")

    default_growth_rate: float = Field(default=5.0, gt=0, le=100, description="Percent per period")
    default_growth_period: Literal["weekly", "monthly"] = Field(default="weekly")
    default_distance_goal: float = Field(default=1.0, gt=0, description="Miles")
    default_duration_goal: int = Field(default=15, gt=0, description="Minutes")
    default_monthly_session_goal: int = Field(default=10, ge=1, le=100)

    distance_floor: float = Field(default=0.1, gt=0, description="Minimum distance goal (miles)")
    duration_floor: int = Field(default=5, gt=0, description="Minimum duration goal (minutes)")
    max_distance_goal: float = Field(default=26.2, gt=0, description="Distance ceiling (miles)")
    max_duration_goal: int = Field(default=240, gt=0, description="Duration ceiling (minutes)")

    max_compounding_steps: int = Field(
        default=12,
        ge=1,
        le=120,
        description="Maximum growth periods applied in a single evaluation",
    )

    @model_validator(mode="after")
    def validate_bounds(self) -> "GoalSettings":
        """Floors must sit below ceilings."""
        if self.distance_floor > self.max_distance_goal:
            raise ValueError("distance_floor must not exceed max_distance_goal")
        if self.duration_floor > self.max_duration_goal:
            raise ValueError("duration_floor must not exceed max_duration_goal")
        return self


class SessionSettings(BaseSettings):
    """Exposure session validation configuration."""

    model_config = SettingsConfigDict(env_prefix="BRAVELY_SESSION_")

    rating_min: int = Field(default=1, ge=0, description="Lowest fear/mood rating")
    rating_max: int = Field(default=10, le=100, description="Highest fear/mood rating")
    history_limit: int = Field(default=50, ge=1, le=500, description="Sessions returned by history views")

    @model_validator(mode="after")
    def validate_scale(self) -> "SessionSettings":
        """Rating scale must be non-empty."""
        if self.rating_min >= self.rating_max:
            raise ValueError("rating_min must be lower than rating_max")
        return self


class SentrySettings(BaseSettings):
    """Sentry error tracking configuration."""

    model_config = SettingsConfigDict(env_prefix="BRAVELY_SENTRY_")

    dsn: SecretStr = Field(default=SecretStr(""), description="Sentry DSN (empty disables Sentry)")
    traces_sample_rate: float = Field(default=0.1, ge=0.0, le=1.0)


class Settings(BaseSettings):
    """
    Main application settings.

    All configuration is loaded from environment variables with BRAVELY_ prefix.
    Sensitive values use SecretStr to prevent accidental logging.

    Usage:
        settings = get_settings()
        ceiling = settings.goals.max_distance_goal
    """

    model_config = SettingsConfigDict(
        env_prefix="BRAVELY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode - NEVER enable in production")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )
    api_version: str = Field(default="v1", description="API version prefix")
    cors_origins: list[str] = Field(
        default=["http://localhost:5173"],
        description="Allowed CORS origins"
    )

    # Calendar
    default_timezone: str = Field(
        default="UTC",
        description="IANA timezone used when a user has not set one"
    )

    # Persistence backend selection
    store_backend: Literal["postgres", "memory"] = Field(
        default="memory",
        description="Progress store backend (postgres, memory)"
    )

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    goals: GoalSettings = Field(default_factory=GoalSettings)
    sessions: SessionSettings = Field(default_factory=SessionSettings)
    sentry: SentrySettings = Field(default_factory=SentrySettings)

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.
    For testing, use dependency injection to override.

    Returns:
        Settings: Application settings instance
    """
    return Settings()

"""Empire-rules application settings loaded from environment variables."""

from enum import StrEnum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.engine.rules.config import RulesConfig

_DEFAULT_CATALOG = (
    Path(__file__).resolve().parent.parent.parent / "data" / "catalog" / "empire_options_v1.json"
)


class Environment(StrEnum):
    """Deployment environment."""

    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class LogLevel(StrEnum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Application-wide settings loaded from environment variables / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Catalog ---
    CATALOG_PATH: Path = Field(
        default=_DEFAULT_CATALOG,
        description="JSON catalog document loaded at startup.",
    )

    # --- Rules engine ---
    RULES_MAX_WORKERS: int = Field(
        default=1,
        ge=1,
        description="Thread fan-out for completion and availability searches.",
    )
    RULES_MAX_REQUIREMENT_DEPTH: int = Field(
        default=32,
        ge=1,
        description="Longest nested requirement chain the resolver follows.",
    )

    # --- Logging ---
    LOG_LEVEL: LogLevel = Field(
        default=LogLevel.INFO,
        description="Application log level.",
    )

    # --- Environment ---
    ENVIRONMENT: Environment = Field(
        default=Environment.DEV,
        description="Deployment environment (dev/staging/prod).",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.ENVIRONMENT == Environment.PROD

    def rules_config(self) -> RulesConfig:
        """Engine configuration derived from these settings."""
        return RulesConfig(
            max_workers=self.RULES_MAX_WORKERS,
            max_requirement_depth=self.RULES_MAX_REQUIREMENT_DEPTH,
        )


def get_settings() -> Settings:
    """Factory function for dependency injection via FastAPI Depends."""
    return Settings()

"""Configuration management for the cricket scoring service."""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    model_config = SettingsConfigDict(env_prefix="DB_", env_file=".env", extra="ignore")

    url: str = Field(default="sqlite:///cricket_scoring.db")
    echo: bool = Field(default=False)  # Set to True for SQL debugging


class AuthSettings(BaseSettings):
    """Bearer token settings used at the request boundary."""

    model_config = SettingsConfigDict(env_prefix="AUTH_", env_file=".env", extra="ignore")

    jwt_secret: str = Field(default="change-me-in-production-with-a-long-random-secret")
    jwt_algorithm: str = Field(default="HS256")
    token_ttl_hours: int = Field(default=168)


class ScoringSettings(BaseSettings):
    """Scoring rules that are configurable per deployment."""

    model_config = SettingsConfigDict(env_prefix="SCORING_", env_file=".env", extra="ignore")

    undo_window_minutes: int = Field(default=5, ge=0)
    default_overs_limit: int = Field(default=20, gt=0)


class ApiSettings(BaseSettings):
    """HTTP server settings."""

    model_config = SettingsConfigDict(env_prefix="API_", env_file=".env", extra="ignore")

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_", env_file=".env", extra="ignore")

    level: str = Field(default="INFO")
    file: Optional[str] = Field(default=None)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    database: DatabaseSettings = DatabaseSettings()
    auth: AuthSettings = AuthSettings()
    scoring: ScoringSettings = ScoringSettings()
    api: ApiSettings = ApiSettings()
    logging: LoggingSettings = LoggingSettings()


# Global settings instance
settings = Settings()

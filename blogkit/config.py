from pathlib import Path
from typing import Literal

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings
from functools import lru_cache

_PROJECT_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)

# Placeholders that are only acceptable while app_env is "development"
_DEFAULT_JWT_SECRET = "change-me-in-production"
_DEFAULT_ADMIN_PASSWORD = "admin"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "BlogKit API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Persistence: "memory" keeps everything in-process, "sqlalchemy" uses database_url
    repository_backend: Literal["memory", "sqlalchemy"] = "memory"
    database_url: str = "sqlite:///./blogkit.db"

    # JWT
    jwt_secret_key: SecretStr = SecretStr(_DEFAULT_JWT_SECRET)
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "blogkit"
    jwt_audience: str = "blogkit-admin"
    access_token_expire_minutes: int = 60

    # Built-in admin account used by SettingsAuthService
    admin_username: str = "admin"
    admin_password: SecretStr = SecretStr(_DEFAULT_ADMIN_PASSWORD)

    # Listing & content helpers
    default_page_size: int = 10
    max_page_size: int = 100
    reading_words_per_minute: int = 200
    slug_max_length: int = 80

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_auth: str = "INFO"             # login attempts, token validation
    log_level_api: str = "INFO"              # controllers & error handlers

    model_config = {
        "env_prefix": "BLOGKIT_",
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @model_validator(mode="after")
    def reject_default_secrets(self) -> "Settings":
        """Refuse the built-in JWT secret and admin password outside development."""
        if self.app_env == "development":
            return self
        defaults = [
            name
            for name, value, default in (
                ("jwt_secret_key", self.jwt_secret_key, _DEFAULT_JWT_SECRET),
                ("admin_password", self.admin_password, _DEFAULT_ADMIN_PASSWORD),
            )
            if value.get_secret_value() == default
        ]
        if defaults:
            mssg = f"{', '.join(defaults)} must be set when app_env is '{self.app_env}'"
            raise ValueError(mssg)
        return self

    @property
    def uses_default_secrets(self) -> bool:
        return (
            self.jwt_secret_key.get_secret_value() == _DEFAULT_JWT_SECRET
            or self.admin_password.get_secret_value() == _DEFAULT_ADMIN_PASSWORD
        )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()

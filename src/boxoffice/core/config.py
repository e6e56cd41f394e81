"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Box office service settings."""

    # App
    app_env: str = "development"
    app_host: str = "127.0.0.1"
    app_port: int = 8080
    log_level: str = "INFO"
    log_format: str = "text"  # "text" or "json"

    # Oracle Database (user/password@host:port/service)
    database_url: str = "boxoffice/boxoffice@localhost:1521/FREEPDB1"
    db_pool_min: int = 1
    db_pool_max: int = 10
    db_pool_increment: int = 1
    db_pool_timeout: int = 5  # seconds to wait for a free connection

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_testing(self) -> bool:
        return self.app_env == "testing"


def get_settings() -> Settings:
    """Return a settings instance built from the current environment."""
    return Settings()

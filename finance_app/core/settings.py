"""Configuration and environment settings for the Personal Finance Tracker."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings for the Personal Finance Tracker."""

    database_url: str = "sqlite:///finance.db"
    server_host: str = "127.0.0.1"
    server_port: int = 8000
    log_file: str = "logs/finance.log"
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]
    api_base_url: str = "http://127.0.0.1:8000"
    client_timeout: float = 10.0

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


def get_settings() -> "Settings":
    """Return an instance of the application settings."""
    return Settings()

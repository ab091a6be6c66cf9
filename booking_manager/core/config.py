"""Application configuration via environment variables."""
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "Booking Manager"
    debug: bool = False

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all

    # Database
    database_url: str = "sqlite:///./booking_manager.db"

    # Logging
    log_dir: Path = Path.home() / ".logs" / "booking_manager"


settings = Settings()

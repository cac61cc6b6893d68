"""
Configuration management for the inspection API.
Uses pydantic-settings for environment variable handling.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BACKEND_DIR = Path(__file__).parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore")

    # API Configuration
    api_title: str = "CAR-dano API"
    api_version: str = "1.0.0"
    api_description: str = "Public and Developer API for CAR-dano Inspection Data"
    api_prefix: str = "/api/v1"
    debug: bool = False
    environment: str = "development"  # "production" disables clean_database()

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 3011
    cors_origins: list[str] = ["*"]

    # Database Configuration
    database_path: Path = BACKEND_DIR / "data" / "inspections.db"

    # Documentation Configuration
    docs_html_path: Path = BACKEND_DIR / "public" / "scalar-docs.html"


# Global settings instance
settings = Settings()

"""Configuration management for the NFT Club User API."""

import os
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


def _get_env_file_path() -> str:
    """Get the path to the .env file.

    Checks for ENV_FILE environment variable first, then defaults to
    .env in the API project directory (apps/api/.env).

    Returns:
        Path to the .env file
    """
    env_file = os.getenv("ENV_FILE")
    if env_file:
        return env_file

    # apps/api/src/nftclub_api/config.py -> apps/api/
    api_dir = Path(__file__).parent.parent.parent
    return str(api_dir / ".env")


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "nftclub-user-api"
    app_version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "info"

    # API
    api_host: str = "localhost"
    api_port: int = 8000

    # UI / CORS
    ui_url: str = "http://localhost:5173"
    cors_extra_origins: list[str] = []

    # User store
    user_store_backend: Literal["memory", "cosmos"] = "memory"

    # Azure Cosmos DB
    azure_cosmosdb_endpoint: str | None = None
    azure_cosmosdb_key: str | None = None
    database_name: str = "nftclub"
    cosmos_users_container: str = "users"

    # Static descriptors (JSON object keyed by resource name)
    static_responses_file: str | None = None

    # scrypt cost factor for password hashes
    password_hash_n: int = 2**14

    model_config = SettingsConfigDict(
        env_file=_get_env_file_path(),
        case_sensitive=False,
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()

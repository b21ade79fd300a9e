"""
Application configuration using Pydantic Settings.

Automatically loads environment variables (prefixed ``DOC_COMPARE_``)
and an optional .env file.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Matches the upload ceiling of the original frontend contract (10 MB)
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Reference document read once at startup
    reference_path: Path = Path("standard_file.pdf")

    # Uploads
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES

    # HTTP
    cors_origins: list[str] = ["*"]
    host: str = "0.0.0.0"
    port: int = 5000

    # Logging / debug flags
    log_level: str = "INFO"
    debug: bool = False

    model_config = SettingsConfigDict(
        env_prefix="DOC_COMPARE_",
        # Load from .env file in the package directory
        env_file=Path(__file__).parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        # Case insensitive environment variable names
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration loaded from environment.
    """
    return Settings()

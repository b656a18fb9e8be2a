"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="LENS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Doctrine
    blueprint_id: int = Field(default=39, ge=0, description="Blueprint ID of this deployment")
    doctrine_version: str = Field(default="2.0.0", description="Barton doctrine version")
    submodule_marker: str = Field(
        default="modules", min_length=1, description="Path segment preceding the submodule directory"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Reports
    report_indent: int = Field(default=2, ge=0, le=8, description="JSON indent for exported reports")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

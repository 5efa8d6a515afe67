"""Configuration management for spendwise."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Backend export read by the CLI
    snapshot_path: Path = Path.home() / ".spendwise" / "snapshot.json"

    # Budget alerts
    budget_alert_threshold: float = Field(default=0.8, gt=0.0, le=1.0)

    # Balances with an absolute value below this are shown as settled
    settled_tolerance: float = Field(default=1.0, ge=0.0)

    # Categorization settings
    fallback_category: str = "Others"
    auto_categorize: bool = True  # Fill blank transaction categories on load

    # Analytics
    trend_months: int = Field(default=6, ge=1)


def load_settings() -> Settings:
    """Load application settings from environment variables."""
    try:
        return Settings()
    except Exception as e:
        raise ConfigurationError(
            f"Failed to load settings. Check the variables set in your "
            f"environment or .env file.\n"
            f"Error: {e}"
        ) from e

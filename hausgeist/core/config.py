"""Configuration management for hausgeist."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Constants:
    """Application-wide constants."""

    # Chore rewards
    DEFAULT_TASK_POINTS: int = 5

    # Summary rendering
    OVERDUE_PREVIEW_LIMIT: int = 3

    # Query defaults
    DEFAULT_PER_PAGE_LIMIT: int = 100

    # Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent.parent
    DEFAULT_RULES_PATH: Path = PROJECT_ROOT / "config" / "rules.yaml"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Task store
    sqlite_db_path: str = Field(default="hausgeist.db", description="Path to the SQLite task database")

    # Rules engine
    rules_config_path: str = Field(
        default=str(Constants.DEFAULT_RULES_PATH), description="Path to the YAML document holding reminder rules"
    )

    # Household vocabulary
    family_members: list[str] = Field(
        default=["ira", "isha", "papa", "mama", "family"],
        description="Lowercase names recognized as task owners in chat messages",
    )
    default_owner: str = Field(default="Family", description="Owner used when a message names nobody")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")

    # OpenRouter Configuration
    openrouter_api_key: str | None = Field(default=None, description="OpenRouter API key for the chat agent")
    model_id: str = Field(
        default="anthropic/claude-3.5-sonnet",
        description="Model ID for OpenRouter (defaults to Claude 3.5 Sonnet)",
    )

    def require_credential(self, field_name: str, service_name: str) -> str:
        """Validate that a required credential is set, raising a clear error if missing.

        Args:
            field_name: Name of the field to check
            service_name: Human-readable service name for error message

        Returns:
            The credential value

        Raises:
            ValueError: If the credential is None or empty
        """
        value = getattr(self, field_name)
        if not value:
            raise ValueError(
                f"{service_name} credential not configured. "
                f"Set {field_name.upper()} environment variable or add to .env file."
            )
        return value


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()

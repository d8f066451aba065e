"""Application configuration using pydantic-settings.

Provides a centralized Settings class for all environment variables.
"""

from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings are loaded from .env file and environment variables.
    Environment variables take precedence over .env file values.
    """

    # Reference store (users, labels, milestones)
    reference_db_path: str = "data/references.db"

    # Timezone used to decide what "today" means for due dates
    timezone: str = "UTC"

    # Logging
    log_level: str = "INFO"
    structured_logging: bool = True

    # Observability
    logfire_token: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
        case_sensitive=False,  # Allow case-insensitive env var names
    )

    @property
    def tzinfo(self) -> ZoneInfo:
        """Get the configured timezone as a ZoneInfo.

        Returns:
            ZoneInfo for the configured timezone name.
        """
        return ZoneInfo(self.timezone)


# Singleton instance - import this in your code
settings = Settings()

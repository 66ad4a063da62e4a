"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/143.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Scraping settings
    scrape_timeout: int = 30
    scrape_concurrency: int = 4
    user_agent: str = DEFAULT_USER_AGENT

    # Date used by the Space Cinema API, e.g. "2026-02-09T00:00:00".
    # Defaults to today when unset.
    showing_date: str | None = None
    space_cinema_id: int = 1009

    # Output
    feeds_dir: str = "docs/feeds"
    log_level: str = "INFO"


# Global settings instance
settings = Settings()

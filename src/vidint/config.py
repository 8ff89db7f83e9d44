"""Configuration management for vidint."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from VIDINT_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="VIDINT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Service
    api_base_url: str = "https://videointelligence.googleapis.com"
    # v1beta1 is retired upstream but is the version whose time offsets are
    # integer microseconds. v1 sends Duration strings ("2.5s"), which the
    # models would first have to convert to microseconds.
    api_version: str = "v1beta1"

    # Credentials (either one, obtained out of band)
    access_token: str | None = None
    api_key: str | None = None

    # Polling
    http_timeout: float = 30.0
    poll_interval: float = 5.0
    max_poll_time: float | None = None  # None waits indefinitely

    # Logging
    log_level: str = "WARNING"


# Global settings instance
settings = Settings()

"""Configuration management using Pydantic Settings."""

from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Security: the bot token is stored as SecretStr to prevent accidental logging.
    Use .get_secret_value() to access the actual value when needed.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Telegram
    telegram_bot_token: SecretStr = Field(
        ...,
        description="Telegram Bot API token from @BotFather",
    )
    bot_username: str | None = Field(
        default=None,
        description="Bot username, stripped from commands like /menu@username",
    )

    def __repr__(self) -> str:
        """Safe representation that hides secrets."""
        return (
            f"Settings(telegram_bot_token=SecretStr('***'), "
            f"command_prefixes={self.command_prefixes}, "
            f"app_version='{self.app_version}')"
        )

    # Commands
    command_prefixes: list[str] = Field(
        default_factory=lambda: [".", "!", "/"],
        description="Recognized command prefixes, tried in order",
    )
    groups_only: bool = Field(
        default=False,
        description="Ignore messages from private chats",
    )

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable rate limiting",
    )
    rate_limit_scope: Literal["all", "commands"] = Field(
        default="all",
        description="Apply rate limiting to every message or only to parsed commands",
    )
    rate_limit_user_cooldown: float = Field(
        default=3.0,
        description="Minimum seconds between two actions of the same sender",
    )
    rate_limit_chat_limit: int = Field(
        default=20,
        description="Maximum actions per chat inside the sliding window",
    )
    rate_limit_chat_window: float = Field(
        default=60.0,
        description="Sliding window length in seconds for the per-chat limit",
    )
    rate_limit_cleanup_interval: float = Field(
        default=300.0,
        description="Seconds between rate limiter garbage collection passes",
    )

    # Games
    game_timeout: float = Field(
        default=30.0,
        description="Seconds before an unanswered game round expires",
    )
    leaderboard_reset_days: int = Field(
        default=7,
        description="Days between full leaderboard resets",
    )

    # Persistence
    leaderboard_file: str = Field(
        default="data/leaderboard.json",
        description="Path of the leaderboard JSON document",
    )
    warnings_file: str = Field(
        default="data/warnings.json",
        description="Path of the member warnings JSON document",
    )
    autotag_file: str = Field(
        default="data/autotag.json",
        description="Path of the auto-tag preferences JSON document",
    )
    store_autosave_interval: float = Field(
        default=300.0,
        description="Seconds between periodic leaderboard saves",
    )

    # Moderation
    warn_kick_threshold: int = Field(
        default=3,
        description="Number of warnings after which a member is removed",
    )

    # Link shortener
    shortener_api_url: str = Field(
        default="https://tinyurl.com/api-create.php",
        description="TinyURL-compatible API endpoint",
    )
    shortener_timeout: float = Field(
        default=10.0,
        description="Timeout in seconds for link shortener requests",
    )

    # Telegram Retry Settings
    telegram_max_retries: int = Field(
        default=3,
        description="Maximum retry attempts for Telegram API calls",
    )
    telegram_retry_base_delay: float = Field(
        default=1.0,
        description="Base delay in seconds for exponential backoff",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    # Shutdown
    shutdown_timeout: int = Field(
        default=30,
        description="Timeout in seconds for graceful shutdown",
    )

    # Application
    app_name: str = Field(
        default="Chisa Bot",
        description="Application name",
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version",
    )


def get_settings() -> Settings:
    """Get settings instance.

    Settings are loaded from environment variables and .env file.
    """
    return Settings()  # type: ignore[call-arg]

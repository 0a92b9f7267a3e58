"""Configuration management for the relay bot.

Handles all application configuration loaded from environment variables. The
settings object is built once at process start, is immutable afterwards and
is passed explicitly to every component that needs it.
"""

import logging
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en-US"


class ConfigError(ValueError):
    """Raised when bundled configuration data cannot be loaded."""


class BotConfig(BaseSettings):
    """Telegram relay bot configuration.

    Required values (secret, admin alias, channel id, bot token) default to
    None so that the process can start and report what is missing through the
    health endpoint. The configuration gate refuses webhook requests until
    they are all present.

    Attributes:
        telegram_secret: Shared secret expected in the webhook header.
        admin_alias: Telegram username (without @) users are pointed to.
        forward_channel_id: Destination channel id or @channel username.
        bot_token: Telegram bot API token.
        allowed_telegram_ids: Sender ids permitted to forward media.
        language: Active language tag for bot-facing text.
        environment: Deployment environment name reported by health checks.
        version: Deployed version reported by health checks.
        webhook_url: Public webhook URL registered with Telegram at startup.
        listen_host: Interface the HTTP server binds to.
        port: Port the HTTP server listens on.
        log_level: Root logging level.
    """

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    telegram_secret: str | None = Field(default=None, validation_alias="TELEGRAM_SECRET")
    admin_alias: str | None = Field(default=None, validation_alias="ADMIN_TELEGRAM_ALIAS")
    forward_channel_id: str | None = Field(default=None, validation_alias="FORWARD_CHANNEL_ID")
    bot_token: str | None = Field(default=None, validation_alias="BOT_TOKEN")
    allowed_telegram_ids: Annotated[frozenset[int], NoDecode] = Field(
        default=frozenset(), validation_alias="ALLOWED_TELEGRAM_IDS"
    )
    language: str | None = Field(default=None, validation_alias="LANGUAGE")
    environment: str = Field(default="production", validation_alias="ENVIRONMENT")
    version: str = Field(default="unknown", validation_alias="APP_VERSION")
    webhook_url: str | None = Field(default=None, validation_alias="WEBHOOK_URL")
    listen_host: str = Field(default="127.0.0.1", validation_alias="BOT_LISTEN_HOST")
    port: int = Field(default=8000, validation_alias="PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @field_validator("allowed_telegram_ids", mode="before")
    @classmethod
    def _parse_allowed_ids(cls, value: Any) -> Any:
        """Parse a comma separated list of numeric sender ids.

        Blank entries are ignored and non-numeric entries are skipped with a
        warning, so a typo never locks every sender out at startup.
        """
        if value is None:
            return frozenset()
        if not isinstance(value, str):
            return value

        ids: set[int] = set()
        for chunk in value.split(","):
            item = chunk.strip()
            if not item:
                continue
            try:
                ids.add(int(item))
            except ValueError:
                logger.warning("Skipping invalid ALLOWED_TELEGRAM_IDS entry: %r", item)
        return frozenset(ids)

    @field_validator("telegram_secret", "admin_alias", "forward_channel_id", "bot_token", mode="before")
    @classmethod
    def _blank_as_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def health_flags(self) -> dict[str, bool]:
        """Summarize presence of every required setting.

        Returns:
            Mapping of flag name to whether the setting is present.
        """
        return {
            "hasSecret": bool(self.telegram_secret),
            "hasAdmin": bool(self.admin_alias),
            "hasChannel": bool(self.forward_channel_id),
            "hasToken": bool(self.bot_token),
            "hasWhitelist": len(self.allowed_telegram_ids) > 0,
        }

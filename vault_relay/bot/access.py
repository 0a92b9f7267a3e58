"""Request access checks.

Configuration gate, webhook secret validation and the sender allow-list.
"""

import secrets

from ..config import BotConfig
from ..models import ConfigValidation
from .context import RequestContext

INTERNAL_ERROR = "Internal Server Error"
UNAUTHORIZED_ERROR = "Unauthorized"

REQUIRED_SETTINGS = {
    "telegram_secret": "TELEGRAM_SECRET",
    "admin_alias": "ADMIN_TELEGRAM_ALIAS",
    "forward_channel_id": "FORWARD_CHANNEL_ID",
    "bot_token": "BOT_TOKEN",
}


def validate_config(config: BotConfig, ctx: RequestContext) -> ConfigValidation:
    """Check that every required setting is present.

    Args:
        config: Process configuration.
        ctx: Request context for correlated logging.

    Returns:
        Validation outcome listing the missing environment variables.
    """
    missing = [env for field, env in REQUIRED_SETTINGS.items() if not getattr(config, field)]

    if missing:
        ctx.log.error("Missing required environment variables: %s", ", ".join(missing))
        return ConfigValidation(is_valid=False, missing=missing, error=INTERNAL_ERROR)

    return ConfigValidation(is_valid=True)


def validate_secret(config: BotConfig, request_secret: str | None, ctx: RequestContext) -> bool:
    """Compare the webhook secret header against the configured secret."""
    expected = config.telegram_secret or ""
    if request_secret is None or not secrets.compare_digest(request_secret.encode(), expected.encode()):
        ctx.log.warning("Invalid secret token (header present: %s)", request_secret is not None)
        return False
    return True


def is_authorized(config: BotConfig, sender_id: int) -> bool:
    return sender_id in config.allowed_telegram_ids

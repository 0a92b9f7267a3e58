"""HTTP endpoints.

FastAPI application exposing the Telegram webhook and a health check. The
endpoints only translate between HTTP and the webhook processor; all
decisions are made in ``vault_relay.bot.webhook``.
"""

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Header, Request
from fastapi.responses import JSONResponse
from telegram import Bot

from .core.container import Container

logger = logging.getLogger(__name__)

WEBHOOK_PATH = "/api/telegram/webhook"
HEALTH_PATH = "/api/telegram/health"
ALLOWED_UPDATES = ["message"]


async def initialize_bot(bot: Bot) -> bool:
    """Initialize the bot client, logging instead of failing when Telegram is unreachable."""
    try:
        await bot.initialize()
    except Exception as e:
        logger.error("Failed to initialize bot client: %s", e)
        return False
    return True


async def register_webhook(container: Container) -> None:
    """Point Telegram at the configured webhook URL, if one is set."""
    settings = container.settings()
    bot = container.bot()
    if not settings.webhook_url or bot is None:
        logger.info("WEBHOOK_URL not set; leaving webhook registration unchanged")
        return

    try:
        await bot.set_webhook(
            url=settings.webhook_url,
            secret_token=settings.telegram_secret,
            allowed_updates=ALLOWED_UPDATES,
        )
        logger.info("Webhook registered at %s", settings.webhook_url)
    except Exception as e:
        logger.warning("Failed to register webhook: %s", e)


def create_app(container: Container | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        container: Wired components, a fresh container if omitted.

    Returns:
        Application with webhook and health routes.
    """
    container = container or Container()
    # Fail at startup on broken locale files, not on the first request.
    container.translator()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        bot = container.bot()
        initialized = bot is not None and await initialize_bot(bot)
        if initialized:
            await register_webhook(container)
        yield
        if initialized:
            await bot.shutdown()

    app = FastAPI(title="Vault Relay Bot", lifespan=lifespan)
    app.state.container = container

    @app.post(WEBHOOK_PATH)
    async def telegram_webhook(
        request: Request,
        x_telegram_bot_api_secret_token: str | None = Header(default=None),
    ) -> JSONResponse:
        processor = container.webhook_processor()
        body = await request.body()
        result = await processor.handle(body, x_telegram_bot_api_secret_token)
        return JSONResponse(result.body, status_code=result.status_code)

    @app.get(HEALTH_PATH)
    async def health() -> JSONResponse:
        settings = container.settings()
        flags = settings.health_flags()
        is_healthy = all(flags.values())
        payload = {
            "status": "healthy" if is_healthy else "unhealthy",
            "timestamp": datetime.now(UTC).isoformat(),
            "environment": settings.environment,
            "version": settings.version,
            "config": flags,
        }
        return JSONResponse(payload, status_code=200 if is_healthy else 503)

    return app

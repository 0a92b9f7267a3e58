"""Global test configuration and fixtures.

Provides synthetic configurations, a mocked Telegram bot and the pipeline
components wired to them. Environment variables read by the application are
cleared for every test so results never depend on the host environment.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from dependency_injector import providers

from tests.factories import make_config
from vault_relay.bot.commands import CommandDispatcher
from vault_relay.bot.forwarding import Forwarder
from vault_relay.bot.notifications import Notifier
from vault_relay.bot.translations import Translator
from vault_relay.bot.webhook import WebhookProcessor
from vault_relay.config import BotConfig
from vault_relay.core.container import Container

APP_ENV_VARS = (
    "TELEGRAM_SECRET",
    "ADMIN_TELEGRAM_ALIAS",
    "FORWARD_CHANNEL_ID",
    "BOT_TOKEN",
    "ALLOWED_TELEGRAM_IDS",
    "LANGUAGE",
    "ENVIRONMENT",
    "APP_VERSION",
    "WEBHOOK_URL",
    "BOT_LISTEN_HOST",
    "PORT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def test_environment(monkeypatch):
    """Remove application environment variables for every test."""
    for name in APP_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def bot_config() -> BotConfig:
    """Fully populated configuration with a single allow-listed sender."""
    return make_config()


@pytest.fixture
def translator() -> Translator:
    return Translator("en-US")


@pytest.fixture
def mock_bot():
    """Mock Telegram bot recording outbound API calls."""
    bot = MagicMock()
    bot.send_message = AsyncMock()
    bot.forward_message = AsyncMock(return_value=MagicMock(message_id=777))
    bot.set_message_reaction = AsyncMock(return_value=True)
    bot.set_webhook = AsyncMock(return_value=True)
    bot.initialize = AsyncMock()
    bot.shutdown = AsyncMock()
    bot.username = "VaultRelayBot"
    return bot


@pytest.fixture
def notifier(mock_bot, bot_config, translator) -> Notifier:
    return Notifier(mock_bot, bot_config, translator)


@pytest.fixture
def forwarder(mock_bot, bot_config, notifier) -> Forwarder:
    return Forwarder(mock_bot, bot_config.forward_channel_id, notifier)


@pytest.fixture
def dispatcher(mock_bot, translator) -> CommandDispatcher:
    return CommandDispatcher(mock_bot, translator)


@pytest.fixture
def processor(bot_config, dispatcher, forwarder, notifier) -> WebhookProcessor:
    return WebhookProcessor(bot_config, dispatcher, forwarder, notifier)


@pytest.fixture
def container(bot_config, mock_bot):
    """Application container wired to the synthetic config and mocked bot."""
    container = Container()
    container.settings.override(providers.Object(bot_config))
    container.bot.override(providers.Object(mock_bot))
    yield container
    container.reset_override()

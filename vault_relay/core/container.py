"""Dependency-injection container.

This module defines a dependency-injection (DI) container that wires together
the application's components. Configuration is read once, when the settings
provider is first resolved, and the same immutable instance is handed to every
component, which keeps business logic free of environment lookups and lets
tests substitute synthetic configurations through provider overrides.
"""

from dependency_injector import containers, providers
from telegram import Bot

from vault_relay.bot.commands import CommandDispatcher
from vault_relay.bot.forwarding import Forwarder
from vault_relay.bot.notifications import Notifier
from vault_relay.bot.translations import Translator
from vault_relay.bot.webhook import WebhookProcessor
from vault_relay.config import BotConfig


def build_bot(token: str | None) -> Bot | None:
    """Create the bot client, or None when no token is configured."""
    if not token:
        return None
    return Bot(token)


class Container(containers.DeclarativeContainer):
    """DI container for the application.

    This container holds the wiring for all the application's components.
    """

    settings = providers.Singleton(BotConfig)

    bot = providers.Singleton(build_bot, token=settings.provided.bot_token)
    translator = providers.Singleton(Translator, language=settings.provided.language)

    # Pipeline components
    notifier = providers.Singleton(Notifier, bot=bot, config=settings, translator=translator)
    command_dispatcher = providers.Singleton(CommandDispatcher, bot=bot, translator=translator)
    forwarder = providers.Singleton(
        Forwarder,
        bot=bot,
        channel_id=settings.provided.forward_channel_id,
        notifier=notifier,
    )
    webhook_processor = providers.Singleton(
        WebhookProcessor,
        config=settings,
        dispatcher=command_dispatcher,
        forwarder=forwarder,
        notifier=notifier,
    )

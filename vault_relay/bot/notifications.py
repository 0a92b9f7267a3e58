"""Best-effort side calls to Telegram.

Reactions and user notices never decide the outcome of a request. They run
through ``best_effort``, which logs any failure and reports it as False.
"""

from collections.abc import Awaitable, Callable

from telegram import Bot, ReactionTypeEmoji

from ..config import BotConfig
from ..models import MessageType
from .context import RequestContext
from .translations import TranslationKey, Translator

POSITIVE_REACTION = "👍"
NEGATIVE_REACTION = "👎"


async def best_effort(
    call: Callable[[], Awaitable[object]], ctx: RequestContext, action: str, **fields: object
) -> bool:
    """Await a side call, converting any failure into a logged False.

    Args:
        call: Zero-argument callable starting the SDK call.
        ctx: Request context for correlated logging.
        action: Short description used in the log line.
        **fields: Identifiers included in the log line.

    Returns:
        True if the call completed, False if it raised.
    """
    try:
        await call()
    except Exception as e:
        details = ", ".join(f"{k}={v}" for k, v in fields.items())
        ctx.log.error("Failed to %s (%s): %s", action, details, e)
        return False
    return True


class Notifier:
    """Sends reactions and localized notices on behalf of the pipeline."""

    def __init__(self, bot: Bot, config: BotConfig, translator: Translator):
        self.bot = bot
        self.config = config
        self.translator = translator

    async def react(self, chat_id: int, message_id: int, emoji: str, ctx: RequestContext) -> bool:
        return await best_effort(
            lambda: self.bot.set_message_reaction(
                chat_id=chat_id,
                message_id=message_id,
                reaction=[ReactionTypeEmoji(emoji)],
            ),
            ctx,
            "add reaction to original message",
            chat_id=chat_id,
            message_id=message_id,
            emoji=emoji,
        )

    async def send_unauthorized_message(self, sender_id: int, ctx: RequestContext) -> bool:
        ctx.log.warning("Unauthorized sender %s", sender_id)
        text = self.translator.translate(
            TranslationKey.UNAUTHORIZED,
            {"adminAlias": self.config.admin_alias, "senderId": sender_id},
        )
        return await best_effort(
            lambda: self.bot.send_message(chat_id=sender_id, text=text),
            ctx,
            "send unauthorized message",
            sender_id=sender_id,
        )

    async def send_unsupported_message_type(
        self, sender_id: int, message_type: MessageType, ctx: RequestContext
    ) -> bool:
        ctx.log.info("Unsupported message type received from %s: %s", sender_id, message_type.value)
        text = self.translator.translate(TranslationKey.UNSUPPORTED_MESSAGE_TYPE)
        return await best_effort(
            lambda: self.bot.send_message(chat_id=sender_id, text=text),
            ctx,
            "send unsupported message type response",
            sender_id=sender_id,
        )

    async def send_forward_failed(self, sender_id: int, ctx: RequestContext) -> bool:
        text = self.translator.translate(TranslationKey.FORWARD_FAILED)
        return await best_effort(
            lambda: self.bot.send_message(chat_id=sender_id, text=text),
            ctx,
            "send error message to user",
            sender_id=sender_id,
        )

"""Forwarding engine.

Forwards an authorized message to the destination channel at most once and
reacts to the original message with the outcome. Reactions are attempted on
failure as well, and a failed reaction never changes the forwarding result.
"""

from telegram import Bot, Message

from ..models import ForwardResult, MessageType
from .context import RequestContext
from .notifications import NEGATIVE_REACTION, POSITIVE_REACTION, Notifier

FORWARD_ERROR = "Failed to forward message"


class Forwarder:
    """Forwards messages to the configured channel."""

    def __init__(self, bot: Bot, channel_id: str | int, notifier: Notifier):
        self.bot = bot
        self.channel_id = channel_id
        self.notifier = notifier

    async def forward_message(
        self,
        message: Message,
        ctx: RequestContext,
        sender_id: int,
        message_type: MessageType,
    ) -> ForwardResult:
        """Forward a message and apply the outcome reaction.

        Args:
            message: Original message in its source chat.
            ctx: Request context.
            sender_id: Telegram user id of the sender.
            message_type: Classified media type, used for logging.

        Returns:
            ForwardResult with success=False only when the forward call failed.
        """
        chat_id = message.chat.id
        message_id = message.message_id
        ctx.log.info(
            "Forwarding %s message %s from chat %s (sender %s) to channel %s",
            message_type.value,
            message_id,
            chat_id,
            sender_id,
            self.channel_id,
        )

        try:
            forwarded = await self.bot.forward_message(
                chat_id=self.channel_id,
                from_chat_id=chat_id,
                message_id=message_id,
            )
        except Exception as e:
            ctx.log.error(
                "Error forwarding %s message %s from chat %s (sender %s): %s",
                message_type.value,
                message_id,
                chat_id,
                sender_id,
                e,
            )
            await self.notifier.react(chat_id, message_id, NEGATIVE_REACTION, ctx)
            await self.notifier.send_forward_failed(sender_id, ctx)
            return ForwardResult(success=False, error=FORWARD_ERROR)

        await self.notifier.react(chat_id, message_id, POSITIVE_REACTION, ctx)

        forwarded_id = forwarded.message_id
        ctx.log.info(
            "Message forwarded successfully (sender %s, type %s, forwarded_message_id %s)",
            sender_id,
            message_type.value,
            forwarded_id,
        )
        return ForwardResult(
            success=True,
            forwarded_message_id=forwarded_id,
        )

"""Inbound update classification.

Extracts the message and sender from a parsed update, detects commands and
determines the media type of a message.
"""

from telegram import Message, Update

from ..models import InvalidMessage, MessageType, NonMessageUpdate, SenderMessage, UpdateValidation
from .context import RequestContext

COMMAND_PREFIX = "/"

# Checked in order; the first populated attachment wins.
MEDIA_PRIORITY: tuple[tuple[str, MessageType], ...] = (
    ("video", MessageType.VIDEO),
    ("audio", MessageType.AUDIO),
    ("photo", MessageType.PHOTO),
    ("video_note", MessageType.VIDEO_NOTE),
    ("voice", MessageType.VOICE),
)


def validate_message(update: Update, ctx: RequestContext) -> UpdateValidation:
    """Split an update into its message and sender.

    Args:
        update: Parsed Telegram update.
        ctx: Request context for correlated logging.

    Returns:
        NonMessageUpdate when the update has no message payload,
        InvalidMessage when the message has no sender id, otherwise
        SenderMessage.
    """
    message = update.message
    if message is None:
        ctx.log.info("Non-message update received, ignoring")
        return NonMessageUpdate()

    sender = message.from_user
    if sender is None or not sender.id:
        ctx.log.warning(
            "Invalid message structure - missing sender ID (chat_id=%s, message_id=%s)",
            message.chat.id,
            message.message_id,
        )
        return InvalidMessage()

    return SenderMessage(message=message, sender_id=sender.id)


def get_message_type(message: Message) -> MessageType:
    """Return the media type of a message, or UNSUPPORTED if it carries none."""
    for attribute, message_type in MEDIA_PRIORITY:
        if getattr(message, attribute, None):
            return message_type
    return MessageType.UNSUPPORTED


def is_command(message: Message) -> bool:
    text = message.text
    return bool(text) and text.startswith(COMMAND_PREFIX)

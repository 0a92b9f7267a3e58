"""Data models for the relay bot application.

Defines the value types passed between pipeline steps: the derived message
type, the outcome of validating an inbound update, and the results reported
by the configuration gate, the command dispatcher and the forwarding engine.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from telegram import Message


class MessageType(str, Enum):
    """Media kind of an inbound message, in classification priority order."""

    VIDEO = "video"
    AUDIO = "audio"
    PHOTO = "photo"
    VIDEO_NOTE = "video_note"
    VOICE = "voice"
    UNSUPPORTED = "unsupported"


class ConfigValidation(BaseModel):
    """Configuration gate outcome.

    Attributes:
        is_valid: True when every required setting is present.
        missing: Names of the required settings that are absent.
        error: Client-facing error text when invalid.
    """

    is_valid: bool
    missing: list[str] = []
    error: str | None = None


class NonMessageUpdate(BaseModel):
    """Update that carries no message payload; acknowledged and ignored."""


class InvalidMessage(BaseModel):
    """Message payload without a resolvable sender.

    Attributes:
        error: Client-facing description of the structural problem.
    """

    error: str = "Invalid message structure"


class SenderMessage(BaseModel):
    """Message with the numeric id of the user who sent it.

    Attributes:
        message: Parsed Telegram message.
        sender_id: Telegram user id of the sender.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    message: Message
    sender_id: int


UpdateValidation = NonMessageUpdate | InvalidMessage | SenderMessage


class CommandResult(BaseModel):
    """Command dispatch outcome.

    Attributes:
        handled: True when the command was recognized and the pipeline stops.
        error: Reply failure description, if the reply could not be sent.
    """

    handled: bool
    error: str | None = None


class ForwardResult(BaseModel):
    """Forwarding outcome.

    Attributes:
        success: Whether the message reached the destination channel.
        error: Client-facing error text on failure.
        forwarded_message_id: Id of the copy in the destination channel.
    """

    success: bool
    error: str | None = None
    forwarded_message_id: int | None = None

"""Text command dispatch.

Commands are answered directly in the originating chat and bypass the
allow-list. Unknown commands are left to the regular pipeline.
"""

from telegram import Bot, Message
from telegram.constants import ParseMode

from ..models import CommandResult
from .context import RequestContext
from .translations import TranslationKey, Translator


def parse_command(text: str | None, bot_username: str | None = None) -> str | None:
    """Return the lowercased command name of a message text.

    The first whitespace-delimited token is the command. A trailing mention
    (``/id@MyBot``) is stripped when it names this bot; commands addressed to
    any other bot, or to an unknown bot username, return None.
    """
    if not text:
        return None
    tokens = text.split()
    if not tokens:
        return None
    name, _, mention = tokens[0].partition("@")
    if mention and (not bot_username or mention.lower() != bot_username.lower()):
        return None
    return name.lower()


class CommandDispatcher:
    """Recognizes text commands and replies to them."""

    def __init__(self, bot: Bot, translator: Translator):
        self.bot = bot
        self.translator = translator
        self.handlers = {
            "/id": self.handle_id,
        }

    @property
    def bot_username(self) -> str | None:
        """Username of the bot, None until the client has been initialized."""
        try:
            return self.bot.username
        except RuntimeError:
            return None

    async def handle_command(self, message: Message, ctx: RequestContext, sender_id: int) -> CommandResult:
        """Dispatch a command message.

        Args:
            message: Message whose text starts with a command marker.
            ctx: Request context.
            sender_id: Telegram user id of the sender.

        Returns:
            handled=False for unrecognized commands. A failed reply is still
            reported as handled, with the error attached, so the webhook is
            acknowledged and Telegram does not redeliver the update.
        """
        command = parse_command(message.text, self.bot_username)
        handler = self.handlers.get(command) if command else None
        if handler is None:
            ctx.log.debug("Unrecognized command %r from %s", command, sender_id)
            return CommandResult(handled=False)

        ctx.log.info("Handling command %s from %s in chat %s", command, sender_id, message.chat.id)
        try:
            await handler(message, sender_id)
        except Exception as e:
            ctx.log.error("Failed to reply to command %s (chat_id=%s): %s", command, message.chat.id, e)
            return CommandResult(handled=True, error=str(e))

        return CommandResult(handled=True)

    async def handle_id(self, message: Message, sender_id: int) -> None:
        chat_id = message.chat.id
        text = "\n".join(
            [
                self.translator.translate(TranslationKey.COMMAND_ID_GROUP_ID, {"groupId": chat_id}),
                self.translator.translate(TranslationKey.COMMAND_ID_YOUR_ID, {"senderId": sender_id}),
            ]
        )
        await self.bot.send_message(chat_id=chat_id, text=text, parse_mode=ParseMode.MARKDOWN)

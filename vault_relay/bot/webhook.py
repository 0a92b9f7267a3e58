"""Webhook request orchestration.

Runs one inbound update through the pipeline and maps the outcome to an HTTP
status and JSON body. Steps run in strict order and each may end the request:

1. configuration gate      -> 500
2. secret header check     -> 401
3. non-message update      -> 200 (ignored)
4. missing sender id       -> 400
5. handled command         -> 200
6. sender not allow-listed -> notice, 200
7. unsupported media       -> notice, 200
8. forward                 -> 200 or 500

Only configuration and forwarding failures produce an error status. Telegram
redelivers updates that are not acknowledged, so everything else is answered
with 200.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from telegram import Update

from ..config import BotConfig
from ..models import InvalidMessage, MessageType, NonMessageUpdate
from . import access
from .classifier import get_message_type, is_command, validate_message
from .commands import CommandDispatcher
from .context import RequestContext
from .forwarding import Forwarder
from .notifications import Notifier


@dataclass(frozen=True)
class WebhookResponse:
    """HTTP status and JSON body returned to the webhook caller."""

    status_code: int
    body: dict[str, Any] = field(default_factory=lambda: {"success": True})

    @classmethod
    def ok(cls) -> "WebhookResponse":
        return cls(200)

    @classmethod
    def error(cls, status_code: int, message: str) -> "WebhookResponse":
        return cls(status_code, {"error": message})


class WebhookProcessor:
    """Sequences the relay pipeline for each webhook request."""

    def __init__(
        self,
        config: BotConfig,
        dispatcher: CommandDispatcher,
        forwarder: Forwarder,
        notifier: Notifier,
    ):
        self.config = config
        self.dispatcher = dispatcher
        self.forwarder = forwarder
        self.notifier = notifier

    async def handle(self, body: bytes | str, secret_token: str | None) -> WebhookResponse:
        """Process one webhook request.

        Args:
            body: Raw JSON request body.
            secret_token: Value of the X-Telegram-Bot-Api-Secret-Token header.

        Returns:
            Response to send back; never raises.
        """
        ctx = RequestContext()
        ctx.log.info("Webhook request started")

        try:
            config_validation = access.validate_config(self.config, ctx)
            if not config_validation.is_valid:
                return WebhookResponse.error(500, config_validation.error or access.INTERNAL_ERROR)

            if not access.validate_secret(self.config, secret_token, ctx):
                return WebhookResponse.error(401, access.UNAUTHORIZED_ERROR)

            payload = json.loads(body)
            if not isinstance(payload, dict) or "message" not in payload:
                ctx.log.info("Non-message update received, ignoring")
                return WebhookResponse.ok()

            update = Update.de_json(payload, None)
            return await self.process_update(update, ctx)

        except Exception:
            ctx.log.exception("Unexpected error processing webhook")
            return WebhookResponse.error(500, access.INTERNAL_ERROR)

    async def process_update(self, update: Update, ctx: RequestContext) -> WebhookResponse:
        ctx.log.debug(
            "Received update %s (type: %s)", update.update_id, "message" if update.message else "other"
        )

        validation = validate_message(update, ctx)
        if isinstance(validation, NonMessageUpdate):
            return WebhookResponse.ok()
        if isinstance(validation, InvalidMessage):
            return WebhookResponse.error(400, validation.error)

        message = validation.message
        sender_id = validation.sender_id
        message_type = get_message_type(message)
        ctx.log.info(
            "Processing message %s in chat %s from %s (type: %s)",
            message.message_id,
            message.chat.id,
            sender_id,
            message_type.value,
        )

        if is_command(message):
            command_result = await self.dispatcher.handle_command(message, ctx, sender_id)
            if command_result.handled:
                return WebhookResponse.ok()

        if not access.is_authorized(self.config, sender_id):
            await self.notifier.send_unauthorized_message(sender_id, ctx)
            return WebhookResponse.ok()

        if message_type is MessageType.UNSUPPORTED:
            await self.notifier.send_unsupported_message_type(sender_id, message_type, ctx)
            return WebhookResponse.ok()

        forward_result = await self.forwarder.forward_message(message, ctx, sender_id, message_type)
        if not forward_result.success:
            return WebhookResponse.error(500, forward_result.error or access.INTERNAL_ERROR)

        return WebhookResponse.ok()

"""Builders for synthetic configurations and raw webhook payloads."""

from itertools import count

from telegram import Message, Update

from vault_relay.config import BotConfig

TEST_SECRET = "test-webhook-secret"
TEST_ADMIN_ALIAS = "vaultadmin"
TEST_CHANNEL_ID = "-1009876543210"
TEST_BOT_TOKEN = "123456:TEST-TOKEN"
AUTHORIZED_ID = 111111111
STRANGER_ID = 999999999
GROUP_CHAT_ID = -1001234567890

MEDIA_FIELDS = {
    "video": {"file_id": "vid", "file_unique_id": "uvid", "width": 640, "height": 480, "duration": 5},
    "audio": {"file_id": "aud", "file_unique_id": "uaud", "duration": 120},
    "photo": [{"file_id": "pho", "file_unique_id": "upho", "width": 90, "height": 90}],
    "video_note": {"file_id": "vnote", "file_unique_id": "uvnote", "length": 240, "duration": 7},
    "voice": {"file_id": "voi", "file_unique_id": "uvoi", "duration": 3},
}

_ids = count(1)


def make_config(**overrides) -> BotConfig:
    values = {
        "telegram_secret": TEST_SECRET,
        "admin_alias": TEST_ADMIN_ALIAS,
        "forward_channel_id": TEST_CHANNEL_ID,
        "bot_token": TEST_BOT_TOKEN,
        "allowed_telegram_ids": frozenset({AUTHORIZED_ID}),
        "language": "en-US",
    }
    values.update(overrides)
    return BotConfig(**values)


def message_payload(
    sender_id: int | None = AUTHORIZED_ID,
    chat_id: int | None = None,
    chat_type: str | None = None,
    text: str | None = None,
    media: str | None = None,
    message_id: int = 42,
) -> dict:
    """Build a raw Telegram update dict carrying one message."""
    if chat_id is None:
        chat_id = sender_id if sender_id is not None else 1
    if chat_type is None:
        chat_type = "private" if chat_id > 0 else "supergroup"

    message: dict = {
        "message_id": message_id,
        "date": 1_700_000_000,
        "chat": {"id": chat_id, "type": chat_type},
    }
    if sender_id is not None:
        message["from"] = {"id": sender_id, "is_bot": False, "first_name": "Tester"}
    if text is not None:
        message["text"] = text
    if media is not None:
        message[media] = MEDIA_FIELDS[media]

    return {"update_id": next(_ids), "message": message}


def parse_message(payload: dict) -> Message:
    update = Update.de_json(payload, None)
    assert update is not None and update.message is not None
    return update.message

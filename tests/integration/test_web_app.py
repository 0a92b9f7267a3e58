"""HTTP-level tests for the webhook and health endpoints."""

from dependency_injector import providers
from fastapi.testclient import TestClient
from telegram.error import NetworkError

from tests.factories import AUTHORIZED_ID, TEST_CHANNEL_ID, TEST_SECRET, make_config, message_payload
from vault_relay.web import HEALTH_PATH, WEBHOOK_PATH, create_app

SECRET_HEADER = "X-Telegram-Bot-Api-Secret-Token"


def test_health_reports_healthy_config(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(HEALTH_PATH)

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["environment"] == "production"
    assert data["version"] == "unknown"
    assert all(data["config"].values())
    assert "timestamp" in data


def test_health_reports_missing_settings(container) -> None:
    container.settings.override(providers.Object(make_config(bot_token=None, allowed_telegram_ids=frozenset())))
    client = TestClient(create_app(container))

    response = client.get(HEALTH_PATH)

    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "unhealthy"
    assert data["config"]["hasToken"] is False
    assert data["config"]["hasWhitelist"] is False
    assert data["config"]["hasSecret"] is True


def test_webhook_forwards_authorized_photo(container, mock_bot) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        WEBHOOK_PATH,
        json=message_payload(media="photo", message_id=77),
        headers={SECRET_HEADER: TEST_SECRET},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}
    mock_bot.forward_message.assert_awaited_once_with(
        chat_id=TEST_CHANNEL_ID, from_chat_id=AUTHORIZED_ID, message_id=77
    )


def test_webhook_without_secret_is_unauthorized(container, mock_bot) -> None:
    client = TestClient(create_app(container))

    response = client.post(WEBHOOK_PATH, json=message_payload(media="photo"))

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}
    mock_bot.forward_message.assert_not_awaited()


def test_webhook_with_incomplete_config_is_server_error(container, mock_bot) -> None:
    container.settings.override(providers.Object(make_config(telegram_secret=None)))
    client = TestClient(create_app(container))

    response = client.post(
        WEBHOOK_PATH,
        json=message_payload(media="photo"),
        headers={SECRET_HEADER: TEST_SECRET},
    )

    assert response.status_code == 500
    mock_bot.forward_message.assert_not_awaited()


def test_startup_registers_webhook_when_configured(container, mock_bot) -> None:
    container.settings.override(
        providers.Object(make_config(webhook_url="https://relay.example.com/api/telegram/webhook"))
    )

    with TestClient(create_app(container)):
        pass

    mock_bot.initialize.assert_awaited_once()
    mock_bot.set_webhook.assert_awaited_once_with(
        url="https://relay.example.com/api/telegram/webhook",
        secret_token=TEST_SECRET,
        allowed_updates=["message"],
    )
    mock_bot.shutdown.assert_awaited_once()


def test_startup_skips_webhook_registration_without_url(container, mock_bot) -> None:
    with TestClient(create_app(container)):
        pass

    mock_bot.set_webhook.assert_not_awaited()


def test_startup_survives_webhook_registration_failure(container, mock_bot) -> None:
    container.settings.override(providers.Object(make_config(webhook_url="https://relay.example.com/hook")))
    mock_bot.set_webhook.side_effect = RuntimeError("Telegram unreachable")

    with TestClient(create_app(container)) as client:
        assert client.get(HEALTH_PATH).status_code == 200


def test_startup_survives_bot_initialization_failure(container, mock_bot) -> None:
    container.settings.override(providers.Object(make_config(webhook_url="https://relay.example.com/hook")))
    mock_bot.initialize.side_effect = NetworkError("api.telegram.org unreachable")

    with TestClient(create_app(container)) as client:
        assert client.get(HEALTH_PATH).status_code == 200

    mock_bot.set_webhook.assert_not_awaited()
    mock_bot.shutdown.assert_not_awaited()

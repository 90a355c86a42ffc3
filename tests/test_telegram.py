from unittest.mock import MagicMock, patch

from app.schemas.telegram import TelegramMessage, TelegramUpdate
from app.services.telegram_service import TelegramService


class TestTelegramSchemas:
    def test_parse_private_message(self):
        raw = {
            "update_id": 123456789,
            "message": {
                "message_id": 100,
                "date": 1702000000,
                "chat": {"id": 777, "type": "private", "username": "ada"},
                "from": {"id": 777, "is_bot": False, "first_name": "Ada"},
                "text": "I need a hotel in Lagos",
            },
        }

        update = TelegramUpdate(**raw)

        assert update.message.chat.id == 777
        assert update.message.from_user.first_name == "Ada"
        assert update.message.text == "I need a hotel in Lagos"

    def test_message_without_text(self):
        msg = TelegramMessage(message_id=1, date=1702000000, chat={"id": 1, "type": "private"})
        assert msg.text is None
        assert msg.from_user is None

    def test_minimal_update_parses(self):
        update = TelegramUpdate(**{"message": {"text": "hello", "chat": {"id": 7}, "from": {"id": 7}}})

        assert update.update_id is None
        assert update.message.message_id is None
        assert update.message.chat.type is None
        assert update.message.from_user.first_name is None
        assert update.message.chat.id == 7

    def test_unknown_fields_are_ignored(self):
        update = TelegramUpdate(update_id=5, edited_message={"message_id": 1})
        assert update.message is None


class TestTelegramService:
    @patch("app.services.telegram_service.httpx.Client")
    def test_send_message(self, mock_client_class):
        client = MagicMock()
        mock_client_class.return_value.__enter__.return_value = client
        client.post.return_value.json.return_value = {"ok": True}

        result = TelegramService("bot-token").send_message(777, "Hello")

        assert result == {"ok": True}
        url = client.post.call_args[0][0]
        assert url == "https://api.telegram.org/botbot-token/sendMessage"
        assert client.post.call_args[1]["json"] == {"chat_id": 777, "text": "Hello"}

    @patch("app.services.telegram_service.httpx.Client")
    def test_network_error_returns_not_ok(self, mock_client_class):
        mock_client_class.return_value.__enter__.side_effect = Exception("Network error")

        result = TelegramService("bot-token").send_message(777, "Hello")

        assert result["ok"] is False

    @patch("app.services.telegram_service.httpx.Client")
    def test_missing_token_skips_request(self, mock_client_class):
        result = TelegramService(None).send_message(777, "Hello")

        assert result == {"ok": False, "error": "missing_bot_token"}
        mock_client_class.assert_not_called()

from typing import Optional

import httpx

from app.logging_config import get_logger

logger = get_logger("telegram_service")


class TelegramService:
    """Outbound Bot API calls for the Telegram channel."""

    BASE_URL = "https://api.telegram.org/bot{token}"

    def __init__(self, bot_token: Optional[str], timeout_seconds: float = 30.0):
        self.bot_token = bot_token
        self.base_url = self.BASE_URL.format(token=bot_token)
        self.timeout_seconds = timeout_seconds

    def _make_request(self, method: str, data: Optional[dict] = None) -> dict:
        if not self.bot_token:
            logger.error(f"Telegram bot token missing, cannot call {method}")
            return {"ok": False, "error": "missing_bot_token"}

        url = f"{self.base_url}/{method}"
        try:
            with httpx.Client(timeout=self.timeout_seconds) as client:
                response = client.post(url, json=data or {})
                return response.json()
        except Exception as e:
            logger.error(f"Telegram API error: {e}")
            return {"ok": False, "error": str(e)}

    def send_message(self, chat_id, text: str, parse_mode: Optional[str] = None) -> dict:
        """Send plain text; model replies are not escaped for HTML, so no parse_mode by default."""
        data = {"chat_id": chat_id, "text": text}
        if parse_mode:
            data["parse_mode"] = parse_mode
        result = self._make_request("sendMessage", data)
        if not result.get("ok"):
            logger.warning(f"Telegram sendMessage failed: {result}")
        return result

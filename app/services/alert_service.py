"""Operator alerts for the on-call Telegram chat."""

from typing import Optional

from app.logging_config import get_logger
from app.services.telegram_service import TelegramService

logger = get_logger("alert_service")

LEVEL_MARKERS = {"WARNING": "⚠️", "ERROR": "❌"}
ALERT_TIMEOUT_SECONDS = 10.0


def format_alert_text(level: str, message: str, context: Optional[dict] = None) -> str:
    lines = [f"{LEVEL_MARKERS.get(level, '📢')} *{level}*", "", message]
    if context:
        details = "\n".join(f"{key}: {value}" for key, value in context.items())
        lines += ["", f"```\n{details}\n```"]
    return "\n".join(lines)


def notify_operators(
    level: str,
    message: str,
    context: Optional[dict] = None,
    *,
    bot_token: Optional[str] = None,
    chat_id: Optional[str] = None,
) -> bool:
    """Post an alert to the operators' chat. Returns False when alerting is off or Telegram refuses."""
    if not bot_token or not chat_id:
        logger.warning(f"Alerting disabled, dropping {level}: {message}")
        return False

    telegram = TelegramService(bot_token, timeout_seconds=ALERT_TIMEOUT_SECONDS)
    result = telegram.send_message(chat_id, format_alert_text(level, message, context), parse_mode="Markdown")
    return bool(result.get("ok"))

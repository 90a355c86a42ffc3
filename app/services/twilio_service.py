import base64
import hashlib
import hmac
import re
from typing import Mapping, Optional
from xml.sax.saxutils import escape

NIGERIA_PHONE_RE = re.compile(r"^\+234[0-9]{10}$")
WHATSAPP_PREFIX = "whatsapp:"


def normalize_sender(sender: Optional[str]) -> str:
    """Twilio WhatsApp senders arrive as 'whatsapp:+234...'."""
    value = (sender or "").strip()
    if value.lower().startswith(WHATSAPP_PREFIX):
        value = value[len(WHATSAPP_PREFIX):]
    return value


def is_valid_nigerian_phone(phone: Optional[str]) -> bool:
    return bool(NIGERIA_PHONE_RE.match(phone or ""))


def compute_signature(auth_token: str, url: str, params: Mapping[str, str]) -> str:
    data = url + "".join(f"{key}{params[key]}" for key in sorted(params))
    digest = hmac.new(auth_token.encode("utf-8"), data.encode("utf-8"), hashlib.sha1).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_signature(auth_token: str, url: str, params: Mapping[str, str], signature: Optional[str]) -> bool:
    if not signature:
        return False
    expected = compute_signature(auth_token, url, params)
    return hmac.compare_digest(expected, signature)


def render_twiml_message(text: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f"<Response><Message>{escape(text)}</Message></Response>"
    )

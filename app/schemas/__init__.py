from app.schemas.billing import CheckoutRequest, CheckoutResponse
from app.schemas.speech import SpeakFallbackResponse, SpeakRequest
from app.schemas.telegram import TelegramUpdate

__all__ = ["CheckoutRequest", "CheckoutResponse", "SpeakRequest", "SpeakFallbackResponse", "TelegramUpdate"]

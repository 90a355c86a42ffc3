from typing import Optional

import httpx

from app.logging_config import get_logger
from app.services.errors import SynthesisUnavailable

logger = get_logger("elevenlabs_service")

ELEVENLABS_TTS_URL = "https://api.elevenlabs.io/v1/text-to-speech/{voice_id}"
MODEL_ID = "eleven_multilingual_v2"
STABILITY = 0.7
SIMILARITY_BOOST = 0.7


class ElevenLabsSynthesizer:
    """Text-to-speech against a single fixed ElevenLabs voice."""

    def __init__(self, api_key: Optional[str], voice_id: str, timeout_seconds: float = 30.0):
        self.api_key = api_key
        self.voice_id = voice_id
        self.timeout_seconds = timeout_seconds

    def synthesize(self, text: str) -> bytes:
        if not self.api_key:
            raise SynthesisUnavailable("ElevenLabs API key is not configured")

        payload = {
            "text": text,
            "model_id": MODEL_ID,
            "voice_settings": {"stability": STABILITY, "similarity_boost": SIMILARITY_BOOST},
        }
        try:
            with httpx.Client(timeout=self.timeout_seconds) as client:
                response = client.post(
                    ELEVENLABS_TTS_URL.format(voice_id=self.voice_id),
                    headers={
                        "xi-api-key": self.api_key,
                        "Content-Type": "application/json",
                        "Accept": "audio/mpeg",
                    },
                    json=payload,
                )
        except httpx.HTTPError as e:
            raise SynthesisUnavailable(f"ElevenLabs transport error: {e}") from e

        if not response.is_success:
            logger.warning(f"ElevenLabs error: {response.status_code} - {response.text[:200]}")
            raise SynthesisUnavailable(f"ElevenLabs error: {response.status_code}")

        return response.content

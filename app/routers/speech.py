from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from app.config import Settings, get_settings
from app.dependencies import get_voice_cache
from app.logging_config import get_logger
from app.schemas.speech import SpeakFallbackResponse, SpeakRequest
from app.services.network import get_network_hint
from app.services.voice_cache import VoiceCache, synthesize_with_deadline

logger = get_logger("speech")

router = APIRouter()


@router.post("/speak")
async def speak(
    payload: SpeakRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
    voice_cache: VoiceCache = Depends(get_voice_cache),
):
    """Return audio/mpeg, or the text itself when synthesis is slow or down."""
    if not payload.text:
        return JSONResponse(status_code=400, content={"error": "text required"})

    hint = get_network_hint(request.headers.get("user-agent"))
    logger.debug(
        "Speak request",
        extra={"context": {"agent": payload.agent_type, "android": hint.is_android, "safari": hint.is_safari}},
    )

    audio = await synthesize_with_deadline(
        voice_cache, payload.text, payload.agent_type, settings.voice_deadline_seconds
    )
    if audio is None:
        return SpeakFallbackResponse(message=payload.text)

    return Response(content=audio, media_type="audio/mpeg")

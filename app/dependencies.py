"""Service factories injected with Depends; each one resolves Settings through get_settings."""

from functools import lru_cache
from typing import Optional

import redis
from fastapi import Depends

from app.config import Settings, get_settings
from app.database import SessionLocal
from app.logging_config import get_logger
from app.services.completion_service import CompletionService
from app.services.durable_write import DurableWriteRetrier
from app.services.elevenlabs_service import ElevenLabsSynthesizer
from app.services.llm import AnthropicProvider, ZaiProvider
from app.services.telegram_service import TelegramService
from app.services.voice_cache import VoiceCache

logger = get_logger("dependencies")

REDIS_SOCKET_TIMEOUT_SECONDS = 0.5


@lru_cache
def _redis_for_url(redis_url: str) -> redis.Redis:
    # One connection pool per URL for the life of the process.
    return redis.Redis.from_url(
        redis_url,
        decode_responses=True,
        socket_timeout=REDIS_SOCKET_TIMEOUT_SECONDS,
        socket_connect_timeout=REDIS_SOCKET_TIMEOUT_SECONDS,
    )


def get_retrier() -> DurableWriteRetrier:
    return DurableWriteRetrier(SessionLocal)


def get_completion_service(settings: Settings = Depends(get_settings)) -> CompletionService:
    return CompletionService(
        [
            ZaiProvider(
                api_key=settings.zai_api_key,
                model=settings.zai_model,
                base_url=settings.zai_base_url,
                timeout_seconds=settings.llm_timeout_seconds,
            ),
            AnthropicProvider(
                api_key=settings.claude_api_key,
                model=settings.claude_model,
                max_tokens=settings.claude_max_tokens,
                timeout_seconds=settings.llm_timeout_seconds,
            ),
        ]
    )


def get_redis_client(settings: Settings = Depends(get_settings)) -> Optional[redis.Redis]:
    if not settings.redis_url:
        logger.info("REDIS_URL not set, voice cache runs without a fast tier")
        return None
    return _redis_for_url(settings.redis_url)


def get_voice_cache(
    settings: Settings = Depends(get_settings),
    retrier: DurableWriteRetrier = Depends(get_retrier),
    cache: Optional[redis.Redis] = Depends(get_redis_client),
) -> VoiceCache:
    return VoiceCache(
        synthesizer=ElevenLabsSynthesizer(settings.elevenlabs_api_key, settings.elevenlabs_voice_id),
        retrier=retrier,
        cache=cache,
        ttl_seconds=settings.voice_cache_ttl_seconds,
    )


def get_telegram_service(settings: Settings = Depends(get_settings)) -> TelegramService:
    return TelegramService(settings.telegram_bot_token)

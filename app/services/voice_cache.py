import asyncio
import base64
import binascii
import hashlib
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, Protocol

from app.logging_config import get_logger
from app.services.durable_write import DurableWriteRetrier
from app.services.errors import SynthesisUnavailable
from app.services.network import compress_if_needed

logger = get_logger("voice_cache")

VOICE_CACHE_PREFIX = "voice"
VOICE_CACHE_TABLE = "voice_cache"
VOICE_CACHE_TTL_SECONDS = 60 * 60 * 24 * 14
STORAGE_TIER = "redis"

# Metadata inserts run here so a slow durable store never holds the audio response.
_metadata_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="voice-metadata")


class Synthesizer(Protocol):
    def synthesize(self, text: str) -> bytes: ...


def voice_fingerprint(agent: str, text: str) -> str:
    raw_key = f"{agent}:{text}"
    return hashlib.sha256(raw_key.encode("utf-8")).hexdigest()


def build_voice_cache_key(agent: str, fingerprint: str) -> str:
    return f"{VOICE_CACHE_PREFIX}:{agent}:{fingerprint}"


class VoiceCache:
    """Redis-fronted speech synthesis with write-back and audit metadata.

    Audio is stored base64-encoded in Redis only; the durable store gets the
    fingerprint, agent, tier and access count.
    """

    def __init__(
        self,
        synthesizer: Synthesizer,
        retrier: DurableWriteRetrier,
        cache=None,
        ttl_seconds: int = VOICE_CACHE_TTL_SECONDS,
        submit: Callable = _metadata_executor.submit,
    ):
        self.synthesizer = synthesizer
        self.retrier = retrier
        self.cache = cache
        self.ttl_seconds = ttl_seconds
        self.submit = submit

    def _read(self, key: str) -> Optional[bytes]:
        if self.cache is None:
            return None
        try:
            payload = self.cache.get(key)
        except Exception as exc:
            logger.warning(f"Voice cache read failed: {exc}")
            return None
        if not payload:
            return None
        try:
            return base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            logger.warning(f"Voice cache decode failed: {exc}")
            return None

    def _write(self, key: str, audio: bytes) -> None:
        if self.cache is None:
            return
        encoded = base64.b64encode(audio).decode("ascii")
        try:
            self.cache.setex(key, self.ttl_seconds, encoded)
        except Exception as exc:
            logger.warning(f"Voice cache write failed: {exc}")

    def synthesize(self, text: str, agent: str) -> bytes:
        fingerprint = voice_fingerprint(agent, text)
        key = build_voice_cache_key(agent, fingerprint)

        cached = self._read(key)
        if cached is not None:
            logger.debug(f"Voice cache hit: {key}")
            return cached

        audio = self.synthesizer.synthesize(text)
        optimized = compress_if_needed(audio)

        self._write(key, optimized)
        self.submit(
            self.retrier.write,
            VOICE_CACHE_TABLE,
            {
                "text_hash": fingerprint,
                "agent_type": agent,
                "storage": STORAGE_TIER,
                "access_count": 1,
            },
        )
        return optimized


async def synthesize_with_deadline(
    voice_cache: VoiceCache, text: str, agent: str, deadline_seconds: float
) -> Optional[bytes]:
    """Run synthesis in a worker thread; None means the caller should degrade to text.

    On timeout the thread is left to finish on its own, including its write-back.
    """
    try:
        return await asyncio.wait_for(
            asyncio.to_thread(voice_cache.synthesize, text, agent),
            timeout=deadline_seconds,
        )
    except asyncio.TimeoutError:
        logger.warning(
            "Voice synthesis deadline exceeded",
            extra={"context": {"agent": agent, "deadline_seconds": deadline_seconds}},
        )
    except SynthesisUnavailable as exc:
        logger.warning(f"Voice synthesis unavailable: {exc}", extra={"context": {"agent": agent}})
    return None

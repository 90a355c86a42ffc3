from app.services.agent_router import build_prompt, select_agent
from app.services.completion_service import CompletionService, generate_agent_reply
from app.services.durable_write import DurableWriteRetrier
from app.services.errors import (
    CompletionUnavailable,
    PaymentFailed,
    PersistenceFailed,
    ProviderError,
    RoutingDegraded,
    SynthesisUnavailable,
)
from app.services.voice_cache import VoiceCache, synthesize_with_deadline, voice_fingerprint

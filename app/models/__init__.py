from app.models.conversation_log import ConversationLog
from app.models.voice_cache import VoiceCacheMetadata

__all__ = [
    "ConversationLog",
    "VoiceCacheMetadata",
]

from dataclasses import asdict, dataclass

from app.services.durable_write import DurableWriteRetrier

CONVERSATIONS_TABLE = "conversations"


@dataclass(frozen=True)
class ConversationRecord:
    session_id: str
    platform: str  # whatsapp, telegram
    message: str
    response: str
    agent: str
    cost: int = 0


def log_conversation(retrier: DurableWriteRetrier, record: ConversationRecord) -> bool:
    """Append one exchange to the conversations table. Best effort."""
    return retrier.write(CONVERSATIONS_TABLE, asdict(record))

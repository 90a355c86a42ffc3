import uuid

from sqlalchemy import Column, Integer, Text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID
from sqlalchemy.sql import func

from app.database import Base


class VoiceCacheMetadata(Base):
    """Audit row for a synthesized clip. The audio itself lives only in Redis."""

    __tablename__ = "voice_cache"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    text_hash = Column(Text, nullable=False, index=True)
    agent_type = Column(Text, nullable=False)
    storage = Column(Text, nullable=False, default="redis")
    access_count = Column(Integer, nullable=False, default=1)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

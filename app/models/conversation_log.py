import uuid

from sqlalchemy import Column, Integer, Text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID
from sqlalchemy.sql import func

from app.database import Base


class ConversationLog(Base):
    __tablename__ = "conversations"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    session_id = Column(Text, nullable=False)  # +234... phone or tg_<chat_id>
    platform = Column(Text, nullable=False)  # whatsapp, telegram
    message = Column(Text, nullable=False)
    response = Column(Text, nullable=False)
    agent = Column(Text, nullable=False)  # LEXI, MISS, ATLAS, LEGAL
    cost = Column(Integer, nullable=False, default=0)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

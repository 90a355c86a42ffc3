from typing import Literal, Optional

from pydantic import BaseModel


class SpeakRequest(BaseModel):
    text: Optional[str] = None
    agent_type: str = "LEXI"


class SpeakFallbackResponse(BaseModel):
    status: Literal["text_fallback"] = "text_fallback"
    message: str

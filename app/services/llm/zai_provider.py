from typing import Optional

import httpx
from pydantic import BaseModel, ValidationError

from app.logging_config import get_logger
from app.services.errors import ProviderError
from app.services.llm.base import CompletionRequest, LLMProvider

logger = get_logger("llm.zai")


class _ChatMessage(BaseModel):
    content: Optional[str] = None


class _ChatChoice(BaseModel):
    message: _ChatMessage


class ChatCompletionResponse(BaseModel):
    choices: list[_ChatChoice]


class ZaiProvider(LLMProvider):
    """Z.ai chat completions (OpenAI-compatible schema)."""

    name = "zai"

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "glm-4.5",
        base_url: str = "https://api.z.ai/api/paas/v4/chat/completions",
        timeout_seconds: float = 30.0,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds

    def build_payload(self, request: CompletionRequest) -> dict:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": request.system_prompt},
                {"role": "user", "content": request.user_message},
            ],
        }

    def complete(self, request: CompletionRequest) -> str:
        if not self.api_key:
            raise ProviderError(self.name, "missing api key")

        payload = self.build_payload(request)
        logger.debug(f"Z.ai request: model={self.model}, chars={len(request.user_message)}")

        try:
            with httpx.Client(timeout=self.timeout_seconds) as client:
                response = client.post(
                    self.base_url,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    json=payload,
                )
        except httpx.HTTPError as e:
            raise ProviderError(self.name, f"transport error: {e}") from e

        if not response.is_success:
            logger.error(f"Z.ai error: {response.status_code} - {response.text[:200]}")
            raise ProviderError(self.name, f"status {response.status_code}")

        try:
            data = ChatCompletionResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ProviderError(self.name, f"malformed body: {e}") from e

        content = data.choices[0].message.content if data.choices else None
        if not content or not content.strip():
            raise ProviderError(self.name, "empty response")
        return content

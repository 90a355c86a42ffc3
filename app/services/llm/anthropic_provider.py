from typing import Optional

import httpx
from pydantic import BaseModel, ValidationError

from app.logging_config import get_logger
from app.services.errors import ProviderError
from app.services.llm.base import CompletionRequest, LLMProvider

logger = get_logger("llm.anthropic")

ANTHROPIC_VERSION = "2023-06-01"


class _ContentBlock(BaseModel):
    text: Optional[str] = None


class MessagesResponse(BaseModel):
    content: list[_ContentBlock]


class AnthropicProvider(LLMProvider):
    """Claude Messages API, used as the fallback backend."""

    name = "claude"

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "claude-3-5-sonnet-20240620",
        max_tokens: int = 400,
        timeout_seconds: float = 30.0,
    ):
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self.timeout_seconds = timeout_seconds
        self.base_url = "https://api.anthropic.com/v1/messages"

    def build_payload(self, request: CompletionRequest) -> dict:
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "system": request.system_prompt,
            "messages": [{"role": "user", "content": request.user_message}],
        }

    def complete(self, request: CompletionRequest) -> str:
        if not self.api_key:
            raise ProviderError(self.name, "missing api key")

        try:
            with httpx.Client(timeout=self.timeout_seconds) as client:
                response = client.post(
                    self.base_url,
                    headers={
                        "x-api-key": self.api_key,
                        "anthropic-version": ANTHROPIC_VERSION,
                        "content-type": "application/json",
                    },
                    json=self.build_payload(request),
                )
        except httpx.HTTPError as e:
            raise ProviderError(self.name, f"transport error: {e}") from e

        logger.debug(f"Claude response status: {response.status_code}")
        if not response.is_success:
            logger.error(f"Claude error: {response.status_code} - {response.text[:200]}")
            raise ProviderError(self.name, f"status {response.status_code}")

        try:
            data = MessagesResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ProviderError(self.name, f"malformed body: {e}") from e

        text = data.content[0].text if data.content else None
        if not text or not text.strip():
            raise ProviderError(self.name, "empty response")
        return text

from app.services.llm.anthropic_provider import AnthropicProvider
from app.services.llm.base import CompletionRequest, CompletionResult, LLMProvider
from app.services.llm.zai_provider import ZaiProvider

__all__ = [
    "AnthropicProvider",
    "CompletionRequest",
    "CompletionResult",
    "LLMProvider",
    "ZaiProvider",
]

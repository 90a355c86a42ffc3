from typing import Sequence

from app.logging_config import get_logger
from app.services.agent_router import build_prompt
from app.services.errors import CompletionUnavailable, ProviderError
from app.services.llm.base import CompletionRequest, CompletionResult, LLMProvider

logger = get_logger("completion_service")

PROVIDER_ROLES = ("primary", "secondary")


class CompletionService:
    """Try each provider once, in order, until one returns usable text."""

    def __init__(self, providers: Sequence[LLMProvider]):
        if not providers:
            raise ValueError("CompletionService needs at least one provider")
        self.providers = list(providers)

    def _role(self, index: int) -> str:
        return PROVIDER_ROLES[index] if index < len(PROVIDER_ROLES) else f"fallback_{index}"

    def complete(self, system_prompt: str, user_message: str) -> CompletionResult:
        request = CompletionRequest(system_prompt=system_prompt, user_message=user_message)
        failures: list[str] = []

        for index, provider in enumerate(self.providers):
            role = self._role(index)
            try:
                text = provider.complete(request)
            except ProviderError as e:
                failures.append(str(e))
                logger.warning(
                    f"{provider.name} failed, trying next provider",
                    extra={"context": {"provider": provider.name, "role": role, "error": e.reason}},
                )
                continue

            if index > 0:
                logger.info(
                    "Completion served by fallback provider",
                    extra={"context": {"provider": provider.name, "role": role}},
                )
            return CompletionResult(text=text, provider=role)

        logger.error("All completion providers failed", extra={"context": {"errors": failures}})
        raise CompletionUnavailable("; ".join(failures))


def generate_agent_reply(message: str, agent_id, completion_service: CompletionService) -> str:
    """Compose the agent's system prompt and complete the user's message."""
    result = completion_service.complete(build_prompt(agent_id), message)
    return result.text

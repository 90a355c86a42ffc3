from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class CompletionRequest:
    system_prompt: str
    user_message: str


@dataclass
class CompletionResult:
    text: str
    provider: str  # "primary" or "secondary"; for logs only


class LLMProvider(ABC):
    """One completion backend. Raises ProviderError on any unusable outcome."""

    name: str = "llm"

    @abstractmethod
    def complete(self, request: CompletionRequest) -> str:
        """Return the first completion's text. Never returns an empty string."""
        pass

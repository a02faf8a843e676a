"""LLM Base Classes and Shared Code"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


SYSTEM_PROMPT = "Act as an expert project manager. Your mission is to make a report on the changes made in the git repository for the client."


@dataclass
class Message:
    """One chat message. Role is 'system', 'user' or 'assistant'."""
    role: str
    content: str


@dataclass
class LLMResponse:
    """Structured response from the chat backend."""
    content: str
    model: str = ""
    prompt_tokens: int = 0
    completion_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


class LLMClient(ABC):
    """Abstract base for chat clients."""

    @abstractmethod
    def chat(self, messages: list[Message]) -> LLMResponse:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass

"""LLM Client Package"""

from lgh.llm.base import LLMClient, LLMResponse, LLMError, Message, SYSTEM_PROMPT
from lgh.llm.claude import ClaudeClient


def get_client(api_key: str | None = None, model: str | None = None) -> LLMClient:
    """Get the chat client used for summaries."""
    return ClaudeClient(api_key=api_key, model=model)


__all__ = [
    "LLMClient",
    "LLMResponse",
    "LLMError",
    "Message",
    "ClaudeClient",
    "get_client",
    "SYSTEM_PROMPT",
]

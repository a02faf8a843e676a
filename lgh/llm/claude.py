"""Claude (Anthropic) Chat Client"""

import logging
import os

from lgh.llm.base import LLMClient, LLMResponse, LLMError, Message

logger = logging.getLogger(__name__)


class ClaudeClient(LLMClient):
    """Claude API client. Key comes from the argument, then ANTHROPIC_API_KEY."""

    DEFAULT_MODEL = "claude-sonnet-4-20250514"
    MAX_TOKENS = 4096
    TEMPERATURE = 0.7

    def __init__(self, api_key: str | None = None, model: str | None = None):
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.model = model or self.DEFAULT_MODEL

        if not self.api_key:
            raise LLMError(
                "No API key found. Run `lgh config` or set the environment variable:\n"
                "  export ANTHROPIC_API_KEY='your-key-here'"
            )

        try:
            from anthropic import Anthropic
            self._client = Anthropic(api_key=self.api_key)
        except ImportError:
            raise LLMError(
                "Anthropic SDK not installed. Run:\n"
                "  pip install anthropic"
            )

    @property
    def name(self) -> str:
        return f"Claude ({self.model})"

    @staticmethod
    def _split_messages(messages: list[Message]) -> tuple[str, list[dict]]:
        """Claude takes system text separately from the conversation turns."""
        system = "\n\n".join(m.content for m in messages if m.role == "system")
        turns = [{"role": m.role, "content": m.content} for m in messages if m.role != "system"]
        return system, turns

    def chat(self, messages: list[Message]) -> LLMResponse:
        from anthropic import APIError, AuthenticationError

        system, turns = self._split_messages(messages)
        if not turns:
            raise LLMError("Chat request needs at least one user message")

        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=self.MAX_TOKENS,
                temperature=self.TEMPERATURE,
                system=system,
                messages=turns,
            )
        except AuthenticationError:
            raise LLMError("Invalid API key. Check `lgh config` or ANTHROPIC_API_KEY.")
        except APIError as e:
            raise LLMError(f"Claude API error: {e.message}")

        content = "".join(block.text for block in response.content if block.type == "text").strip()
        logger.debug("Claude replied with %d chars", len(content))

        return LLMResponse(
            content=content,
            model=self.model,
            prompt_tokens=response.usage.input_tokens,
            completion_tokens=response.usage.output_tokens,
        )

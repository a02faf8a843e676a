"""Prompt Construction Package"""

from lgh.prompts.builder import PromptBuilder, PromptConfig

__all__ = ["PromptBuilder", "PromptConfig"]

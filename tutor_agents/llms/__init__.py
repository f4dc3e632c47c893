"""LLM clients for the AI Tutor agents."""

from typing import Protocol

from tutor_agents.llms.gemini_client import GeminiClient


class TextGenerator(Protocol):
    """Anything that turns a prompt into generated text."""

    async def generate(self, prompt: str) -> str: ...


__all__ = [
    "GeminiClient",
    "TextGenerator",
]

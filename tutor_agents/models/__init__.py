"""Domain and API models."""

from tutor_agents.models.agents import (
    AgentInfo,
    AgentResponse,
    AgentType,
    ChatMessage,
)

__all__ = [
    "AgentInfo",
    "AgentResponse",
    "AgentType",
    "ChatMessage",
]

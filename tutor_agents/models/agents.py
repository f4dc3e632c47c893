"""Domain models shared by the responders and the orchestrator."""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

AgentType = Literal["tutor", "math", "physics"]
Sender = Literal["user", "assistant"]


class ChatMessage(BaseModel):
    """One prior turn of the conversation, used as context."""

    model_config = ConfigDict(frozen=True)

    id: str
    content: str
    sender: Sender
    timestamp: datetime
    agent: Optional[AgentType] = None


class AgentResponse(BaseModel):
    """Answer produced by a responder or by the orchestrator."""

    content: str
    agent: AgentType
    tools_used: List[str] = Field(default_factory=list)
    confidence: float = Field(..., ge=0.0, le=1.0)
    analysis: Optional[str] = None
    specialist_response: Optional[str] = None
    tool_results: Dict[str, Any] = Field(default_factory=dict)
    formatted_equations: bool = False


class AgentInfo(BaseModel):
    """Static description of a responder for discovery."""

    id: AgentType
    name: str
    description: str

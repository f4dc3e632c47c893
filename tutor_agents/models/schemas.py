"""Pydantic models for request/response validation.

All API request and response models are defined here using Pydantic
for automatic validation, serialization, and documentation. Field names
are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tutor_agents.models.agents import AgentInfo, AgentType, ChatMessage


class CamelModel(BaseModel):
    """Base model serializing to camelCase and accepting either case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(BaseModel):
    """Health check endpoint response."""

    status: str = Field(..., description="Service health status")
    version: str = Field(..., description="API version")
    model_loaded: bool = Field(..., description="Whether the agent orchestrator is ready")


class ChatRequest(CamelModel):
    """Request model for chat interactions."""

    message: str = Field(
        ...,
        min_length=1,
        max_length=2000,
        description="Student's question or prompt",
    )
    session_id: Optional[str] = Field(
        None,
        description="Session ID for conversation tracking; generated when omitted",
    )
    context: List[ChatMessage] = Field(
        default_factory=list,
        description="Prior conversation turns, oldest first",
    )


class ChatResponse(CamelModel):
    """Response model for chat interactions."""

    message: str = Field(..., description="Final answer text")
    agent: AgentType = Field(..., description="Agent that produced the answer")
    timestamp: datetime
    session_id: str
    tools_used: List[str] = Field(default_factory=list)
    analysis: Optional[str] = Field(None, description="Routing analysis")
    specialist_response: Optional[str] = Field(None, description="Specialist's supporting answer")
    tool_results: Dict[str, Any] = Field(default_factory=dict)
    formatted_equations: bool = False


class AgentsResponse(BaseModel):
    """Agent discovery response."""

    agents: List[AgentInfo]


class ChatHealthResponse(BaseModel):
    """Chat service health response."""

    status: str
    timestamp: datetime
    agents: int = Field(..., description="Number of registered agents")


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str = Field(..., description="Error message")
    details: Any = Field(None, description="Additional error details")
    status_code: int = Field(..., description="HTTP status code")

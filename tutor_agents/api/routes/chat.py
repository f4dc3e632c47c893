"""Chat endpoints.

Provides the message endpoint that routes questions through the
multi-agent orchestrator, plus agent discovery and health checks.
"""

import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Request, status
from loguru import logger

from tutor_agents.api.dependencies import OrchestratorDep
from tutor_agents.config import settings
from tutor_agents.core.exceptions import AITutorException, OrchestrationError
from tutor_agents.core.rate_limit import limiter
from tutor_agents.models.schemas import (
    AgentsResponse,
    ChatHealthResponse,
    ChatRequest,
    ChatResponse,
    ErrorResponse,
)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post(
    "/message",
    response_model=ChatResponse,
    status_code=status.HTTP_200_OK,
    summary="Send a message to the AI tutor",
    description="Route a question to the tutor, math or physics agent and return the combined answer",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Message processing failed"},
        503: {"model": ErrorResponse, "description": "Service unavailable"},
    },
)
@limiter.limit(settings.rate_limit)
async def send_message(
    request: Request,
    payload: ChatRequest,
    orchestrator: OrchestratorDep,
) -> ChatResponse:
    """Route a student message and return the final agent response.

    Raises:
        AITutorException: 500 with the session id when routing fails
    """
    session_id = payload.session_id or str(uuid.uuid4())
    logger.info(f"💬 Chat request from session {session_id}: {payload.message[:100]}...")

    try:
        agent_response = await orchestrator.route_message(payload.message, payload.context)
    except OrchestrationError as e:
        logger.error(f"Error in route_message for session {session_id}: {e.message}")
        raise AITutorException(
            message="Error processing message",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={
                "cause": e.message,
                "session_id": session_id,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        ) from e

    logger.info(
        f"Agent response from {agent_response.agent}: {agent_response.content[:100]}..."
    )

    return ChatResponse(
        message=agent_response.content,
        agent=agent_response.agent,
        timestamp=datetime.now(timezone.utc),
        session_id=session_id,
        tools_used=agent_response.tools_used,
        analysis=agent_response.analysis,
        specialist_response=agent_response.specialist_response,
        tool_results=agent_response.tool_results,
        formatted_equations=agent_response.formatted_equations,
    )


@router.get(
    "/agents",
    response_model=AgentsResponse,
    summary="List available agents",
)
async def list_agents(orchestrator: OrchestratorDep) -> AgentsResponse:
    return AgentsResponse(agents=orchestrator.get_agent_info())


@router.get(
    "/health",
    response_model=ChatHealthResponse,
    summary="Health check for the chat service",
)
async def chat_health(orchestrator: OrchestratorDep) -> ChatHealthResponse:
    return ChatHealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        agents=len(orchestrator.get_agent_info()),
    )


@router.get(
    "/test",
    summary="Environment check",
)
async def environment_check() -> dict:
    """Report whether the service is configured, without exposing secrets."""
    return {
        "status": "success",
        "message": "API test endpoint is working",
        "environment": {
            "debug": settings.debug,
            "has_gemini_key": bool(settings.gemini_api_key),
            "allowed_origins": settings.allowed_origins,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    }

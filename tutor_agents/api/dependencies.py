"""FastAPI dependency injection functions.

Centralized location for all API dependencies, including service instances
and other shared resources.
"""

from typing import Annotated

from fastapi import Depends, Request

from tutor_agents.core.exceptions import ModelNotAvailableError
from tutor_agents.graphs import AgentOrchestrator


def get_orchestrator(request: Request) -> AgentOrchestrator:
    """Get the process-wide orchestrator from app state.

    Raises:
        ModelNotAvailableError: If the orchestrator could not be built at startup
    """
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        raise ModelNotAvailableError("AgentOrchestrator failed to initialize")
    return orchestrator


# Type aliases for dependency injection
OrchestratorDep = Annotated[AgentOrchestrator, Depends(get_orchestrator)]

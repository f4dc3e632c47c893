"""State definitions for the routing graph.

One RoutingState lives for exactly one routed message; nothing is shared
between invocations.
"""

from typing import Any, Dict, List, Sequence, TypedDict

from tutor_agents.models.agents import AgentResponse, AgentType, ChatMessage


class RoutingState(TypedDict, total=False):
    """Graph state filled in node by node."""
    message: str
    context: List[ChatMessage]
    target_agent: AgentType
    analysis: str
    specialist_response: str
    tool_results: Dict[str, Any]
    formatted_equations: bool
    final_response: AgentResponse


def get_initial_state(
    message: str,
    context: Sequence[ChatMessage] | None = None,
) -> RoutingState:
    """Create the state for a new routing run.

    Args:
        message: The user's message
        context: Prior conversation turns (optional)

    Returns:
        Initial RoutingState
    """
    return RoutingState(
        message=message,
        context=list(context or []),
        target_agent="tutor",
        analysis="",
        specialist_response="",
        tool_results={},
        formatted_equations=False,
    )

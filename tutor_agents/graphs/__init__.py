"""Routing graph and orchestrator for the AI Tutor."""

from tutor_agents.graphs.orchestrator import AgentOrchestrator, parse_routing
from tutor_agents.graphs.state import RoutingState, get_initial_state

__all__ = [
    "AgentOrchestrator",
    "RoutingState",
    "get_initial_state",
    "parse_routing",
]

"""Specialist responders for the AI Tutor."""

from tutor_agents.agents.base import Responder
from tutor_agents.agents.math_agent import build_math_agent
from tutor_agents.agents.physics_agent import build_physics_agent
from tutor_agents.agents.tutor_agent import build_tutor_agent

__all__ = [
    "Responder",
    "build_math_agent",
    "build_physics_agent",
    "build_tutor_agent",
]

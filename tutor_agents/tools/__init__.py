"""Tools module for the AI Tutor agents."""

from tutor_agents.tools.base import Tool
from tutor_agents.tools.math_tools import calculator, equation_solver
from tutor_agents.tools.physics_tools import force_calculator, physics_constants

__all__ = [
    "Tool",
    "calculator",
    "equation_solver",
    "force_calculator",
    "physics_constants",
]

"""Tool record shared by all responders.

A tool bundles its JSON-schema style parameter definition with the
plain-Python callables that run it: a trigger predicate, a parameter
extractor and the executor.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict

ToolParams = Dict[str, Any]
ToolResult = Dict[str, Any]


@dataclass(frozen=True)
class Tool:
    """Stateless helper a responder can run before calling the model."""

    name: str
    description: str
    execute: Callable[[ToolParams], ToolResult]
    should_use: Callable[[str], bool]
    extract_parameters: Callable[[str], ToolParams]
    parameters: Dict[str, Any] = field(default_factory=dict)


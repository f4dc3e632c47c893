"""Custom exception classes for the application.

Defines domain-specific exceptions that can be raised throughout
the application for better error handling and reporting.
"""

from typing import Any, Optional


class AITutorException(Exception):
    """Base exception for all AI Tutor application errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """Initialize exception with message and optional details.

        Args:
            message: Human-readable error message
            status_code: HTTP status code for this error
            details: Additional context about the error
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ModelNotAvailableError(AITutorException):
    """Raised when the AI model is not available or fails to load."""

    def __init__(self, message: str = "AI model is not available") -> None:
        super().__init__(message=message, status_code=503)


class InvalidInputError(AITutorException):
    """Raised when user input validation fails."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message=message, status_code=400, details=details)


class RateLimitExceededError(AITutorException):
    """Raised when rate limit is exceeded."""

    def __init__(self, message: str = "Rate limit exceeded") -> None:
        super().__init__(message=message, status_code=429)


class ToolExecutionError(AITutorException):
    """Raised by a tool when its parameters are unsupported or its computation fails.

    Responders catch this and hand the message to the model as text, so it
    never reaches the transport layer on its own.
    """

    def __init__(self, message: str, tool_name: Optional[str] = None) -> None:
        details = {"tool": tool_name} if tool_name else None
        super().__init__(message=message, status_code=422, details=details)
        self.tool_name = tool_name


class GenerationError(AITutorException):
    """Raised when the upstream Gemini call fails."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, status_code=502)


class AgentProcessingError(AITutorException):
    """Raised when a responder cannot produce its answer."""

    def __init__(self, agent_name: str, cause: str) -> None:
        super().__init__(
            message=f"{agent_name} failed to process message: {cause}",
            status_code=502,
            details={"agent": agent_name},
        )
        self.agent_name = agent_name


class OrchestrationError(AITutorException):
    """Raised when routing a message fails at any step."""

    def __init__(self, cause: str) -> None:
        super().__init__(message=f"Failed to process message: {cause}", status_code=500)

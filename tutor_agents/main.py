"""Main FastAPI application entry point.

This module initializes the FastAPI application, configures middleware,
and registers all route handlers.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi.errors import RateLimitExceeded

from tutor_agents.api.routes import chat
from tutor_agents.config import settings
from tutor_agents.core.exceptions import (
    AITutorException,
    InvalidInputError,
    ModelNotAvailableError,
    RateLimitExceededError,
)
from tutor_agents.core.logging import configure_logging
from tutor_agents.core.rate_limit import limiter
from tutor_agents.graphs import AgentOrchestrator
from tutor_agents.llms import GeminiClient
from tutor_agents.models.schemas import HealthResponse


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup and shutdown events.

    Builds the Gemini client and the orchestrator once. A missing
    credential leaves ``app.state.orchestrator`` unset so chat requests
    fail with 503 instead of the process refusing to start.
    """
    configure_logging(settings.log_level)
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Debug mode: {settings.debug}")

    app.state.orchestrator = None
    try:
        app.state.orchestrator = AgentOrchestrator(GeminiClient(settings))
        logger.success("✅ AgentOrchestrator initialized")
    except ModelNotAvailableError as e:
        logger.error(f"Failed to initialize AgentOrchestrator: {e.message}")

    yield

    logger.info("Shutting down application")


# Initialize FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Multi-agent AI tutoring API with math and physics specialists",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)
app.state.limiter = limiter

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


def _error_response(exc: AITutorException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.message,
            "details": exc.details,
            "status_code": exc.status_code,
        },
    )


# Exception handlers
@app.exception_handler(AITutorException)
async def ai_tutor_exception_handler(
    request: Request, exc: AITutorException
) -> JSONResponse:
    """Handle custom AI tutor exceptions.

    Args:
        request: The incoming request
        exc: The raised exception

    Returns:
        JSONResponse with error details
    """
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Reject malformed requests before they reach the orchestrator."""
    logger.warning(f"Request validation failed: {request.url.path}")
    return _error_response(
        InvalidInputError(
            "Invalid request format",
            details={"errors": jsonable_encoder(exc.errors())},
        )
    )


@app.exception_handler(RateLimitExceeded)
async def rate_limit_exception_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    logger.warning(f"Rate limit exceeded: {exc.detail}")
    return _error_response(RateLimitExceededError(f"Rate limit exceeded: {exc.detail}"))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    Args:
        request: The incoming request
        exc: The raised exception

    Returns:
        JSONResponse with generic error message
    """
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "details": {},
            "status_code": 500,
        },
    )


# Register routers
app.include_router(chat.router, prefix=settings.api_prefix)


@app.get("/health", tags=["health"], response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        model_loaded=getattr(request.app.state, "orchestrator", None) is not None,
    )


# Root endpoint
@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint providing basic API information.

    Returns:
        Dictionary with API name and version
    """
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tutor_agents.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )

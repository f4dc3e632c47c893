"""Pytest configuration and shared fixtures.

This module provides common fixtures used across all test modules. No test
talks to Gemini: every responder is wired to a scripted ``FakeLLM``.
"""

from datetime import datetime, timezone
from typing import Generator, List, Sequence, Union

import pytest
from fastapi.testclient import TestClient

from tutor_agents.api.dependencies import get_orchestrator
from tutor_agents.core.rate_limit import limiter
from tutor_agents.graphs import AgentOrchestrator
from tutor_agents.main import app
from tutor_agents.models import ChatMessage


class FakeLLM:
    """Scripted text generator.

    Replies are consumed in order; an Exception instance in the queue is
    raised instead of returned. Once the queue is empty ``default`` is used.
    """

    def __init__(
        self,
        replies: Sequence[Union[str, Exception]] = (),
        default: str = "AI Tutor: Happy to help.",
    ) -> None:
        self.replies: List[Union[str, Exception]] = list(replies)
        self.default = default
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.replies:
            return self.default
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def make_context(count: int) -> List[ChatMessage]:
    """Build ``count`` alternating user/assistant turns, oldest first."""
    return [
        ChatMessage(
            id=str(i),
            content=f"turn {i}",
            sender="user" if i % 2 == 0 else "assistant",
            timestamp=datetime(2024, 1, 1, 12, i, tzinfo=timezone.utc),
        )
        for i in range(count)
    ]


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def orchestrator(fake_llm: FakeLLM) -> AgentOrchestrator:
    return AgentOrchestrator(fake_llm)


@pytest.fixture(autouse=True)
def reset_rate_limiter() -> Generator[None, None, None]:
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def client(orchestrator: AgentOrchestrator) -> Generator[TestClient, None, None]:
    """Create a test client whose orchestrator runs on the fake LLM.

    Yields:
        TestClient instance for making test requests
    """
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def unconfigured_client(monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    """Test client started without a Gemini key, so no orchestrator exists."""
    monkeypatch.setattr("tutor_agents.config.settings.gemini_api_key", None)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def mock_api_key() -> str:
    """Provide a mock API key for testing.

    Returns:
        Mock API key string
    """
    return "test-api-key-12345"

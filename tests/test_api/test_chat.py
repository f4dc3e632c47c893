"""Tests for the chat endpoints."""

import uuid

from fastapi.testclient import TestClient

from conftest import FakeLLM
from tutor_agents.config import settings
from tutor_agents.core.rate_limit import limiter
from tutor_agents.main import app


def test_message_routes_through_orchestrator(client: TestClient, fake_llm: FakeLLM) -> None:
    """A math question comes back with camelCase fields and tool output.

    Args:
        client: FastAPI test client fixture
        fake_llm: Scripted LLM behind the orchestrator
    """
    fake_llm.replies = [
        "AGENT_ROUTING: MATH\nANALYSIS: Addition.",
        "Math Agent: 42",
        "Math Agent: The sum is 42.",
    ]

    response = client.post(
        "/api/chat/message",
        json={"message": "Calculate 15 + 27", "sessionId": "session-1"},
    )

    assert response.status_code == 200

    data = response.json()
    assert data["agent"] == "math"
    assert data["sessionId"] == "session-1"
    assert data["message"] == "Math Agent: The sum is 42.\n\nTools Used: calculator"
    assert data["toolsUsed"] == ["calculator"]
    assert data["toolResults"]["calculator"]["result"] == 42
    assert data["analysis"] == "Addition."
    assert data["specialistResponse"] == "Math Agent: Math Agent: 42"
    assert data["formattedEquations"] is True
    assert "timestamp" in data


def test_session_id_is_generated_when_missing(client: TestClient) -> None:
    response = client.post("/api/chat/message", json={"message": "Hello"})

    assert response.status_code == 200
    assert uuid.UUID(response.json()["sessionId"]).version == 4


def test_context_is_accepted(client: TestClient, fake_llm: FakeLLM) -> None:
    response = client.post(
        "/api/chat/message",
        json={
            "message": "And what about that?",
            "context": [
                {
                    "id": "1",
                    "content": "Earlier question",
                    "sender": "user",
                    "timestamp": "2024-01-01T12:00:00Z",
                }
            ],
        },
    )

    assert response.status_code == 200
    assert "user: Earlier question" in fake_llm.prompts[-1]


def test_message_of_max_length_is_accepted(client: TestClient) -> None:
    response = client.post("/api/chat/message", json={"message": "a" * 2000})

    assert response.status_code == 200


def test_too_long_message_is_rejected(client: TestClient, fake_llm: FakeLLM) -> None:
    response = client.post("/api/chat/message", json={"message": "a" * 2001})

    assert response.status_code == 400

    data = response.json()
    assert data["error"] == "Invalid request format"
    assert data["status_code"] == 400
    assert data["details"]["errors"][0]["loc"] == ["body", "message"]
    assert fake_llm.prompts == []


def test_empty_message_is_rejected(client: TestClient) -> None:
    response = client.post("/api/chat/message", json={"message": ""})

    assert response.status_code == 400


def test_malformed_context_is_rejected(client: TestClient) -> None:
    response = client.post(
        "/api/chat/message",
        json={"message": "hi", "context": [{"content": "missing fields"}]},
    )

    assert response.status_code == 400


def test_orchestration_failure_returns_500(client: TestClient, fake_llm: FakeLLM) -> None:
    fake_llm.replies = [RuntimeError("upstream down")]

    response = client.post(
        "/api/chat/message",
        json={"message": "Hello", "sessionId": "session-9"},
    )

    assert response.status_code == 500

    data = response.json()
    assert data["error"] == "Error processing message"
    assert data["status_code"] == 500
    assert data["details"]["session_id"] == "session-9"
    assert "upstream down" in data["details"]["cause"]
    assert "timestamp" in data["details"]


def test_list_agents(client: TestClient) -> None:
    response = client.get("/api/chat/agents")

    assert response.status_code == 200

    agents = response.json()["agents"]
    assert [agent["id"] for agent in agents] == ["math", "physics", "tutor"]
    assert agents[2]["name"] == "AI Tutor"
    assert all(agent["description"] for agent in agents)


def test_chat_health(client: TestClient) -> None:
    response = client.get("/api/chat/health")

    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["agents"] == 3
    assert "timestamp" in data


def test_environment_check_hides_key(client: TestClient) -> None:
    response = client.get("/api/chat/test")

    assert response.status_code == 200

    environment = response.json()["environment"]
    assert set(environment) == {"debug", "has_gemini_key", "allowed_origins", "timestamp"}
    assert isinstance(environment["has_gemini_key"], bool)


def test_missing_orchestrator_returns_503(unconfigured_client: TestClient) -> None:
    response = unconfigured_client.post("/api/chat/message", json={"message": "Hello"})

    assert response.status_code == 503
    assert response.json()["error"] == "AgentOrchestrator failed to initialize"


def test_rate_limiter_wired_to_app_state() -> None:
    assert app.state.limiter is limiter


def test_rate_limit_returns_429(client: TestClient) -> None:
    ceiling = int(settings.rate_limit.split()[0])
    for _ in range(ceiling):
        assert client.post("/api/chat/message", json={"message": "Hi"}).status_code == 200

    response = client.post("/api/chat/message", json={"message": "Hi"})

    assert response.status_code == 429
    assert response.json()["status_code"] == 429


def test_tool_results_use_camel_case_keys(client: TestClient, fake_llm: FakeLLM) -> None:
    fake_llm.replies = [
        "AGENT_ROUTING: PHYSICS\nANALYSIS: Constant lookup.",
        "Physics Agent: G",
        "Physics Agent: G is tiny.",
    ]

    response = client.post(
        "/api/chat/message", json={"message": "What is the gravitational constant?"}
    )

    assert response.status_code == 200

    constant = response.json()["toolResults"]["physicsConstants"]
    assert constant["scientificNotation"] == "6.6743e-11"
    assert "scientific_notation" not in constant

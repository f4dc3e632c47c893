"""Tests for the tutor, math and physics responders."""

import pytest

from conftest import FakeLLM, make_context
from tutor_agents.agents import (
    Responder,
    build_math_agent,
    build_physics_agent,
    build_tutor_agent,
)
from tutor_agents.config import settings
from tutor_agents.core.exceptions import AgentProcessingError, GenerationError


@pytest.mark.asyncio
async def test_math_agent_runs_calculator_and_reports_result() -> None:
    llm = FakeLLM(["Math Agent: 15 + 27 = 42"])
    agent = build_math_agent(llm)

    response = await agent.process_message("Calculate 15 + 27")

    assert response.agent == "math"
    assert response.content == "Math Agent: 15 + 27 = 42"
    assert response.tools_used == ["calculator"]
    assert response.tool_results["calculator"]["result"] == 42

    prompt = llm.prompts[0]
    assert prompt.startswith(agent.system_prompt)
    assert 'Tool Result (calculator): {"result": 42' in prompt
    assert "Tools Used: calculator" in prompt
    assert prompt.endswith("Now, provide your response as the Math Agent:")


@pytest.mark.asyncio
async def test_tool_errors_are_inlined_not_raised() -> None:
    llm = FakeLLM(["Math Agent: that equation shape is not supported"])
    agent = build_math_agent(llm)

    response = await agent.process_message("Solve x^2 = 4")

    assert response.tools_used == []
    assert response.tool_results == {}
    assert (
        "Tool Error (equationSolver): Equation solver error: Equation format not supported"
        in llm.prompts[0]
    )
    assert "Tools Used:" not in llm.prompts[0]


@pytest.mark.asyncio
async def test_physics_agent_runs_both_tools() -> None:
    llm = FakeLLM(["Physics Agent: F = 10 N"])
    agent = build_physics_agent(llm)

    response = await agent.process_message(
        "Use Newton's constant reasoning: force for mass 2 and acceleration 5"
    )

    assert response.tools_used == ["physicsConstants", "forceCalculator"]
    assert response.tool_results["forceCalculator"]["force"] == 10.0
    assert response.tool_results["physicsConstants"]["name"] == "speed_of_light"


@pytest.mark.asyncio
async def test_only_last_five_context_messages_are_used() -> None:
    llm = FakeLLM()
    agent = build_tutor_agent(llm)

    await agent.process_message("Hello", make_context(7))

    prompt = llm.prompts[0]
    assert "user: turn 0" not in prompt
    assert "assistant: turn 1" not in prompt
    for i in range(2, 7):
        assert f"turn {i}" in prompt
    assert "Previous conversation:\nuser: turn 2\nassistant: turn 3" in prompt


@pytest.mark.asyncio
async def test_llm_failure_raises_agent_processing_error() -> None:
    agent = build_physics_agent(FakeLLM([RuntimeError("quota exhausted")]))

    with pytest.raises(AgentProcessingError) as exc_info:
        await agent.process_message("What is energy?")

    assert exc_info.value.message == "Physics Agent failed to process message: quota exhausted"
    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_generate_content_is_a_raw_call() -> None:
    llm = FakeLLM(["AGENT_ROUTING: MATH"])
    agent = build_tutor_agent(llm)

    assert await agent.generate_content("classify me") == "AGENT_ROUTING: MATH"
    assert llm.prompts == ["classify me"]


@pytest.mark.asyncio
async def test_generate_content_failure_raises_generation_error() -> None:
    agent = build_tutor_agent(FakeLLM([ConnectionError("offline")]))

    with pytest.raises(GenerationError, match="Failed to generate content: offline"):
        await agent.generate_content("anything")


class TestConfidence:
    def test_scales_with_length_and_caps_at_point_eight(self) -> None:
        agent = build_tutor_agent(FakeLLM())

        assert agent.calculate_confidence("hi", "x" * 250) == pytest.approx(0.5)
        assert agent.calculate_confidence("hi", "x" * 5000) == pytest.approx(0.8)

    def test_boost_when_message_names_a_tool(self) -> None:
        agent = build_math_agent(FakeLLM())

        assert agent.calculate_confidence("use the Calculator", "x" * 250) == pytest.approx(0.7)
        assert agent.calculate_confidence("use the calculator", "x" * 5000) == pytest.approx(0.95)


class TestCanHandle:
    @pytest.mark.parametrize(
        "message, expected",
        [
            ("Solve 3x + 5 = 20", True),
            ("what is 2*3", True),
            ("let y = 4", True),
            ("Explain photosynthesis", False),
        ],
    )
    def test_math(self, message: str, expected: bool) -> None:
        assert build_math_agent(FakeLLM()).can_handle(message) is expected

    @pytest.mark.parametrize(
        "message, expected",
        [
            ("What is the speed of light?", True),
            ("How does momentum work", True),
            ("Explain photosynthesis", False),
        ],
    )
    def test_physics(self, message: str, expected: bool) -> None:
        assert build_physics_agent(FakeLLM()).can_handle(message) is expected

    @pytest.mark.parametrize(
        "message, expected",
        [
            ("Explain photosynthesis", True),
            ("Help me with algebra", False),
            ("What is energy?", False),
            # only the narrower keyword sets pull a message away from the tutor
            ("Explain momentum", True),
        ],
    )
    def test_tutor(self, message: str, expected: bool) -> None:
        assert build_tutor_agent(FakeLLM()).can_handle(message) is expected


def test_info_describes_the_agent() -> None:
    info = build_physics_agent(FakeLLM()).info()

    assert info.id == "physics"
    assert info.name == "Physics Agent"


@pytest.mark.asyncio
async def test_zero_context_window_sends_no_history() -> None:
    llm = FakeLLM()
    agent = Responder(
        id="tutor",
        name="AI Tutor",
        description="General tutor",
        system_prompt="You are a tutor.",
        llm=llm,
        topic_filter=lambda message: True,
        context_window=0,
    )

    await agent.process_message("Hello", make_context(3))

    assert agent.context_window == 0
    assert ": turn" not in llm.prompts[0]
    assert "Previous conversation:\n\n" in llm.prompts[0]


def test_context_window_defaults_to_settings() -> None:
    assert build_tutor_agent(FakeLLM()).context_window == settings.context_window


@pytest.mark.asyncio
async def test_overflowing_calculation_is_reported_as_tool_error() -> None:
    llm = FakeLLM(["Math Agent: that number is too large"])
    agent = build_math_agent(llm)

    response = await agent.process_message("Calculate 10**400")

    assert response.tools_used == []
    assert "calculator" not in response.tool_results
    assert (
        "Tool Error (calculator): Calculator error: Invalid calculation result"
        in llm.prompts[0]
    )

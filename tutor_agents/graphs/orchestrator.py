"""Orchestrator for the multi-agent tutor.

Routes every message through a small LangGraph:

    classify ──(math|physics)──> consult_specialist ──> respond ──> END
        └──────────(tutor)──────────────────────────────^

1. classify: the tutor's raw model call picks the agent and writes a short analysis
2. consult_specialist: the chosen specialist answers once, as supporting material
3. respond: the chosen agent answers again with the analysis and specialist text
   folded into the prompt; tool names are merged into the final reply

Every model call is sequential. Any failure aborts the whole run.
"""

import re
from textwrap import dedent
from typing import Any, Dict, List, Sequence, Tuple

from langgraph.graph import END, START, StateGraph
from langgraph.graph.state import CompiledStateGraph
from loguru import logger

from tutor_agents.agents import (
    Responder,
    build_math_agent,
    build_physics_agent,
    build_tutor_agent,
)
from tutor_agents.core.exceptions import OrchestrationError
from tutor_agents.graphs.state import RoutingState, get_initial_state
from tutor_agents.llms import TextGenerator
from tutor_agents.models.agents import AgentInfo, AgentResponse, AgentType, ChatMessage

ROUTING_PROMPT = dedent("""
    You are the coordinator for a multi-agent AI tutoring system. Your task is to analyze the user's question and determine which agent should handle it.

    Available agents:
    1. Tutor Agent: General educational questions, coordination, and non-specialized topics
    2. Math Agent: Mathematics, calculations, equations, algebra, geometry, calculus, statistics
    3. Physics Agent: Physics concepts, forces, energy, motion, constants, laws of physics

    Analyze the following question and respond in this exact format:

    AGENT_ROUTING: [agent_name] (must be one of: TUTOR, MATH, or PHYSICS)
    ANALYSIS: [brief 1-2 sentence analysis of why this agent is appropriate]

    User Question: {message}
""").strip()

_AGENT_ROUTING = re.compile(r"AGENT_ROUTING:\s*\[?\s*(TUTOR|MATH|PHYSICS)\b", re.IGNORECASE)
_ANALYSIS = re.compile(r"ANALYSIS:\s*(.+)", re.IGNORECASE)

_ROUTING_TARGETS: Dict[str, AgentType] = {
    "TUTOR": "tutor",
    "MATH": "math",
    "PHYSICS": "physics",
}

SPECIALISTS: Tuple[AgentType, ...] = ("math", "physics")


def parse_routing(text: str) -> Tuple[AgentType, str]:
    """Extract (agent, analysis) from the classifier reply.

    Missing or unknown routing falls back to the tutor; missing analysis is "".
    """
    routing_match = _AGENT_ROUTING.search(text)
    analysis_match = _ANALYSIS.search(text)

    target: AgentType = "tutor"
    if routing_match:
        target = _ROUTING_TARGETS[routing_match.group(1).upper()]

    analysis = analysis_match.group(1).strip() if analysis_match else ""
    return target, analysis


def merge_tools(*tool_lists: Sequence[str]) -> List[str]:
    """Order-preserving union of tool names."""
    merged: List[str] = []
    for tools in tool_lists:
        for name in tools:
            if name not in merged:
                merged.append(name)
    return merged


def route_after_classify(state: RoutingState) -> str:
    if state["target_agent"] in SPECIALISTS:
        return "consult_specialist"
    return "respond"


class AgentOrchestrator:
    """Coordinates the tutor, math and physics responders.

    Built once per process; the responders and the compiled graph are
    read-only afterwards and shared by all concurrent requests.
    """

    def __init__(self, llm: TextGenerator) -> None:
        self.tutor_agent = build_tutor_agent(llm)
        self.math_agent = build_math_agent(llm)
        self.physics_agent = build_physics_agent(llm)

        self.agents: Tuple[Responder, ...] = (
            self.math_agent,
            self.physics_agent,
            self.tutor_agent,
        )
        self._agents_by_id: Dict[AgentType, Responder] = {a.id: a for a in self.agents}
        self.graph = self._build_graph()

    def get_agent(self, agent_id: AgentType) -> Responder:
        return self._agents_by_id[agent_id]

    def get_agent_info(self) -> List[AgentInfo]:
        return [agent.info() for agent in self.agents]

    async def route_message(
        self,
        message: str,
        context: Sequence[ChatMessage] = (),
    ) -> AgentResponse:
        """Classify, delegate and merge into one final AgentResponse.

        Args:
            message: The user's message
            context: Prior conversation turns, oldest first

        Returns:
            Combined AgentResponse

        Raises:
            OrchestrationError: If any step fails
        """
        logger.info(f"🔀 Routing message: {message[:50]}...")

        try:
            result = await self.graph.ainvoke(get_initial_state(message, context))
        except Exception as e:
            logger.error(f"Agent orchestration error: {e}")
            raise OrchestrationError(str(e)) from e

        final: AgentResponse = result["final_response"]
        logger.success(f"✅ Response generated by {final.agent} agent")
        return final

    async def classify(self, state: RoutingState) -> Dict[str, Any]:
        """Ask the model which agent should answer."""
        prompt = ROUTING_PROMPT.format(message=state["message"])
        routing_text = await self.tutor_agent.generate_content(prompt)

        target, analysis = parse_routing(routing_text)
        logger.info(f"🧭 Selected {target} agent")
        return {"target_agent": target, "analysis": analysis}

    async def consult_specialist(self, state: RoutingState) -> Dict[str, Any]:
        """First specialist pass; its answer becomes supporting material."""
        message = state["message"]
        specialist = self.get_agent(state["target_agent"])

        # Classification and tool triggers are independent; a mismatch still delegates
        tools_expected = any(tool.should_use(message) for tool in specialist.tools)
        if tools_expected:
            logger.info(f"{specialist.name} tools will be used for this question")
        else:
            logger.info(f"No {specialist.name} tool triggers matched, delegating without tools")

        specialist_result = await specialist.process_message(message, state["context"])

        return {
            "specialist_response": f"{specialist.name}: {specialist_result.content}",
            "tool_results": specialist_result.tool_results,
            "formatted_equations": True,
        }

    async def respond(self, state: RoutingState) -> Dict[str, Any]:
        """Final pass on the selected agent and merge of tool usage."""
        message = state["message"]
        analysis = state.get("analysis", "")
        specialist_response = state.get("specialist_response", "")
        tool_results = state.get("tool_results", {})

        if specialist_response:
            final_prompt = (
                f"Question: {message}\n\n"
                f"Problem Analysis: {analysis}\n\n"
                f"Specialist Response: {specialist_response}"
            )
        else:
            final_prompt = message

        agent = self.get_agent(state["target_agent"])
        final = await agent.process_message(final_prompt, state["context"])

        tools_used = merge_tools(list(tool_results), final.tools_used)
        content = final.content
        if tools_used and "Tools Used:" not in content:
            content += f"\n\nTools Used: {', '.join(tools_used)}"

        return {
            "final_response": AgentResponse(
                content=content,
                agent=agent.id,
                tools_used=tools_used,
                confidence=final.confidence,
                analysis=analysis,
                specialist_response=specialist_response,
                tool_results=tool_results,
                formatted_equations=state.get("formatted_equations", False),
            )
        }

    def _build_graph(self) -> CompiledStateGraph:
        graph = StateGraph(RoutingState)

        graph.add_node("classify", self.classify)
        graph.add_node("consult_specialist", self.consult_specialist)
        graph.add_node("respond", self.respond)

        graph.add_edge(START, "classify")
        graph.add_conditional_edges(
            "classify",
            route_after_classify,
            {
                "consult_specialist": "consult_specialist",
                "respond": "respond",
            },
        )
        graph.add_edge("consult_specialist", "respond")
        graph.add_edge("respond", END)

        return graph.compile()

"""Base responder shared by the tutor, math and physics agents.

A responder pairs a fixed system prompt with zero or more tools. Per call it
runs the tools whose triggers match, folds their output into one prompt
together with the recent conversation, and asks the model for the answer.
Responders hold no per-request state and are safe to share.
"""

import json
from typing import Any, Callable, Dict, List, Sequence, Tuple

from loguru import logger

from tutor_agents.config import settings
from tutor_agents.core.exceptions import (
    AgentProcessingError,
    GenerationError,
    ToolExecutionError,
)
from tutor_agents.llms import TextGenerator
from tutor_agents.models.agents import AgentInfo, AgentResponse, AgentType, ChatMessage
from tutor_agents.tools.base import Tool


class Responder:
    """Responder capability set: can_handle, process_message, generate_content.

    The tutor, math and physics variants differ only in data: prompt, tools
    and the topic predicate behind ``can_handle``.
    """

    def __init__(
        self,
        id: AgentType,
        name: str,
        description: str,
        system_prompt: str,
        llm: TextGenerator,
        topic_filter: Callable[[str], bool],
        tools: Sequence[Tool] = (),
        context_window: int | None = None,
    ) -> None:
        self.id = id
        self.name = name
        self.description = description
        self.system_prompt = system_prompt
        self.tools: Tuple[Tool, ...] = tuple(tools)
        self.llm = llm
        self._topic_filter = topic_filter
        self.context_window = (
            settings.context_window if context_window is None else context_window
        )

    def info(self) -> AgentInfo:
        return AgentInfo(id=self.id, name=self.name, description=self.description)

    async def generate_content(self, prompt: str) -> str:
        """Call the model directly, without tools or conversation context.

        Raises:
            GenerationError: If the model call fails
        """
        try:
            return await self.llm.generate(prompt)
        except Exception as e:
            logger.error(f"{self.name} content generation error: {e}")
            raise GenerationError(f"Failed to generate content: {e}") from e

    async def process_message(
        self,
        message: str,
        context: Sequence[ChatMessage] = (),
    ) -> AgentResponse:
        """Run matching tools, build the prompt and generate the answer.

        Tool failures are reported to the model inline and never abort the call.

        Args:
            message: The user's message (or an orchestrator-built prompt)
            context: Prior conversation turns, oldest first

        Returns:
            AgentResponse for this responder

        Raises:
            AgentProcessingError: If the model call fails
        """
        logger.info(f"{self.name} processing message: {message[:50]}...")

        enhanced_message, tools_used, tool_results = self.run_tools(message)
        prompt = self.build_prompt(enhanced_message, context, tools_used)

        try:
            content = await self.llm.generate(prompt)
        except Exception as e:
            logger.error(f"{self.name} processing error: {e}")
            raise AgentProcessingError(self.name, str(e)) from e

        logger.success(f"✅ {self.name} generated response successfully")

        return AgentResponse(
            content=content,
            agent=self.id,
            tools_used=tools_used,
            confidence=self.calculate_confidence(message, content),
            tool_results=tool_results,
        )

    def run_tools(self, message: str) -> Tuple[str, List[str], Dict[str, Any]]:
        """Execute every triggered tool against ``message``.

        Returns:
            (message with tool output appended, tool names that succeeded, results by tool name)
        """
        enhanced_message = message
        tools_used: List[str] = []
        tool_results: Dict[str, Any] = {}

        for tool in self.tools:
            if not tool.should_use(message):
                continue
            try:
                params = tool.extract_parameters(message)
                result = tool.execute(params)
            except ToolExecutionError as e:
                logger.warning(f"🔧 Tool {tool.name} execution failed: {e.message}")
                enhanced_message += f"\n\nTool Error ({tool.name}): {e.message}"
                continue

            enhanced_message += f"\n\nTool Result ({tool.name}): {json.dumps(result, ensure_ascii=False)}"
            tools_used.append(tool.name)
            tool_results[tool.name] = result
            logger.info(f"🔧 Tool {tool.name} executed successfully")

        return enhanced_message, tools_used, tool_results

    def build_context(self, context: Sequence[ChatMessage]) -> str:
        recent = list(context)[-self.context_window:] if self.context_window > 0 else []
        return "\n".join(f"{msg.sender}: {msg.content}" for msg in recent)

    def build_prompt(
        self,
        message: str,
        context: Sequence[ChatMessage],
        tools_used: Sequence[str],
    ) -> str:
        instructions = [
            f'1. Start your response with "{self.name}:" to clearly identify which agent is responding',
            "2. Provide a helpful, accurate response using your specialized knowledge",
            "3. Present information in a clear, structured format",
            "4. If showing calculations or equations, present them step-by-step",
        ]
        if tools_used:
            instructions.append(
                f'5. Include a section at the end labeled "Tools Used: {", ".join(tools_used)}" '
                "to show which tools were utilized"
            )

        return (
            f"{self.system_prompt}\n\n"
            f"Previous conversation:\n{self.build_context(context)}\n\n"
            f"Current user message: {message}\n\n"
            "IMPORTANT RESPONSE FORMAT INSTRUCTIONS:\n"
            + "\n".join(instructions)
            + f"\n\nNow, provide your response as the {self.name}:"
        )

    def calculate_confidence(self, message: str, response: str) -> float:
        """Heuristic score from response length, boosted when a tool is named."""
        lower_message = message.lower()
        mentions_tool = any(tool.name.lower() in lower_message for tool in self.tools)

        base_confidence = min(0.8, len(response) / 500)
        return min(0.95, base_confidence + 0.2) if mentions_tool else base_confidence

    def can_handle(self, message: str) -> bool:
        """Whether this responder is topically responsible for ``message``."""
        return self._topic_filter(message)

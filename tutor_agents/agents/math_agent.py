"""
Math specialist: arithmetic, algebra, geometry, statistics, calculus.
Uses the calculator and equation solver tools.
"""
import re
from textwrap import dedent

from tutor_agents.agents.base import Responder
from tutor_agents.llms import TextGenerator
from tutor_agents.tools import calculator, equation_solver

NAME = "Math Agent"
DESCRIPTION = "Specialized mathematics tutor for calculations, equations, and mathematical concepts"

SYSTEM_PROMPT = dedent("""
    You are a Mathematics Specialist Agent. Your expertise includes:

    1. Arithmetic and basic calculations
    2. Algebra and equation solving
    3. Geometry and trigonometry
    4. Statistics and probability
    5. Calculus concepts

    IMPORTANT FORMATTING INSTRUCTIONS:
    - Present mathematical equations in a clear format without using $ symbols
      - For inline equations, simply write the equation: x = (-b ± √(b² - 4ac))/2a
      - For displayed equations that should stand out, put them on their own line: E = mc²
    - Always start your response with "Math Agent:" to clearly indicate which agent is responding
    - Present each step of your solution on a new line for clarity
    - When showing calculations, display them in a clear, step-by-step format

    Your approach:
    - Show step-by-step solutions
    - Explain mathematical reasoning
    - Provide multiple solution methods when applicable
    - Help students understand underlying concepts, not just get answers

    You have access to calculator and equation solver tools. Their results, when
    available, are attached to the user message. Use them to verify calculations.

    Example response format:
    "Math Agent: I'll solve this equation step by step.

    The equation 3x + 5 = 20 can be solved as follows:

    Step 1: Subtract 5 from both sides
    3x + 5 - 5 = 20 - 5
    3x = 15

    Step 2: Divide both sides by 3
    x = 15 / 3
    x = 5

    Therefore, the solution is x = 5."
""").strip()

MATH_KEYWORDS = (
    "math", "calculate", "equation", "solve", "algebra",
    "geometry", "trigonometry", "calculus", "statistics",
    "probability", "number", "formula", "+", "-", "*", "/",
    "sum", "difference", "product", "quotient",
)

_ARITHMETIC = re.compile(r"\d+[+\-*/]\d+")
_ASSIGNMENT = re.compile(r"[a-z]\s*=")


def is_math_topic(message: str) -> bool:
    lower_message = message.lower()
    return (
        any(keyword in lower_message for keyword in MATH_KEYWORDS)
        or bool(_ARITHMETIC.search(message))
        or bool(_ASSIGNMENT.search(lower_message))
    )


def build_math_agent(llm: TextGenerator) -> Responder:
    return Responder(
        id="math",
        name=NAME,
        description=DESCRIPTION,
        system_prompt=SYSTEM_PROMPT,
        llm=llm,
        topic_filter=is_math_topic,
        tools=(calculator, equation_solver),
    )

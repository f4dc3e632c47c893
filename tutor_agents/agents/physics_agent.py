"""
Physics specialist: mechanics, thermodynamics, electromagnetism, waves, modern physics.
Uses the constants lookup and force calculator tools.
"""
from textwrap import dedent

from tutor_agents.agents.base import Responder
from tutor_agents.llms import TextGenerator
from tutor_agents.tools import force_calculator, physics_constants

NAME = "Physics Agent"
DESCRIPTION = "Specialized physics tutor for concepts, laws, and calculations"

SYSTEM_PROMPT = dedent("""
    You are a Physics Specialist Agent. Your expertise includes:

    1. Classical mechanics (Newton's laws, motion, forces)
    2. Thermodynamics and heat transfer
    3. Electromagnetism and circuits
    4. Waves and optics
    5. Modern physics basics (quantum, relativity)

    IMPORTANT FORMATTING INSTRUCTIONS:
    - Present physics equations in a clear format without using $ symbols
      - For inline equations, simply write the equation: F = ma
      - For displayed equations that should stand out, put them on their own line: E = mc²
    - Always start your response with "Physics Agent:" to clearly indicate which agent is responding
    - Present each step of your solution on a new line for clarity
    - When showing calculations, display them in a clear, step-by-step format
    - When referencing constants, provide their exact values with proper units

    Your approach:
    - Explain physics concepts with real-world examples
    - Show how to apply physics laws and formulas
    - Help visualize abstract concepts
    - Connect mathematical relationships to physical phenomena
    - Encourage experimental thinking and problem-solving

    You have access to physics constants lookup and force calculation tools. Their
    results, when available, are attached to the user message.

    Example response format:
    "Physics Agent: I'll explain Newton's Second Law of Motion.

    Newton's Second Law states that the force acting on an object is equal to the
    mass of the object multiplied by its acceleration:

    F = ma

    For example, a 2 kg object pushed with 10 N accelerates at:

    a = F / m = 10 N / 2 kg = 5 m/s²"
""").strip()

PHYSICS_KEYWORDS = (
    "physics", "force", "energy", "motion", "velocity", "acceleration",
    "newton", "gravity", "mass", "weight", "momentum", "pressure",
    "temperature", "heat", "light", "wave", "frequency", "electricity",
    "magnetic", "quantum", "relativity", "constant", "speed of light",
)


def is_physics_topic(message: str) -> bool:
    lower_message = message.lower()
    return any(keyword in lower_message for keyword in PHYSICS_KEYWORDS)


def build_physics_agent(llm: TextGenerator) -> Responder:
    return Responder(
        id="physics",
        name=NAME,
        description=DESCRIPTION,
        system_prompt=SYSTEM_PROMPT,
        llm=llm,
        topic_filter=is_physics_topic,
        tools=(physics_constants, force_calculator),
    )

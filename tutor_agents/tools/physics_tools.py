"""Physics tools: constant lookup and force calculator."""

import re
from decimal import Decimal
from typing import Any, Dict

from tutor_agents.core.exceptions import ToolExecutionError
from tutor_agents.tools.base import Tool

PHYSICS_CONSTANTS: Dict[str, Dict[str, Any]] = {
    "speed_of_light": {
        "value": 299792458,
        "unit": "m/s",
        "description": "Speed of light in vacuum",
    },
    "gravitational_constant": {
        "value": 6.67430e-11,
        "unit": "m³/(kg⋅s²)",
        "description": "Gravitational constant",
    },
    "planck_constant": {
        "value": 6.62607015e-34,
        "unit": "J⋅s",
        "description": "Planck constant",
    },
    "electron_mass": {
        "value": 9.1093837015e-31,
        "unit": "kg",
        "description": "Electron rest mass",
    },
    "proton_mass": {
        "value": 1.67262192369e-27,
        "unit": "kg",
        "description": "Proton rest mass",
    },
    "avogadro_number": {
        "value": 6.02214076e23,
        "unit": "mol⁻¹",
        "description": "Avogadro constant",
    },
}

# Phrase found in a message -> table key
_CONSTANT_ALIASES = {
    "speed of light": "speed_of_light",
    "gravitational constant": "gravitational_constant",
    "gravity": "gravitational_constant",
    "planck": "planck_constant",
    "electron": "electron_mass",
    "proton": "proton_mass",
    "avogadro": "avogadro_number",
}

_CONSTANT_TRIGGER = re.compile(r"constant|speed of light|gravity|planck")
_FORCE_TRIGGER = re.compile(r"force|newton|f\s*=\s*ma")

_CONSTANT_MENTION = re.compile("|".join(_CONSTANT_ALIASES), re.IGNORECASE)
_MASS_VALUE = re.compile(r"mass[:\s]*(\d+\.?\d*)", re.IGNORECASE)
_ACCELERATION_VALUE = re.compile(r"acceleration[:\s]*(\d+\.?\d*)", re.IGNORECASE)

DEFAULT_MASS = 1
DEFAULT_ACCELERATION = 9.8


def to_scientific_notation(value: float) -> str:
    """Shortest exponential rendering, e.g. 6.6743e-11 or 2.99792458e+8."""
    sign, digits, exponent = Decimal(repr(value)).normalize().as_tuple()
    mantissa = str(digits[0])
    if len(digits) > 1:
        mantissa += "." + "".join(str(d) for d in digits[1:])
    power = exponent + len(digits) - 1
    return f"{'-' if sign else ''}{mantissa}e{power:+d}"


def lookup_constant(params: Dict[str, Any]) -> Dict[str, Any]:
    """Look up a constant by case- and space-insensitive name.

    Raises:
        ToolExecutionError: Listing every known constant if the name is unknown
    """
    name = str(params.get("constant", ""))
    key = re.sub(r"\s+", "_", name.strip().lower())

    constant = PHYSICS_CONSTANTS.get(key)
    if constant is None:
        available = ", ".join(k.replace("_", " ") for k in PHYSICS_CONSTANTS)
        raise ToolExecutionError(
            f"Constant not found. Available constants: {available}", "physicsConstants"
        )

    return {
        "name": name,
        "value": constant["value"],
        "unit": constant["unit"],
        "description": constant["description"],
        "scientificNotation": to_scientific_notation(constant["value"]),
    }


def calculate_force(params: Dict[str, Any]) -> Dict[str, Any]:
    """F = ma, no validation beyond accepting numbers."""
    mass = params["mass"]
    acceleration = params["acceleration"]
    force = mass * acceleration

    return {
        "force": force,
        "unit": "N (Newtons)",
        "calculation": f"F = ma = {mass} kg × {acceleration} m/s² = {force} N",
        "components": {
            "mass": mass,
            "acceleration": acceleration,
        },
    }


def needs_constant(message: str) -> bool:
    return bool(_CONSTANT_TRIGGER.search(message.lower()))


def needs_force(message: str) -> bool:
    return bool(_FORCE_TRIGGER.search(message.lower()))


def extract_constant(message: str) -> Dict[str, Any]:
    match = _CONSTANT_MENTION.search(message)
    if not match:
        return {"constant": "speed_of_light"}
    return {"constant": _CONSTANT_ALIASES[match.group(0).lower()]}


def extract_force_inputs(message: str) -> Dict[str, Any]:
    mass_match = _MASS_VALUE.search(message)
    acceleration_match = _ACCELERATION_VALUE.search(message)
    return {
        "mass": float(mass_match.group(1)) if mass_match else DEFAULT_MASS,
        "acceleration": (
            float(acceleration_match.group(1)) if acceleration_match else DEFAULT_ACCELERATION
        ),
    }


physics_constants = Tool(
    name="physicsConstants",
    description="Look up fundamental physics constants",
    execute=lookup_constant,
    should_use=needs_constant,
    extract_parameters=extract_constant,
    parameters={
        "type": "object",
        "properties": {
            "constant": {
                "type": "string",
                "description": "Name of the physics constant to look up",
            }
        },
        "required": ["constant"],
    },
)

force_calculator = Tool(
    name="forceCalculator",
    description="Calculate force using F = ma",
    execute=calculate_force,
    should_use=needs_force,
    extract_parameters=extract_force_inputs,
    parameters={
        "type": "object",
        "properties": {
            "mass": {"type": "number", "description": "Mass in kilograms"},
            "acceleration": {"type": "number", "description": "Acceleration in m/s²"},
        },
        "required": ["mass", "acceleration"],
    },
)

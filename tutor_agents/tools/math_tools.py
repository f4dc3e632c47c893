"""Math tools: arithmetic evaluator and linear equation solver."""

import math
import re
from typing import Any, Dict

from sympy import Expr
from sympy.parsing.sympy_parser import parse_expr

from tutor_agents.core.exceptions import ToolExecutionError
from tutor_agents.tools.base import Tool

# Anything outside digits, whitespace, '.', + - * / and parentheses is dropped
_UNSAFE_EXPRESSION_CHARS = re.compile(r"[^0-9+\-*/().\s]")
_LINEAR_EQUATION = re.compile(r"^(\d*)x([+-]\d+)=(\d+)$")

_CALCULATION_TRIGGER = re.compile(r"calculate|compute|(\d+[+\-*/]\d+)")
_EQUATION_TRIGGER = re.compile(r"solve|equation|[a-z]\s*=")

_EXPRESSION_RUN = re.compile(r"[\d(.][\d+\-*/().\s]*")
_EQUATION_RUN = re.compile(r"[\dx][\dx+\-\s]*=\s*\d+")


def _as_number(value: float) -> int | float:
    """Collapse integral floats so results read like 42, not 42.0."""
    return int(value) if float(value).is_integer() else float(value)


def _to_float(node: Expr) -> float:
    """Fold an unevaluated sympy tree with IEEE float arithmetic.

    Every node costs O(1), so towers like ``9**9**9`` overflow immediately
    instead of building exact integers.

    Raises:
        OverflowError: A power left the float range
        ZeroDivisionError: Division by zero
        ValueError: Any node other than a number, sum, product or power
    """
    if node.is_Number:
        return float(node)

    if node.is_Add:
        total = 0.0
        for arg in node.args:
            total += _to_float(arg)
        return total

    if node.is_Mul:
        product = 1.0
        for arg in node.args:
            # a / b parses as Mul(a, Pow(b, -1))
            if arg.is_Pow and arg.exp == -1:
                product /= _to_float(arg.base)
            else:
                product *= _to_float(arg)
        return product

    if node.is_Pow:
        return _to_float(node.base) ** _to_float(node.exp)

    raise ValueError(f"Unsupported operation: {type(node).__name__}")


def evaluate_expression(params: Dict[str, Any]) -> Dict[str, Any]:
    """Evaluate a sanitized arithmetic expression with standard precedence.

    The expression is parsed by sympy without evaluation and folded with
    float semantics, so results behave like double-precision arithmetic.

    Raises:
        ToolExecutionError: If the expression is empty, malformed or not finite
    """
    expression = str(params.get("expression", ""))
    sanitized = _UNSAFE_EXPRESSION_CHARS.sub("", expression).strip()
    if not sanitized:
        raise ToolExecutionError("Calculator error: Empty expression", "calculator")

    try:
        tree = parse_expr(sanitized, evaluate=False)
    except Exception as e:
        raise ToolExecutionError(f"Calculator error: {e}", "calculator") from e

    try:
        value = _to_float(tree)
    except (OverflowError, ZeroDivisionError) as e:
        raise ToolExecutionError(
            "Calculator error: Invalid calculation result", "calculator"
        ) from e
    except (ValueError, RecursionError) as e:
        raise ToolExecutionError(f"Calculator error: {e}", "calculator") from e

    # negative bases with fractional exponents come back complex
    if not isinstance(value, float) or not math.isfinite(value):
        raise ToolExecutionError("Calculator error: Invalid calculation result", "calculator")

    result = _as_number(value)
    return {
        "result": result,
        "expression": expression,
        "steps": f"Calculated: {expression} = {result}",
    }


def solve_linear_equation(params: Dict[str, Any]) -> Dict[str, Any]:
    """Solve ``ax + b = c`` for x.

    Only the shape ``[a]x[+|-]b=c`` with integer terms is supported.

    Raises:
        ToolExecutionError: For any other equation shape
    """
    equation = str(params.get("equation", ""))
    compact = re.sub(r"\s", "", equation.lower())

    match = _LINEAR_EQUATION.match(compact)
    if not match:
        raise ToolExecutionError(
            "Equation solver error: Equation format not supported", "equationSolver"
        )

    a = int(match.group(1) or "1")
    b = int(match.group(2))
    c = int(match.group(3))
    if a == 0:
        raise ToolExecutionError(
            "Equation solver error: Equation has no unique solution", "equationSolver"
        )

    solution = _as_number((c - b) / a)
    return {
        "solution": solution,
        "steps": [
            f"Original equation: {equation}",
            f"Rearranged: {a}x = {c} - ({b})",
            f"Simplified: {a}x = {c - b}",
            f"Solution: x = {solution}",
        ],
    }


def needs_calculation(message: str) -> bool:
    return bool(_CALCULATION_TRIGGER.search(message.lower()))


def needs_equation_solving(message: str) -> bool:
    return bool(_EQUATION_TRIGGER.search(message.lower()))


def extract_expression(message: str) -> Dict[str, Any]:
    """Pull the first digit/operator run out of the message."""
    match = _EXPRESSION_RUN.search(message)
    return {"expression": match.group(0).strip() if match else message}


def extract_equation(message: str) -> Dict[str, Any]:
    """Pull the first ``...=number`` run out of the message."""
    match = _EQUATION_RUN.search(message.lower())
    return {"equation": match.group(0).strip() if match else message}


calculator = Tool(
    name="calculator",
    description="Perform basic arithmetic operations",
    execute=evaluate_expression,
    should_use=needs_calculation,
    extract_parameters=extract_expression,
    parameters={
        "type": "object",
        "properties": {
            "expression": {
                "type": "string",
                "description": 'Mathematical expression to evaluate (e.g., "2 + 3 * 4")',
            }
        },
        "required": ["expression"],
    },
)

equation_solver = Tool(
    name="equationSolver",
    description="Solve simple algebraic equations",
    execute=solve_linear_equation,
    should_use=needs_equation_solving,
    extract_parameters=extract_equation,
    parameters={
        "type": "object",
        "properties": {
            "equation": {
                "type": "string",
                "description": 'Equation to solve (e.g., "2x + 5 = 11")',
            }
        },
        "required": ["equation"],
    },
)

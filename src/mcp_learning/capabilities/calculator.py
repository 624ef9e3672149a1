"""Arithmetic tool."""

import math
from typing import Optional

from ..handler import LearningHandler
from ..response import HandlerError, format_number
from ..schema import EnumField, NumberField

OPERATIONS = ("add", "subtract", "multiply", "divide")

ARGUMENTS = [
    EnumField("operation", "The operation to perform", choices=OPERATIONS),
    NumberField("a", "First number"),
    NumberField("b", "Second number"),
    NumberField(
        "precision", "Number of decimal places (0-10)",
        required=False, minimum=0, maximum=10, integer=True,
    ),
]


def calculate(operation: str, a: float, b: float, precision: Optional[int] = None) -> str:
    if operation == "divide" and b == 0:
        raise HandlerError("Division by zero is not allowed")

    try:
        if operation == "add":
            result = a + b
        elif operation == "subtract":
            result = a - b
        elif operation == "multiply":
            result = a * b
        elif operation == "divide":
            result = a / b
        else:
            raise HandlerError(f"Unknown operation: {operation}")
        # ints beyond float range overflow here rather than producing inf
        finite = math.isfinite(result)
    except OverflowError:
        finite = False

    if not finite:
        raise HandlerError(f"Result of {operation} is out of range")
    if precision is not None:
        result = round(result, precision)

    return (
        f"Result: {format_number(a)} {operation} {format_number(b)} "
        f"= {format_number(result)}"
    )


def register(handler: LearningHandler) -> None:
    handler.tool(
        name="calculate",
        description="Perform basic arithmetic calculations",
        arguments=ARGUMENTS,
    )(calculate)

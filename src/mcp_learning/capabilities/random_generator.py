"""Random data generator tool."""

import random
import string
import uuid
from typing import Callable, Optional

from ..handler import LearningHandler
from ..response import HandlerError
from ..schema import BooleanField, EnumField, NumberField

TYPES = ("number", "string", "password", "color", "uuid")

LETTERS = string.ascii_lowercase + string.ascii_uppercase
PASSWORD_CHARS = LETTERS + string.digits
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"

ARGUMENTS = [
    EnumField("type", "Type of random data to generate", choices=TYPES),
    NumberField(
        "count", "Number of items to generate (1-20)",
        default=1, minimum=1, maximum=20, integer=True,
    ),
    NumberField("min", "Minimum value (for numbers)", default=0, integer=True),
    NumberField("max", "Maximum value (for numbers)", default=100, integer=True),
    NumberField(
        "length", "Length of string/password (1-100)",
        default=8, minimum=1, maximum=100, integer=True,
    ),
    BooleanField("include_symbols", "Include symbols in password", default=False),
]


def _one(rng: random.Random, kind: str, low: int, high: int, length: int, symbols: bool) -> str:
    if kind == "number":
        return str(rng.randint(low, high))
    if kind == "string":
        return "".join(rng.choice(LETTERS) for _ in range(length))
    if kind == "password":
        chars = PASSWORD_CHARS + SYMBOLS if symbols else PASSWORD_CHARS
        return "".join(rng.choice(chars) for _ in range(length))
    if kind == "color":
        r, g, b = (rng.randrange(256) for _ in range(3))
        return f"#{r:02x}{g:02x}{b:02x} (RGB: {r}, {g}, {b})"
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))


def make_random_generator(rng: Optional[random.Random] = None) -> Callable[..., str]:
    """Build the generator handler around a random source.

    Args:
        rng: Random source; a fresh unseeded one when omitted

    Returns:
        Tool handler
    """
    rng = rng or random.Random()

    def random_generator(
        type: str,
        count: int = 1,
        min: int = 0,
        max: int = 100,
        length: int = 8,
        include_symbols: bool = False,
    ) -> str:
        if type == "number" and min > max:
            raise HandlerError(f"min ({min}) must not be greater than max ({max})")

        results = [
            _one(rng, type, min, max, length, include_symbols) for _ in range(count)
        ]

        plural = "s" if count > 1 else ""
        output = f"Random {type.capitalize()}{plural}:\n\n"
        if count == 1:
            output += results[0]
        else:
            output += "\n".join(f"{i}. {value}" for i, value in enumerate(results, start=1))

        if type == "number":
            output += f"\nRange: {min} to {max}"
        elif type in ("string", "password"):
            suffix = " (with symbols)" if type == "password" and include_symbols else ""
            output += f"\nLength: {length} characters{suffix}"
        return output

    return random_generator


def register(handler: LearningHandler, rng: Optional[random.Random] = None) -> None:
    handler.tool(
        name="random_generator",
        description="Generate various types of random data",
        arguments=ARGUMENTS,
    )(make_random_generator(rng))

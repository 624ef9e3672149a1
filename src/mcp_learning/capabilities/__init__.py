"""The day-by-day capability catalogue.

``build_handler`` registers everything in a fixed order, which is the order
clients see when they list capabilities.
"""

import random
from datetime import datetime
from typing import Callable, Optional

from ..config import ServerConfig
from ..handler import LearningHandler
from ..state import LearningStore
from . import calculator, greeting, learning, prompts, random_generator, text


def build_handler(
    config: Optional[ServerConfig] = None,
    store: Optional[LearningStore] = None,
    rng: Optional[random.Random] = None,
    clock: Callable[[], datetime] = datetime.now
) -> LearningHandler:
    """Create a handler with the full catalogue registered.

    Args:
        config: Server configuration; ``seed`` seeds the random generator
            when ``rng`` is not given
        store: Learning state shared by the learning tools and resources
        rng: Random source for the random generator
        clock: Local clock for the time-aware greeting

    Returns:
        Handler ready to build a dispatcher from
    """
    config = config or ServerConfig()
    store = store or LearningStore()
    if rng is None and config.seed is not None:
        rng = random.Random(config.seed)

    handler = LearningHandler(config.name, config.version)

    calculator.register(handler)
    text.register(handler)
    greeting.register(handler, clock=clock)
    text.register_analyzer(handler)
    random_generator.register(handler, rng=rng)
    learning.register_tools(handler, store)
    prompts.register_tools(handler)

    learning.register_guide(handler, store)
    learning.register_resources(handler, store)

    prompts.register_prompts(handler)

    return handler


__all__ = ["build_handler"]

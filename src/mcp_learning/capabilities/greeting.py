"""Greeting tool with language templates, time-of-day and name-mood extras."""

import re
from datetime import datetime
from typing import Callable, Dict

from ..handler import LearningHandler
from ..schema import BooleanField, EnumField, StringField

STYLES = ("formal", "casual", "enthusiastic")
LANGUAGES = ("english", "spanish", "french", "german")

GREETING_TEMPLATES: Dict[str, Dict[str, str]] = {
    "english": {
        "formal": "Good day, {name}. I hope you're having a pleasant experience.",
        "casual": "Hey {name}! Nice to meet you! 👋",
        "enthusiastic": "HEY THERE {name}! 🎉 You're AWESOME!",
    },
    "spanish": {
        "formal": "Buenos días, {name}. Espero que tengas una experiencia agradable.",
        "casual": "¡Hola {name}! ¡Mucho gusto! 👋",
        "enthusiastic": "¡¡HOLA {name}!! 🎉 ¡Eres INCREÍBLE!",
    },
    "french": {
        "formal": "Bonjour, {name}. J'espère que vous passez une agréable journée.",
        "casual": "Salut {name}! Ravi de te rencontrer! 👋",
        "enthusiastic": "SALUT {name}! 🎉 Tu es FANTASTIQUE!",
    },
    "german": {
        "formal": "Guten Tag, {name}. Ich hoffe, Sie haben eine angenehme Erfahrung.",
        "casual": "Hallo {name}! Schön dich kennenzulernen! 👋",
        "enthusiastic": "HALLO {name}! 🎉 Du bist GROSSARTIG!",
    },
}


def time_prefix(hour: int) -> str:
    if hour < 12:
        return "Good morning, "
    if hour < 17:
        return "Good afternoon, "
    return "Good evening, "


def mood_from_name(name: str) -> Dict[str, str]:
    """Guess a playful 'mood' from the shape of a name."""
    if len(name) <= 3:
        return {"mood": "energetic", "emoji": "⚡", "description": "short and punchy"}
    if len(name) >= 8:
        return {"mood": "sophisticated", "emoji": "🎩", "description": "elegant and refined"}
    if re.search(r"(.)\1", name.lower()):
        return {"mood": "playful", "emoji": "🤪", "description": "fun-loving"}
    if re.search(r"[aeiou]{2,}", name, re.IGNORECASE):
        return {"mood": "melodic", "emoji": "🎵", "description": "harmonious"}
    return {"mood": "balanced", "emoji": "😊", "description": "well-rounded"}


def make_greeting(clock: Callable[[], datetime] = datetime.now) -> Callable[..., str]:
    """Build the greeting handler around a clock, for the time-aware prefix."""

    def greeting(
        name: str,
        style: str = "casual",
        language: str = "english",
        time_aware: bool = False,
        detect_mood: bool = False,
    ) -> str:
        template = GREETING_TEMPLATES[language][style]
        text = template.format(name=name.upper() if style == "enthusiastic" else name)
        if time_aware:
            text = time_prefix(clock().hour) + text
        if detect_mood:
            mood = mood_from_name(name)
            text += f" {mood['emoji']} (I detect a {mood['description']} energy from your name!)"
        return text

    return greeting


def register(handler: LearningHandler, clock: Callable[[], datetime] = datetime.now) -> None:
    handler.tool(
        name="greeting",
        description="Create personalized greetings",
        arguments=[
            StringField("name", "Name of the person to greet", min_length=1),
            EnumField("style", "Greeting style", default="casual", choices=STYLES),
            EnumField("language", "Greeting language", default="english", choices=LANGUAGES),
            BooleanField("time_aware", "Prefix a time-of-day greeting", default=False),
            BooleanField("detect_mood", "Add a mood guessed from the name", default=False),
        ],
    )(make_greeting(clock))

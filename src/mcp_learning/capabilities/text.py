"""Text tools: simple transformations and statistics."""

import re
from collections import Counter
from typing import List, Tuple

from ..handler import LearningHandler
from ..schema import BooleanField, EnumField, StringField

TEXT_OPERATIONS = ("uppercase", "lowercase", "reverse", "count")

POSITIVE_WORDS = (
    "good", "great", "excellent", "amazing", "wonderful",
    "fantastic", "love", "happy", "joy", "perfect",
)
NEGATIVE_WORDS = (
    "bad", "terrible", "awful", "hate", "sad",
    "angry", "horrible", "disgusting", "worst", "failure",
)


def count_words(text: str) -> int:
    return len(text.split())


def text_utils(operation: str, text: str) -> str:
    if operation == "uppercase":
        result = text.upper()
    elif operation == "lowercase":
        result = text.lower()
    elif operation == "reverse":
        result = text[::-1]
    else:
        result = f"Character count: {len(text)}, Word count: {count_words(text)}"

    return f'Operation: {operation}\nInput: "{text}"\nResult: {result}'


def top_words(text: str, limit: int = 5) -> List[Tuple[str, int]]:
    """Most frequent words longer than two characters, ties in first-seen order."""
    words = re.sub(r"[^\w\s]", "", text.lower()).split()
    return Counter(w for w in words if len(w) > 2).most_common(limit)


def sentiment(text: str) -> Tuple[str, int, int]:
    lowered = text.lower()
    positive = sum(1 for word in POSITIVE_WORDS if word in lowered)
    negative = sum(1 for word in NEGATIVE_WORDS if word in lowered)
    if positive > negative:
        label = "Positive"
    elif negative > positive:
        label = "Negative"
    else:
        label = "Neutral"
    return label, positive, negative


def analyze_text(text: str, include_words: bool = False, include_sentiment: bool = False) -> str:
    word_count = count_words(text)
    sentence_count = len([s for s in re.split(r"[.!?]+", text) if s.strip()])
    paragraph_count = len([p for p in re.split(r"\n\s*\n", text) if p.strip()])
    no_spaces = len(re.sub(r"\s", "", text))
    average = f"{word_count / sentence_count:.1f}" if sentence_count else "0"

    lines = [
        "Text Analysis Results:",
        "",
        "Basic Statistics:",
        f"- Characters: {len(text)} ({no_spaces} without spaces)",
        f"- Words: {word_count}",
        f"- Sentences: {sentence_count}",
        f"- Paragraphs: {paragraph_count}",
        f"- Average words per sentence: {average}",
    ]

    if include_words and word_count:
        lines += ["", "Top 5 Words:"]
        for index, (word, count) in enumerate(top_words(text), start=1):
            lines.append(f'{index}. "{word}" ({count} times)')

    if include_sentiment:
        label, positive, negative = sentiment(text)
        lines += [
            "",
            "Sentiment Analysis:",
            f"- Overall sentiment: {label}",
            f"- Positive indicators: {positive}",
            f"- Negative indicators: {negative}",
        ]

    return "\n".join(lines)


def register(handler: LearningHandler) -> None:
    handler.tool(
        name="text-utils",
        description="Perform various text operations",
        arguments=[
            EnumField("operation", "The text operation to perform", choices=TEXT_OPERATIONS),
            StringField("text", "The input text"),
        ],
    )(text_utils)


def register_analyzer(handler: LearningHandler) -> None:
    handler.tool(
        name="text_analyzer",
        description="Analyze text and provide detailed statistics",
        arguments=[
            StringField("text", "Text to analyze", min_length=1),
            BooleanField("include_words", "Include word frequency analysis", default=False),
            BooleanField("include_sentiment", "Include basic sentiment analysis", default=False),
        ],
    )(analyze_text)

"""Stylistic rendering of selected advice lines."""

import re
from collections.abc import Sequence

from fitcoach_advice.services.rng import RandomSource, one_of

HEADERS: tuple[str, ...] = (
    "🔧 Maintenance mode: quick tips",
    "⚡ Today's power move",
    "🤝 Gentle nudges for today",
    "🧪 Nerd notes on your numbers",
    "🎯 Today's key points",
    "",
)

BULLETS: tuple[str, ...] = ("・", "—", "▶", "✓", "◎", "•")

EMOJI_GROUPS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"calori|kcal|energy", re.IGNORECASE), "🔥"),
    (re.compile(r"protein|chicken|yogurt|egg|tuna|natto", re.IGNORECASE), "🍗"),
    (re.compile(r"\bfats?\b|fried|frying|oil|butter|dressing", re.IGNORECASE), "🥑"),
    (re.compile(r"carb|rice|oat|potato|bread|noodle|starch", re.IGNORECASE), "🍚"),
    (
        re.compile(r"fib(?:er|re)|vegetable|salad|broccoli|fruit", re.IGNORECASE),
        "🥦",
    ),
    (re.compile(r"water|hydrat|sodium|salt|broth", re.IGNORECASE), "💧"),
)


def decorate_line(line: str, bullet: str) -> str:
    """Prefix a bullet and append the emoji of every matching keyword group."""
    text = line if line.startswith(BULLETS) else f"{bullet} {line}"
    emoji = "".join(icon for pattern, icon in EMOJI_GROUPS if pattern.search(line))
    if emoji:
        text = f"{text} {emoji}"
    return text


def render_advice(lines: Sequence[str], rng: RandomSource) -> tuple[list[str], str]:
    """Return decorated lines and the final text with an optional header."""
    header = one_of(rng, HEADERS)
    bullet = one_of(rng, BULLETS)
    decorated = [decorate_line(line, bullet) for line in lines]
    parts = [header, *decorated] if header else decorated
    return decorated, "\n".join(parts)

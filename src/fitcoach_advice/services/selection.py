"""Seeded selection of advice lines."""

from collections.abc import Sequence
from dataclasses import dataclass

from fitcoach_advice.services.rng import RandomSource
from fitcoach_advice.services.topics import topic_key

MIN_LINES = 4
LINE_COUNT_SPREAD = 3


@dataclass(frozen=True)
class Selection:
    """Chosen lines in draw order with their topic keys."""

    lines: list[str]
    topics_used: list[str]


def pick_line_count(rng: RandomSource) -> int:
    """Return a line count in ``MIN_LINES .. MIN_LINES + 2``."""
    return MIN_LINES + int(rng() * LINE_COUNT_SPREAD)


def select_lines(pool: Sequence[str], rng: RandomSource) -> Selection:
    """Draw lines without replacement until the count is met or the pool is empty."""
    count = pick_line_count(rng)
    remaining = list(pool)
    chosen: list[str] = []
    while remaining and len(chosen) < count:
        index = int(rng() * len(remaining))
        chosen.append(remaining.pop(index))
    return Selection(lines=chosen, topics_used=[topic_key(line) for line in chosen])

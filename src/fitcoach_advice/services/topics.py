"""Topic keys and recent-topic filtering."""

import re
from collections.abc import Collection, Sequence

MIN_FRESH_CANDIDATES = 4
TOPIC_KEY_LENGTH = 32

_FULLWIDTH_DIGITS = str.maketrans("０１２３４５６７８９", "0123456789")
_NUMBER_WITH_UNIT = re.compile(
    r"\d+(?:[.,]\d+)*(?:\s*(?:kcal|kg|mg|ml|g|l|h|%)(?![a-z]))?"
)
_NON_WORD = re.compile(r"[\W_]+")


def topic_key(line: str) -> str:
    """Normalize an advice line into a short fingerprint.

    Amounts and punctuation are dropped so the same advice with different
    numbers maps to the same key.
    """
    text = line.lower().translate(_FULLWIDTH_DIGITS)
    text = _NUMBER_WITH_UNIT.sub("", text)
    text = _NON_WORD.sub("", text)
    return text[:TOPIC_KEY_LENGTH]


def filter_recent(pool: Sequence[str], recent_topics: Collection[str]) -> list[str]:
    """Drop lines whose topic was used recently, keeping a viable pool.

    When fewer than ``MIN_FRESH_CANDIDATES`` lines survive, the unfiltered
    pool is returned instead.
    """
    if not recent_topics:
        return list(pool)
    recent = set(recent_topics)
    fresh = [line for line in pool if topic_key(line) not in recent]
    if len(fresh) < MIN_FRESH_CANDIDATES:
        return list(pool)
    return fresh

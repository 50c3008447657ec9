"""Seeded pseudo-random numbers for reproducible advice variety."""

from collections.abc import Sequence
from datetime import date
from typing import Protocol, TypeVar

from fitcoach_advice.domain.advice import AdviceRequest

_MASK = 0xFFFFFFFF
_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619
_MULBERRY_INCREMENT = 0x6D2B79F5

T = TypeVar("T")


class RandomSource(Protocol):
    """Callable returning floats in [0, 1)."""

    def __call__(self) -> float:
        """Return the next value of the stream."""


def fnv1a_32(text: str) -> int:
    """Return the 32-bit FNV-1a hash of the string's UTF-16 code units."""
    encoded = text.encode("utf-16-le")
    value = _FNV_OFFSET
    for index in range(0, len(encoded), 2):
        unit = encoded[index] | (encoded[index + 1] << 8)
        value = ((value ^ unit) * _FNV_PRIME) & _MASK
    return value


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK


class Mulberry32:
    """mulberry32 generator: a 32-bit multiply-mix stream.

    The stream is a pure function of the seed, so two generators built from
    the same seed yield the same sequence on every platform.
    """

    def __init__(self, seed: int) -> None:
        self._state = seed & _MASK

    def __call__(self) -> float:
        self._state = (self._state + _MULBERRY_INCREMENT) & _MASK
        t = self._state
        r = _imul(t ^ (t >> 15), 1 | t)
        r ^= (r + _imul(r ^ (r >> 7), 61 | r)) & _MASK
        return ((r ^ (r >> 14)) & _MASK) / 4294967296


def one_of(rng: RandomSource, items: Sequence[T]) -> T:
    """Pick a single item uniformly."""
    return items[int(rng() * len(items))]


def pick_n(rng: RandomSource, items: Sequence[T], count: int) -> list[T]:
    """Pick up to ``count`` distinct items using a Fisher-Yates shuffle."""
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rng() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled[:count]


def format_number(value: float) -> str:
    """Render a number the way it appears in seed keys (``1200``, ``60.5``)."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def derive_seed_key(request: AdviceRequest, today: date) -> str:
    """Build the composite string the request's seed is hashed from."""
    if request.seed:
        return request.seed
    if request.variant:
        return request.variant
    nonce = request.context.nonce
    day = today.isoformat()
    if request.user_id:
        return f"{request.user_id}:{day}:{nonce or ''}"
    totals = request.totals
    key = "|".join(
        [
            day,
            format_number(totals.kcal),
            format_number(totals.protein),
            format_number(totals.fat),
            format_number(totals.carbs),
        ]
    )
    if nonce:
        key = f"{key}|{nonce}"
    return key


def seeded_generator(seed_key: str) -> Mulberry32:
    """Create a generator seeded from a composite key."""
    return Mulberry32(fnv1a_32(seed_key))

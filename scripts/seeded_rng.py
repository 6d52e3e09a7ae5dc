#!/usr/bin/env python3
"""
Seeded pseudo-random helpers.

Everything that varies from one day to the next is drawn from a single
linear-congruential stream seeded by the UTC day key, so the same key always
yields the same preview.
"""

from typing import Callable, List, Optional, Sequence, TypeVar

T = TypeVar("T")

Rng = Callable[[], float]

UINT32_MASK = 0xFFFFFFFF
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 0x100000000


def seed_from_key(key: str) -> int:
    """Polynomial rolling hash (h * 33 + char) of a day key, kept to 32 bits."""
    h = 0
    for char in key:
        h = (h * 33 + ord(char)) & UINT32_MASK
    return h


def create_seeded_rng(seed: int) -> Rng:
    """Return a generator of floats in [0, 1) for the given 32-bit seed."""
    state = (seed & UINT32_MASK) or 1

    def rng() -> float:
        nonlocal state
        state = (state * LCG_MULTIPLIER + LCG_INCREMENT) & UINT32_MASK
        return state / LCG_MODULUS

    return rng


def random_int(rng: Rng, low: int, high: int) -> int:
    """Inclusive integer in [low, high] using one draw."""
    return low + int(rng() * (high - low + 1))


def random_pick(items: Sequence[T], rng: Rng) -> Optional[T]:
    """Pick one element; an empty sequence returns None without drawing."""
    if not items:
        return None
    return items[int(rng() * len(items))]


def pick_many(items: Sequence[T], count: int, rng: Rng) -> List[T]:
    """Draw up to ``count`` distinct elements, one draw per element."""
    pool = list(items)
    result: List[T] = []
    while len(result) < count and pool:
        result.append(pool.pop(int(rng() * len(pool))))
    return result


def weighted_pick(items: Sequence[T], rng: Rng, weight_of: Callable[[T], float]) -> Optional[T]:
    """Weighted choice using one draw. Non-positive totals fall back to the first item."""
    if not items:
        return None
    weights = [max(0.0, float(weight_of(item))) for item in items]
    total = sum(weights)
    roll = rng() * total
    if total <= 0:
        return items[0]
    for item, weight in zip(items, weights):
        roll -= weight
        if roll < 0:
            return item
    return items[-1]

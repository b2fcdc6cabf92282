from __future__ import annotations

from typing import Sequence, TypeVar

from numpy.random import Generator

T = TypeVar("T")


def money_total(*amounts: float) -> float:
    """Sum monetary amounts, rounded to cents."""
    return round(sum(amounts), 2)


def clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(value, maximum))


def pick(rng: Generator, options: Sequence[T]) -> T:
    """Return a uniformly random element of a non-empty sequence."""
    if not options:
        raise ValueError("cannot pick from an empty sequence")
    return options[int(rng.integers(len(options)))]


def pick_weighted(rng: Generator, weights: dict[str, float]) -> str:
    """Return a key of ``weights`` chosen in proportion to its weight."""
    total = sum(weights.values())
    if total <= 0:
        raise ValueError("weights must sum to a positive value")
    roll = rng.random() * total
    running = 0.0
    last = ""
    for key, weight in weights.items():
        running += weight
        last = key
        if roll < running:
            return key
    return last


def interpolate(minimum: float, maximum: float, fraction: float) -> float:
    """Linearly interpolate between two values with a clamped fraction."""
    return minimum + (maximum - minimum) * clamp(fraction, 0.0, 1.0)

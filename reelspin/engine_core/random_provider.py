"""
Random Providers - Bounded uniform integers for the engine.

The engine only ever asks for "an index in [0, bound)". Keeping that
behind a small interface lets tests replay exact sequences and lets
production use OS entropy, without the engine knowing which it has.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
import random
from typing import Iterable

from ..errors import RandomSourceExhausted


class RandomProvider(ABC):
    """Source of uniformly distributed integers."""

    @abstractmethod
    def next(self, bound: int) -> int:
        """Return a uniform int in [0, bound). Raises ValueError if bound <= 0."""

    def next_range(self, minimum: int, maximum: int) -> int:
        """Return a uniform int in [minimum, maximum)."""
        if maximum <= minimum:
            raise ValueError(f"Empty range [{minimum}, {maximum})")
        return minimum + self.next(maximum - minimum)

    @abstractmethod
    def next_float(self) -> float:
        """Return a float in [0.0, 1.0)."""


def _check_bound(bound: int) -> None:
    if bound <= 0:
        raise ValueError(f"bound must be positive, got {bound}")


class SeededRandomProvider(RandomProvider):
    """Mersenne Twister provider; reproducible when given a seed."""

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self.rng = random.Random(seed)

    def next(self, bound: int) -> int:
        _check_bound(bound)
        return self.rng.randrange(bound)

    def next_float(self) -> float:
        return self.rng.random()


class SystemRandomProvider(RandomProvider):
    """OS-entropy provider for production play. Not reproducible."""

    def __init__(self):
        self.rng = random.SystemRandom()

    def next(self, bound: int) -> int:
        _check_bound(bound)
        return self.rng.randrange(bound)

    def next_float(self) -> float:
        return self.rng.random()


class SequenceRandomProvider(RandomProvider):
    """
    Replays a fixed list of values.

    Each value is reduced modulo the requested bound, so a sequence of
    symbol indices can be written directly. With cycle=True the sequence
    wraps around; otherwise running out raises RandomSourceExhausted.
    """

    def __init__(self, values: Iterable[int], cycle: bool = False):
        self.values = list(values)
        self.cycle = cycle
        self.calls = 0

    def next(self, bound: int) -> int:
        _check_bound(bound)
        if self.calls >= len(self.values):
            if not self.cycle or not self.values:
                raise RandomSourceExhausted(
                    f"Sequence exhausted after {self.calls} draws"
                )
            value = self.values[self.calls % len(self.values)]
        else:
            value = self.values[self.calls]
        self.calls += 1
        return value % bound

    def next_float(self) -> float:
        return self.next(1_000_000) / 1_000_000

    def reset(self) -> None:
        self.calls = 0


def build_random_provider(seed: int | None = None) -> RandomProvider:
    """Seeded provider when a seed is given, OS entropy otherwise."""
    if seed is None:
        return SystemRandomProvider()
    return SeededRandomProvider(seed)

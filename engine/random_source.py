"""
Randomness Source for the Simulation Engines

Every draw the engines make goes through a RandomSource so a host can
inject its own generator and tests can fix the seed for reproducible
traces. Each engine owns its own instance; nothing touches the global
``random`` module state.
"""

import random
from typing import Optional, Protocol, Sequence, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class RandomSource(Protocol):
    """Uniform draws within caller-specified bounds."""

    def uniform(self, low: float, high: float) -> float:
        ...

    def randint(self, low: int, high: int) -> int:
        """Integer in [low, high], both inclusive."""
        ...

    def index(self, n: int) -> int:
        """Integer in [0, n)."""
        ...

    def choice(self, seq: Sequence[T]) -> T:
        ...


class SeededRandom:
    """
    RandomSource backed by a private ``random.Random`` instance.

    Example:
        rng = SeededRandom(seed=42)
        noise = rng.uniform(-0.5, 0.5)
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)

    def uniform(self, low: float, high: float) -> float:
        return self._random.uniform(low, high)

    def randint(self, low: int, high: int) -> int:
        return self._random.randint(low, high)

    def index(self, n: int) -> int:
        return self._random.randrange(n)

    def choice(self, seq: Sequence[T]) -> T:
        return self._random.choice(seq)

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed!r})"

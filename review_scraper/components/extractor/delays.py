"""
Pacing delays inserted between browser actions.

Delays are not needed for correctness; they keep the request rhythm irregular.
Production code uses `JitterDelay`, tests pass `NoDelay`.
"""
import random
from abc import ABC, abstractmethod
from typing import Optional


class DelayProvider(ABC):
    """Chooses how long to pause, in milliseconds, within a [low, high) range."""

    @abstractmethod
    def jitter(self, low_ms: int, high_ms: int) -> int:
        ...


class JitterDelay(DelayProvider):
    """
    Uniformly random delay in `[low_ms, high_ms)`.

    Args:
        seed (Optional[int]): Seed for a private random generator. None seeds from the OS.
    """

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def jitter(self, low_ms: int, high_ms: int) -> int:
        if high_ms <= low_ms:
            return low_ms
        return self._random.randrange(low_ms, high_ms)


class NoDelay(DelayProvider):
    """Always returns 0."""

    def jitter(self, low_ms: int, high_ms: int) -> int:
        return 0

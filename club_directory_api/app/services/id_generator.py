"""
Identifier generation for new members.

The store only needs something it can call to get a candidate id;
uniqueness against the live collection is checked by the store
itself.  ``RandomIdGenerator`` mirrors the five digit ids used by the
original directory service, ``SequentialIdGenerator`` yields a
predictable sequence for tests and fixtures.
"""

import itertools
import random
from typing import Optional, Protocol


class IdGenerator(Protocol):
    """Callable returning a new candidate member id."""

    def __call__(self) -> str:
        ...


class RandomIdGenerator:
    """Draw ids uniformly from ``[low, high]``."""

    def __init__(self, low: int = 10000, high: int = 99999, rng: Optional[random.Random] = None) -> None:
        self.low = low
        self.high = high
        self._rng = rng or random.Random()

    def __call__(self) -> str:
        return str(self._rng.randint(self.low, self.high))


class SequentialIdGenerator:
    """Yield ``prefix + n`` for n = start, start + 1, ..."""

    def __init__(self, start: int = 1, prefix: str = "") -> None:
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}{next(self._counter)}"

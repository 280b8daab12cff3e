"""Seedable random source shared by weapons.

Accuracy error sampling goes through this service instead of the global
``random`` module so that replays and tests can pin the sequence of shot
directions with a seed, or snapshot/restore it mid-fight.
"""

from __future__ import annotations

import random
from typing import Any

from armory.logger import get_logger

log = get_logger("rng")


class RNGService:
    _instance: "RNGService | None" = None

    def __init__(self, seed: int | float | str | bytes | bytearray | None = None):
        self._generator = random.Random(seed)
        self._seed_val = seed
        log.debug(f"RNG initialized with seed: {seed!r}")

    @classmethod
    def get(cls) -> "RNGService":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def initialize(cls, seed: int | float | str | bytes | bytearray | None = None) -> None:
        cls._instance = cls(seed)

    @property
    def seed_value(self):
        return self._seed_val

    def seed(self, a: int | float | str | bytes | bytearray | None = None) -> None:
        self._seed_val = a
        self._generator.seed(a)
        log.debug(f"RNG re-seeded: {a!r}")

    def symmetric(self, limit: float) -> float:
        """Return a float uniformly drawn from [-limit, +limit]."""
        if limit == 0.0:
            return 0.0
        return self._generator.uniform(-limit, limit)

    def get_state(self) -> tuple[Any, ...]:
        """Return an object capturing the current internal state of the generator."""
        return self._generator.getstate()

    def set_state(self, state: tuple[Any, ...]) -> None:
        """Restore the internal state of the generator from a previous get_state() call."""
        self._generator.setstate(state)


__all__ = ["RNGService"]

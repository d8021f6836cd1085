"""Package-wide random number generation."""

from __future__ import annotations

import random
import time
from collections.abc import MutableSequence
from typing import Any

_generator = random.Random()


def new_generator(seed: int | None) -> random.Random:
    """Return a new independent generator with the given seed."""
    return random.Random(seed)


def get_generator() -> random.Random:
    """Return the package-wide generator."""
    return _generator


def seed(value: int) -> None:
    """Seed the package-wide generator."""
    _generator.seed(value)


def seed_now() -> None:
    """Seed the package-wide generator with the current time in seconds."""
    _generator.seed(int(time.time()))


def uniform() -> float:
    """Return a uniformly distributed number in [0, 1)."""
    return _generator.random()


def uniform_int(n: int) -> int:
    """Return a uniformly distributed integer in [0, n)."""
    if n <= 0:
        raise ValueError(f"uniform_int needs a positive bound, got {n}")
    return _generator.randrange(n)


def gaussian(sigma: float) -> float:
    """Return a normally distributed number with mean 0 and deviation ``sigma``."""
    return _generator.gauss(0.0, sigma)


def shuffle(items: MutableSequence[Any]) -> None:
    """Shuffle a mutable sequence in place."""
    _generator.shuffle(items)
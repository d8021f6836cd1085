"""Small general-purpose algorithms."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


def categorize(source: Sequence[Any], categories: Sequence[int], ncat: int) -> list[list[Any]]:
    """Split ``source`` into ``ncat`` lists; ``source[i]`` goes to list ``categories[i]``."""
    if len(source) != len(categories):
        raise ValueError("source and categories differ in length")
    out: list[list[Any]] = [[] for _ in range(ncat)]
    for item, cat in zip(source, categories):
        out[cat].append(item)
    return out


def categorize_embed(source: Sequence[int], categories: Sequence[int], ncat: int) -> list[list[int]]:
    """Split ``source`` into ``ncat`` lists; item ``s`` goes to list ``categories[s]``."""
    out: list[list[int]] = [[] for _ in range(ncat)]
    for item in source:
        out[categories[item]].append(item)
    return out


def remove_sorted_duplicates(values: Sequence[float]) -> list[float]:
    """Drop consecutive duplicates from a sorted sequence."""
    if not values:
        return []
    kept = [a for a, b in zip(values, values[1:]) if a != b]
    kept.append(values[-1])
    return kept
from __future__ import annotations

import random

import pytest

from intset.core import IntSet


def random_values(seed: int, *, size: int, high: int) -> list[int]:
    rng = random.Random(seed)
    return [rng.randint(1, high) for _ in range(size)]


@pytest.fixture  # type: ignore[misc]
def a() -> IntSet:
    return IntSet([1, 2, 3])


@pytest.fixture  # type: ignore[misc]
def b() -> IntSet:
    return IntSet([2, 3, 4])


@pytest.fixture  # type: ignore[misc]
def small() -> IntSet:
    return IntSet([1, 5, 63])


@pytest.fixture  # type: ignore[misc]
def large() -> IntSet:
    return IntSet([5, 64, 65, 200, 1000])

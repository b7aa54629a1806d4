"""Functional interface to :class:`~intset.core.IntSet`.

None of these functions modify their arguments. The two-argument functions
are curried with :func:`toolz.curry`, so they can be partially applied and
used with :func:`map` or :func:`filter`:

>>> evens = intset(2, 4, 6)
>>> list(filter(issubset(b=evens), [intset(2), intset(3)]))
[IntSet([2])]

"""

from __future__ import annotations

from typing import Iterable

import toolz
from public import public

from .core import IntSet


@public  # type: ignore[misc]
def intset(*values: int) -> IntSet:
    """Construct an :class:`~intset.core.IntSet` from `values`."""
    return IntSet(values)


@public  # type: ignore[misc]
def union(a: IntSet, *sets: Iterable[int]) -> IntSet:
    """Return the elements that are in `a` or any of `sets`."""
    return a.union(*sets)


@public  # type: ignore[misc]
def intersect(a: IntSet, *sets: Iterable[int]) -> IntSet:
    """Return the elements that are in `a` and every one of `sets`."""
    return a.intersect(*sets)


@public  # type: ignore[misc]
def difference(a: IntSet, *sets: Iterable[int]) -> IntSet:
    """Return the elements of `a` that are in none of `sets`."""
    return a.difference(*sets)


@public  # type: ignore[misc]
@toolz.curry
def symmetric_difference(a: IntSet, b: Iterable[int]) -> IntSet:
    """Return the elements that are in exactly one of `a` and `b`."""
    return a.symmetric_difference(b)


@public  # type: ignore[misc]
@toolz.curry
def issubset(a: IntSet, b: Iterable[int]) -> bool:
    """Return whether every element of `a` is in `b`."""
    return a.issubset(b)


@public  # type: ignore[misc]
def reduce_union(sets: Iterable[IntSet]) -> IntSet:
    """Return the union of all of `sets`."""
    return toolz.reduce(IntSet.union_update, sets, IntSet())


@public  # type: ignore[misc]
def pretty(s: IntSet, *, tablefmt: str = "simple") -> str:
    """Return a table of the storage chunks of `s` that hold members."""
    return s.bits.table(tablefmt=tablefmt)

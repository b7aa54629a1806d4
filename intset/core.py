"""A sorted set of positive integers backed by a bit vector.

Integer ``n`` is a member of an :class:`IntSet` when bit ``n - 1`` of its
:class:`~intset.bitstorage.BitStorage` is set. Memory use is proportional to
the largest member, so the set is meant for dense collections of small
integers such as row ids. Sparse sets of a few large integers are better
served by the builtin :class:`set`.

Whole-set operations (union, intersection, difference and symmetric
difference) run chunk by chunk through :func:`~intset.matchedmap.matched_map`
instead of element by element.

"""

from __future__ import annotations

import collections.abc
import operator
import sys
from typing import (
    Any,
    Callable,
    Iterable,
    Iterator,
    MutableSet,
    Optional,
    Tuple,
    TypeVar,
)

from .bitstorage import BitStorage
from .matchedmap import BitOp, matched_map

MAX_ELEMENT = sys.maxsize
HASH_SEED = 0x88989F1FC7DEA67D

S = TypeVar("S", bound="IntSet")


class _Missing:
    """Marker for arguments that were not passed."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<missing>"


MISSING: Any = _Missing()


def check_element(value: Any) -> int:
    """Return `value` as an :class:`int` if it can be stored in an IntSet.

    Raises
    ------
    TypeError
        If `value` is not an integer
    ValueError
        If `value` is not between 1 and :data:`MAX_ELEMENT`

    """
    n = operator.index(value)
    if not 0 < n <= MAX_ELEMENT:
        raise ValueError(
            f"elements of IntSet must be between 1 and {MAX_ELEMENT}, got {n}"
        )
    return n


class IntSetIterator(Iterator[int]):
    """Iterate over the members of an :class:`IntSet` in ascending order."""

    __slots__ = "bits", "position"

    def __init__(self, bits: BitStorage) -> None:
        self.bits = bits
        self.position: Optional[int] = 0

    def __iter__(self) -> IntSetIterator:
        return self

    def __next__(self) -> int:
        position = self.position
        if position is None:
            raise StopIteration
        found = self.bits.find_next(position)
        if found is None:
            self.position = None
            raise StopIteration
        self.position = found + 1
        return found + 1


class IntSet(MutableSet[int]):
    """A sorted set of positive integers.

    Examples
    --------
    >>> s = IntSet([3, 1, 1000])
    >>> s
    IntSet([1, 3, 1000])
    >>> s.first(), s.last(), len(s)
    (1, 1000, 3)

    """

    __slots__ = ("bits",)

    def __init__(self, values: Iterable[int] = ()) -> None:
        """Construct an :class:`IntSet` from an iterable of integers."""
        self.bits = BitStorage()
        for value in values:
            self.add(value)

    @classmethod
    def _from_iterable(cls, values: Iterable[int]) -> IntSet:
        return cls(values)

    @classmethod
    def _coerce(cls, other: Iterable[int]) -> IntSet:
        return other if isinstance(other, IntSet) else cls(other)

    def _members_of(self, other: Iterable[int]) -> IntSet:
        # only values that could already be members matter to an intersection
        if isinstance(other, IntSet):
            return other
        limit = len(self.bits)
        result = type(self)()
        for value in other:
            try:
                n = operator.index(value)
            except TypeError:
                continue
            if 0 < n <= limit:
                result.bits.set(n - 1, True)
        return result

    # -- membership and mutation ------------------------------------------

    def __contains__(self, value: Any) -> bool:
        """Check whether `value` is in the set.

        Values that could never be members, including non-integers, are
        reported as absent.

        """
        try:
            n = operator.index(value)
        except TypeError:
            return False
        return self.bits.get(n - 1)

    def add(self, value: int) -> None:
        """Add `value` to the set.

        Raises
        ------
        TypeError
            If `value` is not an integer
        ValueError
            If `value` is not between 1 and :data:`MAX_ELEMENT`

        """
        n = check_element(value)
        self.bits.set(n - 1, True)

    def push(self: S, *values: int) -> S:
        """Add each of `values` to the set, in order, and return the set.

        Each value is checked and added before the next one is looked at, so
        an invalid value leaves the values before it in the set.

        """
        for value in values:
            self.add(value)
        return self

    def discard(self, value: int) -> None:
        """Remove `value` from the set if it is present.

        Non-positive values are never members, so discarding them is a no-op.

        """
        n = operator.index(value)
        if n > 0:
            self.bits.set(n - 1, False)

    def delete(self: S, value: int) -> S:
        """Remove `value` from the set if it is present and return the set."""
        self.discard(value)
        return self

    def pop(self, value: Any = MISSING, default: Any = MISSING) -> Any:
        """Remove and return an element.

        With no arguments remove and return the largest element. With `value`
        remove and return `value`, or return `default` if `value` is absent
        and a default was given.

        Raises
        ------
        KeyError
            If the set is empty, or if `value` is absent and there is no
            `default`

        """
        if value is MISSING:
            return self.pop(self.last())
        if value in self:
            self.discard(value)
            return operator.index(value)
        if default is MISSING:
            raise KeyError(value)
        return default

    def popfirst(self) -> int:
        """Remove and return the smallest element.

        Raises
        ------
        KeyError
            If the set is empty

        """
        return self.pop(self.first())

    def clear(self) -> None:
        """Remove every element, keeping the allocated storage."""
        self.bits.fill(False)

    def is_empty(self) -> bool:
        """Return whether the set has no elements."""
        return not self.bits.any()

    def sizehint(self: S, n: int) -> S:
        """Allocate room for elements up to `n` and return the set."""
        if n > 0:
            self.bits.sizehint(n)
        return self

    def retain(self: S, predicate: Callable[[int], bool]) -> S:
        """Remove every element for which `predicate` is false."""
        for value in self:
            if not predicate(value):
                self.discard(value)
        return self

    def copy(self: S) -> S:
        """Return an independent copy of the set."""
        result = type(self)()
        result.copy_from(self)
        return result

    __copy__ = copy

    def copy_from(self: S, other: IntSet) -> S:
        """Replace the contents of the set with those of `other`."""
        self.bits.copy_from(other.bits)
        return self

    # -- size, order and iteration -----------------------------------------

    def __len__(self) -> int:
        """Return the number of elements, counting set bits."""
        return self.bits.count()

    def __bool__(self) -> bool:
        return self.bits.any()

    def __iter__(self) -> IntSetIterator:
        """Iterate over the elements of the set in ascending order."""
        return IntSetIterator(self.bits)

    def __reversed__(self) -> Iterator[int]:
        bits = self.bits
        position = bits.find_prev(len(bits) - 1)
        while position is not None:
            yield position + 1
            position = bits.find_prev(position - 1)

    def first(self) -> int:
        """Return the smallest element.

        Raises
        ------
        KeyError
            If the set is empty

        """
        position = self.bits.find_next(0)
        if position is None:
            raise KeyError("first of an empty IntSet")
        return position + 1

    def last(self) -> int:
        """Return the largest element.

        Raises
        ------
        KeyError
            If the set is empty

        """
        position = self.bits.find_prev(len(self.bits) - 1)
        if position is None:
            raise KeyError("last of an empty IntSet")
        return position + 1

    minimum = first
    maximum = last

    def extrema(self) -> Tuple[int, int]:
        """Return the smallest and largest elements."""
        return self.first(), self.last()

    def __repr__(self) -> str:
        """Return the string representation of the set."""
        values = ", ".join(map(str, self))
        return f"{self.__class__.__name__}([{values}])"

    # -- set algebra --------------------------------------------------------

    def union_update(self: S, *others: Iterable[int]) -> S:
        """Add the elements of each of `others` to the set."""
        for other in others:
            if isinstance(other, IntSet):
                matched_map(BitOp.OR, self.bits, other.bits)
            else:
                self.push(*other)
        return self

    def intersect_update(self: S, *others: Iterable[int]) -> S:
        """Keep only the elements that are also in each of `others`."""
        for other in others:
            matched_map(BitOp.AND, self.bits, self._members_of(other).bits)
        return self

    def difference_update(self: S, *others: Iterable[int]) -> S:
        """Remove the elements of each of `others` from the set."""
        for other in others:
            if isinstance(other, IntSet):
                matched_map(BitOp.ANDNOT, self.bits, other.bits)
            else:
                for value in other:
                    self.discard(value)
        return self

    def symmetric_difference_update(self: S, other: Any) -> S:
        """Toggle membership of the elements of `other`.

        `other` can be a single integer, in which case only that element is
        toggled.

        Raises
        ------
        ValueError
            If `other` is an integer that is not between 1 and
            :data:`MAX_ELEMENT`

        """
        if isinstance(other, collections.abc.Iterable):
            matched_map(BitOp.XOR, self.bits, self._coerce(other).bits)
        else:
            n = check_element(other)
            self.bits.set(n - 1, not self.bits.get(n - 1))
        return self

    def union(self, *others: Iterable[int]) -> IntSet:
        """Return a new set with the elements of the set and all `others`."""
        return self.copy().union_update(*others)

    def intersect(self, *others: Iterable[int]) -> IntSet:
        """Return a new set with the elements common to the set and `others`."""
        if not others:
            return self.copy()
        other, *rest = others
        other = self._members_of(other)
        if self.bits.nchunks < other.bits.nchunks:
            shorter, longer = self, other
        else:
            shorter, longer = other, self
        result = type(self)().copy_from(shorter)
        return result.intersect_update(longer, *rest)

    intersection = intersect

    def difference(self, *others: Iterable[int]) -> IntSet:
        """Return a new set with the elements not in any of `others`."""
        return self.copy().difference_update(*others)

    def symmetric_difference(self, other: Any) -> IntSet:
        """Return a new set with the elements in exactly one of the two sets."""
        return self.copy().symmetric_difference_update(other)

    def isdisjoint(self, other: Iterable[int]) -> bool:
        """Return whether the set has no elements in common with `other`."""
        return self.intersect(other).is_empty()

    def issubset(self, other: Iterable[int]) -> bool:
        """Return whether every element of the set is in `other`."""
        return self == self.intersect(other)

    def issuperset(self, other: Iterable[int]) -> bool:
        """Return whether every element of `other` is in the set."""
        if isinstance(other, IntSet):
            return other.issubset(self)
        return all(value in self for value in other)

    def __or__(self, other: Any) -> Any:
        if not isinstance(other, collections.abc.Set):
            return NotImplemented
        return self.union(other)

    __ror__ = __or__

    def __and__(self, other: Any) -> Any:
        if not isinstance(other, collections.abc.Set):
            return NotImplemented
        return self.intersect(other)

    __rand__ = __and__

    def __sub__(self, other: Any) -> Any:
        if not isinstance(other, collections.abc.Set):
            return NotImplemented
        return self.difference(other)

    def __rsub__(self, other: Any) -> Any:
        if not isinstance(other, collections.abc.Set):
            return NotImplemented
        return self._coerce(other).difference(self)

    def __xor__(self, other: Any) -> Any:
        if not isinstance(other, collections.abc.Set):
            return NotImplemented
        return self.symmetric_difference(other)

    __rxor__ = __xor__

    def __ior__(self, other: Any) -> Any:
        if not isinstance(other, collections.abc.Set):
            return NotImplemented
        return self.union_update(other)

    def __iand__(self, other: Any) -> Any:
        if not isinstance(other, collections.abc.Set):
            return NotImplemented
        return self.intersect_update(other)

    def __isub__(self, other: Any) -> Any:
        if not isinstance(other, collections.abc.Set):
            return NotImplemented
        return self.difference_update(other)

    def __ixor__(self, other: Any) -> Any:
        if not isinstance(other, collections.abc.Set):
            return NotImplemented
        return self.symmetric_difference_update(other)

    # -- comparison and hashing ---------------------------------------------

    def __eq__(self, other: Any) -> bool:
        """Return whether `self` and `other` have the same elements."""
        if isinstance(other, IntSet):
            return self.bits == other.bits
        return super().__eq__(other)

    def __le__(self, other: Any) -> bool:
        """Return whether `self` is a subset of `other`."""
        if isinstance(other, IntSet):
            return self.issubset(other)
        return super().__le__(other)

    def __lt__(self, other: Any) -> bool:
        """Return whether `self` is a proper subset of `other`."""
        if isinstance(other, IntSet):
            return self.issubset(other) and self != other
        return super().__lt__(other)

    def __ge__(self, other: Any) -> bool:
        """Return whether `self` is a superset of `other`."""
        if isinstance(other, IntSet):
            return other.issubset(self)
        return super().__ge__(other)

    def __gt__(self, other: Any) -> bool:
        """Return whether `self` is a proper superset of `other`."""
        if isinstance(other, IntSet):
            return other.issubset(self) and self != other
        return super().__gt__(other)

    def __hash__(self) -> int:
        """Return a hash of the elements of the set.

        Equal sets hash equally no matter how much storage each has allocated.
        The hash is computed from the storage chunks, so it differs from the
        hash of an equal :class:`frozenset`. Do not mix the two as keys of
        one mapping.

        """
        return self.bits.hash_chunks(HASH_SEED)

"""Protocol classes describing what an integer set provides."""

import abc
from typing import Any, Iterator

from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class OrderedIntegerSet(Protocol):
    """A protocol for sets of integers that iterate in ascending order."""

    @abc.abstractmethod
    def __contains__(self, value: Any) -> bool:
        """Return whether `value` is a member."""

    @abc.abstractmethod
    def __iter__(self) -> Iterator[int]:
        """Iterate over the members in ascending order."""

    @abc.abstractmethod
    def __len__(self) -> int:
        """Return the number of members."""

    @abc.abstractmethod
    def __eq__(self, other: Any) -> bool:
        """Return whether `self` and `other` have the same members."""

    @abc.abstractmethod
    def __le__(self, other: Any) -> bool:
        """Return whether `self` is a subset of `other`."""

    @abc.abstractmethod
    def __lt__(self, other: Any) -> bool:
        """Return whether `self` is a proper subset of `other`."""

    @abc.abstractmethod
    def __hash__(self) -> int:
        """Return a hash of the members."""

    @abc.abstractmethod
    def first(self) -> int:
        """Return the smallest member."""

    @abc.abstractmethod
    def last(self) -> int:
        """Return the largest member."""

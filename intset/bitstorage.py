"""A growable sequence of bits stored in 64-bit chunks.

:class:`BitStorage` is the storage layer underneath
:class:`~intset.core.IntSet`. Bits are grouped into unsigned 64-bit words
("chunks") held in an :class:`array.array`, and the logical length of the
storage is always a whole number of chunks.

Every bit that has not been explicitly set is zero, including the bits that
are allocated past the last member of the set. Growth zero-fills the chunks it
exposes, and reads past the end report ``False`` instead of failing, so the
storage behaves as if it were followed by an infinite run of zero bits.

"""

import array
import logging
from typing import Any, Iterator, Optional, Tuple

import tabulate

logger = logging.getLogger(__name__)

CHUNK_BITS = 64
CHUNK_MASK = (1 << CHUNK_BITS) - 1

_TYPECODE = "Q"


def round_up(nbits: int) -> int:
    """Return the smallest multiple of :data:`CHUNK_BITS` >= `nbits`."""
    return -(-nbits // CHUNK_BITS) * CHUNK_BITS


def popcount(word: int) -> int:
    """Return the number of set bits in `word`."""
    return bin(word).count("1")


def _zeros(nchunks: int) -> bytes:
    return bytes(nchunks * array.array(_TYPECODE).itemsize)


class BitStorage:
    """A growable, zero-tailed bit vector."""

    __slots__ = ("chunks",)

    def __init__(self, nbits: int = 0) -> None:
        """Construct a :class:`~intset.bitstorage.BitStorage`.

        Parameters
        ----------
        nbits
            The initial number of bits, rounded up to a whole chunk.

        """
        self.chunks = array.array(_TYPECODE)
        if nbits > 0:
            self.grow_to(nbits)

    def __len__(self) -> int:
        """Return the logical length of the storage in bits."""
        return len(self.chunks) * CHUNK_BITS

    def __repr__(self) -> str:
        return f"{type(self).__name__}(nbits={len(self)}, count={self.count()})"

    @property
    def nchunks(self) -> int:
        """Return the number of allocated chunks."""
        return len(self.chunks)

    def chunk(self, index: int) -> int:
        """Return the chunk at `index`."""
        return self.chunks[index]

    def set_chunk(self, index: int, word: int) -> None:
        """Overwrite the chunk at `index` with `word`."""
        self.chunks[index] = word & CHUNK_MASK

    def get(self, pos: int) -> bool:
        """Return the bit at `pos`.

        Positions outside the storage, negative ones included, read as
        ``False``.

        """
        if not 0 <= pos < len(self):
            return False
        index, offset = divmod(pos, CHUNK_BITS)
        return (self.chunks[index] >> offset) & 1 == 1

    def set(self, pos: int, value: bool) -> None:
        """Set the bit at `pos` to `value`.

        Clearing a bit past the end is a no-op: that bit is already zero and
        the storage is not grown to record it.

        Raises
        ------
        IndexError
            If `pos` is negative

        """
        if pos < 0:
            raise IndexError(f"bit position must be non-negative, pos == {pos}")
        if pos >= len(self):
            if not value:
                return
            self.grow_to(pos + 1)
        index, offset = divmod(pos, CHUNK_BITS)
        if value:
            self.chunks[index] |= 1 << offset
        else:
            self.chunks[index] &= ~(1 << offset) & CHUNK_MASK

    def grow_to(self, nbits: int) -> None:
        """Grow the storage to hold at least `nbits` bits.

        The new length is rounded up to a whole chunk and every newly exposed
        chunk is zero. Requests that do not exceed the current length are
        ignored.

        """
        old_nbits = len(self)
        new_nbits = round_up(nbits)
        if new_nbits <= old_nbits:
            return
        self.chunks.frombytes(_zeros((new_nbits - old_nbits) // CHUNK_BITS))
        logger.debug("grew bit storage from %d to %d bits", old_nbits, new_nbits)

    sizehint = grow_to

    def trim_to(self, nbits: int) -> None:
        """Drop every chunk past the one containing bit ``nbits - 1``.

        Callers must only trim chunks whose contents are logically zero.

        """
        nchunks = round_up(nbits) // CHUNK_BITS
        if nchunks < len(self.chunks):
            old_nbits = len(self)
            del self.chunks[nchunks:]
            logger.debug("trimmed bit storage from %d to %d bits", old_nbits, len(self))

    def fill(self, value: bool) -> None:
        """Set every allocated bit to `value` without changing the length."""
        word = CHUNK_MASK if value else 0
        for index in range(len(self.chunks)):
            self.chunks[index] = word

    def copy_from(self, other: "BitStorage") -> None:
        """Replace the contents of this storage with a copy of `other`."""
        self.chunks = array.array(_TYPECODE, other.chunks)

    def copy(self) -> "BitStorage":
        """Return an independent copy of this storage."""
        result = type(self)()
        result.copy_from(self)
        return result

    def any(self) -> bool:
        """Return whether any bit is set."""
        return any(self.chunks)

    def count(self) -> int:
        """Return the number of set bits."""
        return sum(map(popcount, self.chunks))

    def find_next(self, pos: int) -> Optional[int]:
        """Return the position of the first set bit at or after `pos`.

        Return ``None`` if there is no such bit.

        """
        pos = max(pos, 0)
        if pos >= len(self):
            return None
        chunks = self.chunks
        index, offset = divmod(pos, CHUNK_BITS)
        word = chunks[index] >> offset << offset
        while not word:
            index += 1
            if index == len(chunks):
                return None
            word = chunks[index]
        return index * CHUNK_BITS + (word & -word).bit_length() - 1

    def find_prev(self, pos: int) -> Optional[int]:
        """Return the position of the last set bit at or before `pos`.

        Return ``None`` if there is no such bit.

        """
        if pos < 0:
            return None
        pos = min(pos, len(self) - 1)
        if pos < 0:
            return None
        chunks = self.chunks
        index, offset = divmod(pos, CHUNK_BITS)
        # keep bits 0..offset of the starting chunk
        word = chunks[index] & ((2 << offset) - 1)
        while not word:
            index -= 1
            if index < 0:
                return None
            word = chunks[index]
        return index * CHUNK_BITS + word.bit_length() - 1

    def last_nonzero_chunk(self) -> int:
        """Return the index of the highest non-zero chunk, or -1 if none."""
        chunks = self.chunks
        index = len(chunks) - 1
        while index >= 0 and not chunks[index]:
            index -= 1
        return index

    def __eq__(self, other: Any) -> bool:
        """Compare as if the shorter storage were zero-extended."""
        if not isinstance(other, BitStorage):
            return NotImplemented
        longer, shorter = self.chunks, other.chunks
        if len(longer) == len(shorter):
            return longer == shorter
        if len(longer) < len(shorter):
            longer, shorter = shorter, longer
        nshared = len(shorter)
        return longer[:nshared] == shorter and not any(longer[nshared:])

    __hash__ = None  # type: ignore[assignment]

    def hash_chunks(self, seed: int) -> int:
        """Fold the chunks into a hash, starting from `seed`.

        Chunks are visited from the highest index downward and the all-zero
        chunks at the top are skipped, so the result does not depend on how
        much zero tail happens to be allocated.

        """
        result = seed
        for index in range(self.last_nonzero_chunk(), -1, -1):
            result = hash((self.chunks[index], result))
        return result

    def iter_nonzero_chunks(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(index, chunk)`` pairs for each non-zero chunk."""
        return ((index, word) for index, word in enumerate(self.chunks) if word)

    def table(self, *, tablefmt: str = "simple") -> str:
        """Return a table of the non-zero chunks, for debugging."""
        rows = [
            (index, index * CHUNK_BITS, f"{word:#018x}", popcount(word))
            for index, word in self.iter_nonzero_chunks()
        ]
        return tabulate.tabulate(
            rows,
            headers=("chunk", "first bit", "value", "count"),
            tablefmt=tablefmt,
            disable_numparse=True,
        )

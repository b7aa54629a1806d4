"""Combine two bit storages of different lengths chunk by chunk.

The shorter operand is treated as if it were padded with zero bits out to
infinity. Rather than special-casing each set operation, :func:`matched_map`
evaluates the combining function at its boundary points and uses the result
to decide whether the destination has to grow, shrink, or can keep its own
tail as is.

"""

import enum
import logging
import operator
from typing import Callable, Union

from .bitstorage import CHUNK_BITS, CHUNK_MASK, BitStorage

logger = logging.getLogger(__name__)

Word = int
Combine = Callable[[Word, Word], Word]


def _andnot(left: Word, right: Word) -> Word:
    return left & ~right


class BitOp(enum.Enum):
    """The bitwise operations behind the set algebra.

    Members are callable on both booleans and 64-bit chunks.

    """

    AND = "&"
    OR = "|"
    XOR = "^"
    ANDNOT = "&~"

    def __call__(self, left: Word, right: Word) -> Word:
        return _WORD_FUNCTIONS[self](left, right) & CHUNK_MASK


_WORD_FUNCTIONS = {
    BitOp.AND: operator.and_,
    BitOp.OR: operator.or_,
    BitOp.XOR: operator.xor,
    BitOp.ANDNOT: _andnot,
}


def bit_map(f: Union[BitOp, Combine], dest: BitStorage, src: BitStorage) -> int:
    """Apply `f` to the chunks shared by `dest` and `src`, storing into `dest`.

    Return the number of chunks combined.

    """
    dest_chunks, src_chunks = dest.chunks, src.chunks
    nshared = min(len(dest_chunks), len(src_chunks))
    for index in range(nshared):
        dest_chunks[index] = f(dest_chunks[index], src_chunks[index]) & CHUNK_MASK
    return nshared


def matched_map(
    f: Union[BitOp, Combine], dest: BitStorage, src: BitStorage
) -> BitStorage:
    """Combine `src` into `dest` in place with the bitwise function `f`.

    Parameters
    ----------
    f
        A bitwise function of two words. It must distribute over the bits of a
        word, as ``&``, ``|``, ``^`` and ``a & ~b`` do.
    dest
        The storage that receives the result.
    src
        The storage combined into `dest`. It is never modified.

    Returns
    -------
    BitStorage
        `dest`

    """
    dest_nchunks = dest.nchunks
    src_nchunks = src.nchunks
    bit_map(f, dest, src)

    if dest_nchunks < src_nchunks:
        if not f(False, False) and not f(False, True):
            # everything past the end of dest combines to zero
            pass
        else:
            # here f(False, x) == x, so the tail of src carries over unchanged
            dest.grow_to(src_nchunks * CHUNK_BITS)
            dest.chunks[dest_nchunks:] = src.chunks[dest_nchunks:]
            logger.debug(
                "copied %d tail chunks into destination",
                src_nchunks - dest_nchunks,
            )
    elif dest_nchunks > src_nchunks:
        if not f(False, False) and not f(True, False):
            # everything past the end of src combines to zero
            dest.trim_to(src_nchunks * CHUNK_BITS)
        else:
            # here f(x, False) == x, so the tail of dest is already correct
            pass
    return dest

"""Top-level package for intset."""

import importlib.metadata as importlib_metadata

from intset.api import *  # noqa: F401,F403
from intset.bitstorage import BitStorage  # noqa: F401
from intset.core import IntSet  # noqa: F401
from intset.matchedmap import BitOp, matched_map  # noqa: F401
from intset.protocols import OrderedIntegerSet  # noqa: F401

__version__ = importlib_metadata.version(__name__)

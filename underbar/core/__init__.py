"""Core primitives for Underbar.

The traversal and reduction engines every collection helper is built on,
and the stateful function decorators.
"""

from .traversal import each, classify_collection
from .reduction import reduce
from .decorators import (
    DecoratedFunction,
    Once,
    Memoized,
    Throttled,
    once,
    memoize,
    throttle,
)
from .scheduling import delay

__all__ = [
    "each",
    "classify_collection",
    "reduce",
    "DecoratedFunction",
    "Once",
    "Memoized",
    "Throttled",
    "once",
    "memoize",
    "throttle",
    "delay",
]

"""Underbar - functional collection and function utilities.

Underbar provides a flat namespace of small functional primitives: a single
traversal engine (``each``) every collection helper iterates through, a
reduction engine (``reduce``), and stateful function decorators (``once``,
``memoize``, ``throttle``, ``delay``).

Usage:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    import underbar as _

    _.reduce([1, 2, 3, 4], lambda total, n: total + n)      # 10
    _.map_({'a': 1, 'b': 2}, lambda value, key: key * value)
    handler = _.throttle(on_resize, 100)
━━━━━━━━━━━━━━━━━━━━━━━━━━

Malformed input is a silent no-op by default; see ``underbar.error_policies``
and ``configure()`` to have it reported instead.
"""

import logging

__version__ = "0.3.0"

# Library stays silent unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

from ._common import (
    CollectionShape,
    DelayBackend,
    UnderbarConfig,
    get_config,
    configure,
    reset_config,
)
from .exceptions import UnderbarError, InvalidArgumentError
from .error_policies import (
    InputPolicy,
    BestEffortPolicy,
    WarnPolicy,
    StrictPolicy,
)

# Core engines and decorators
from .core import (
    each,
    classify_collection,
    reduce,
    Once,
    Memoized,
    Throttled,
    once,
    memoize,
    throttle,
    delay,
)

# Collection helpers
from .api import (
    identity,
    first,
    last,
    index_of,
    filter_,
    reject,
    uniq,
    map_,
    pluck,
    contains,
    every,
    some,
    extend,
    defaults,
    shuffle,
    invoke,
    sort_by,
    zip_,
    flatten,
    intersection,
    difference,
)

__all__ = [
    "__version__",
    # Config
    "CollectionShape",
    "DelayBackend",
    "UnderbarConfig",
    "get_config",
    "configure",
    "reset_config",
    # Errors
    "UnderbarError",
    "InvalidArgumentError",
    "InputPolicy",
    "BestEffortPolicy",
    "WarnPolicy",
    "StrictPolicy",
    # Core
    "each",
    "classify_collection",
    "reduce",
    "Once",
    "Memoized",
    "Throttled",
    "once",
    "memoize",
    "throttle",
    "delay",
    # Helpers
    "identity",
    "first",
    "last",
    "index_of",
    "filter_",
    "reject",
    "uniq",
    "map_",
    "pluck",
    "contains",
    "every",
    "some",
    "extend",
    "defaults",
    "shuffle",
    "invoke",
    "sort_by",
    "zip_",
    "flatten",
    "intersection",
    "difference",
]

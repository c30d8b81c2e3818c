"""Reduction engine for Underbar.

Folds a collection into a single value. Built on ``each`` so that reducing
visits elements in exactly the same order as traversing.
"""

from typing import Any, Callable, Optional

from .._common.arity import positional_capacity, trim_args
from .._common.markers import MISSING
from ..error_policies import InputPolicy, resolve_policy
from .traversal import each

Combiner = Callable[..., Any]


def reduce(collection: Any = None,
           combiner: Optional[Combiner] = None,
           initial: Any = MISSING,
           *,
           policy: Optional[InputPolicy] = None) -> Any:
    """Reduce a sequence or mapping to a single value.

    ``combiner(accumulator, value, index_or_key, collection)`` is called for
    each entry and its return value becomes the next accumulator.

    When no ``initial`` is passed, the first visited value becomes the
    accumulator and is never handed to the combiner; the combiner starts at
    the second value. Any explicit ``initial`` counts, including None, 0,
    False and ''.

    Args:
        collection: A sequence or mapping
        combiner: Callable(accumulator, value, index_or_key, collection)
        initial: Starting accumulator (optional)
        policy: Input policy for malformed arguments (default from config)

    Returns:
        The final accumulator. An empty collection returns ``initial``, or
        None when no initial value was given.

    Example:
        >>> reduce([1, 2, 3, 4], lambda total, n: total + n)
        10
        >>> reduce([1, 2, 3, 4], lambda total, n: total + n, 10)
        20
    """
    fallback = None if initial is MISSING else initial

    if not callable(combiner):
        return resolve_policy(policy).handle(
            'reduce', f"combiner is not callable ({type(combiner).__name__})", fallback
        )

    capacity = positional_capacity(combiner)

    # Single-slot state shared with the visitor closure
    state = {'seeded': initial is not MISSING, 'accumulator': fallback}

    def _fold(value, key, source):
        if not state['seeded']:
            state['accumulator'] = value
            state['seeded'] = True
        else:
            state['accumulator'] = combiner(
                *trim_args(capacity, (state['accumulator'], value, key, source))
            )

    each(collection, _fold, policy=policy)
    return state['accumulator']

"""Positional-arity helpers.

Visitors and combiners are called with up to three or four positional
arguments, but callers routinely pass callables that only want the first
one or two (``lambda x: x > 1``, ``operator.add``). These helpers work out
how many positional arguments a callable takes so the engines can trim the
argument tuple instead of raising TypeError.
"""

import inspect
from typing import Any, Callable, Optional, Tuple

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def positional_capacity(fn: Callable) -> Optional[int]:
    """Return how many positional arguments ``fn`` accepts.

    Args:
        fn: Any callable

    Returns:
        The number of positional parameters, or None when the callable takes
        ``*args`` or its signature cannot be determined and passing every
        argument is the only sensible choice.
    """
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        # Builtin types such as int or bool expose no signature but take a
        # single positional value.
        return 1 if isinstance(fn, type) else None

    count = 0
    for param in sig.parameters.values():
        if param.kind == inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in _POSITIONAL:
            count += 1
    return count


def trim_args(capacity: Optional[int], args: Tuple[Any, ...]) -> Tuple[Any, ...]:
    """Cut ``args`` down to what a callable of ``capacity`` accepts."""
    if capacity is None or capacity >= len(args):
        return args
    return args[:capacity]

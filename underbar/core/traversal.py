"""Traversal engine for Underbar.

``each`` is the single iteration entry point of the library. Every helper
that walks a collection goes through it, so there is exactly one notion of
what is iterable and in what order elements are visited.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Callable, Optional

from .._common.arity import positional_capacity, trim_args
from .._common.config import CollectionShape
from ..error_policies import InputPolicy, resolve_policy

# Sequences that are values, not collections
_SCALAR_SEQUENCES = (str, bytes, bytearray)

Visitor = Callable[[Any, Any, Any], Any]


def classify_collection(collection: Any) -> CollectionShape:
    """Determine how ``each`` would walk a value.

    Args:
        collection: Any value

    Returns:
        CollectionShape.SEQUENCE for lists, tuples, ranges and other
        sequences (but not strings), CollectionShape.MAPPING for dicts and
        other mappings, CollectionShape.UNSUPPORTED for everything else.
    """
    if isinstance(collection, _SCALAR_SEQUENCES):
        return CollectionShape.UNSUPPORTED
    if isinstance(collection, Sequence):
        return CollectionShape.SEQUENCE
    if isinstance(collection, Mapping):
        return CollectionShape.MAPPING
    return CollectionShape.UNSUPPORTED


def each(collection: Any = None,
         visitor: Optional[Visitor] = None,
         *,
         policy: Optional[InputPolicy] = None) -> None:
    """Call ``visitor(value, index_or_key, collection)`` for every entry.

    Sequences are visited by ascending index, mappings by key in the
    mapping's own iteration order. The length (or key list) is taken once
    on entry; mutating the collection from inside the visitor is not
    supported. Visitors that take fewer than three positional parameters
    receive only the leading ones.

    Args:
        collection: A sequence or mapping
        visitor: Callable receiving (value, index_or_key, collection)
        policy: Input policy for malformed arguments (default from config)

    Returns:
        None. Under the default policy malformed input is a silent no-op.

    Example:
        >>> seen = []
        >>> each({'a': 1, 'b': 2}, lambda v, k, c: seen.append((k, v)))
        >>> seen
        [('a', 1), ('b', 2)]
    """
    shape = classify_collection(collection)

    if shape is CollectionShape.UNSUPPORTED:
        return resolve_policy(policy).handle(
            'each', f"cannot traverse {type(collection).__name__}", None
        )
    if not callable(visitor):
        return resolve_policy(policy).handle(
            'each', f"visitor is not callable ({type(visitor).__name__})", None
        )

    capacity = positional_capacity(visitor)

    if shape is CollectionShape.SEQUENCE:
        for index in range(len(collection)):
            visitor(*trim_args(capacity, (collection[index], index, collection)))
    else:
        for key in list(collection):
            visitor(*trim_args(capacity, (collection[key], key, collection)))

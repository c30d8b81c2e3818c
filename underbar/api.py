"""High-level collection helpers for Underbar.

Everything here is composed from ``each``, ``reduce`` and ``map_``; no helper
walks a collection on its own. A helper handed something it cannot work with
falls back to an empty result under the configured input policy, the same
way the core engines do.

Names that would shadow Python builtins (``filter_``, ``map_``, ``zip_``)
carry a trailing underscore.
"""

import random
from collections.abc import Mapping, MutableMapping, MutableSequence
from typing import Any, Callable, Dict, List, Optional, Union

from ._common.arity import positional_capacity, trim_args
from ._common.config import CollectionShape
from .core.reduction import reduce
from .core.traversal import classify_collection, each
from .error_policies import resolve_policy

Predicate = Callable[[Any], Any]
Iteratee = Union[Callable[..., Any], str, int]


def _require_callable(operation: str, fn: Any, default: Any) -> Optional[Any]:
    """Return None if ``fn`` is callable, else the policy's fallback result."""
    if callable(fn):
        return None
    return resolve_policy().handle(
        operation, f"expected a callable, got {type(fn).__name__}", default
    )


def _get_property(item: Any, name: Any) -> Any:
    """Look ``name`` up on ``item`` as a key, index or attribute."""
    if isinstance(item, Mapping):
        return item.get(name)
    if isinstance(name, int) and classify_collection(item) is CollectionShape.SEQUENCE:
        return item[name] if -len(item) <= name < len(item) else None
    if isinstance(name, str):
        return getattr(item, name, None)
    return None


def identity(value: Any = None) -> Any:
    """Return ``value`` unchanged.

    Useful as the default iterator when a caller doesn't pass one.
    """
    return value


def _valid_count(n: Any) -> bool:
    return n is None or (isinstance(n, int) and not isinstance(n, bool))


def first(array: Any = None, n: Optional[int] = None) -> Any:
    """Return the first element, or a list of the first ``n`` elements."""
    if classify_collection(array) is not CollectionShape.SEQUENCE:
        return resolve_policy().handle(
            'first', f"expected a sequence, got {type(array).__name__}",
            None if n is None else []
        )
    if not _valid_count(n):
        return resolve_policy().handle(
            'first', f"count must be an integer, got {type(n).__name__}", []
        )
    if n is None:
        return array[0] if len(array) else None
    return list(array[:n])


def last(array: Any = None, n: Optional[int] = None) -> Any:
    """Return the last element, or a list of the last ``n`` elements."""
    if classify_collection(array) is not CollectionShape.SEQUENCE:
        return resolve_policy().handle(
            'last', f"expected a sequence, got {type(array).__name__}",
            None if n is None else []
        )
    if not _valid_count(n):
        return resolve_policy().handle(
            'last', f"count must be an integer, got {type(n).__name__}", []
        )
    if n is not None and n <= 0:
        return []
    if n is None:
        return array[-1] if len(array) else None
    return list(array[-n:])


def index_of(array: Any, target: Any) -> int:
    """Return the index of the first element equal to ``target``, or -1."""
    found = {'index': -1}

    def _match(item, index):
        if found['index'] == -1 and item == target:
            found['index'] = index

    each(array, _match)
    return found['index']


def filter_(collection: Any, test: Predicate = None) -> List[Any]:
    """Return the elements that pass ``test``."""
    fallback = _require_callable('filter_', test, [])
    if fallback is not None:
        return fallback

    passed = []

    def _keep(element):
        if test(element):
            passed.append(element)

    each(collection, _keep)
    return passed


def reject(collection: Any, test: Predicate = None) -> List[Any]:
    """Return the elements that fail ``test``."""
    fallback = _require_callable('reject', test, [])
    if fallback is not None:
        return fallback
    return filter_(collection, lambda element: not test(element))


def uniq(array: Any) -> List[Any]:
    """Return a duplicate-free list, keeping first occurrences in order.

    Hashable elements are compared through a dict; unhashable ones fall back
    to a linear ``contains`` check.
    """
    seen: Dict[Any, Any] = {}
    result: List[Any] = []

    def _collect(element):
        try:
            hash(element)
        except TypeError:
            if not contains(result, element):
                result.append(element)
            return
        if element not in seen:
            seen[element] = element
            result.append(element)

    each(array, _collect)
    return result


def map_(collection: Any, iterator: Callable[..., Any] = None) -> List[Any]:
    """Return ``iterator(value, index_or_key, collection)`` for every entry.

    Iterators taking fewer positional parameters get only the leading
    arguments, so ``map_(numbers, lambda n: n * 2)`` works.
    """
    fallback = _require_callable('map_', iterator, [])
    if fallback is not None:
        return fallback

    capacity = positional_capacity(iterator)
    mapped = []
    each(collection, lambda value, key, source: mapped.append(
        iterator(*trim_args(capacity, (value, key, source)))
    ))
    return mapped


def pluck(collection: Any, key: Any) -> List[Any]:
    """Return the value of ``key`` from every element.

    Example:
        >>> pluck([{'name': 'moe', 'age': 30}, {'name': 'curly', 'age': 50}], 'age')
        [30, 50]
    """
    return map_(collection, lambda item: _get_property(item, key))


def contains(collection: Any, target: Any) -> bool:
    """Return True if any value equals ``target``."""
    return reduce(collection, lambda was_found, item: was_found or item == target, False)


def every(collection: Any, iterator: Optional[Predicate] = None) -> bool:
    """Return True if every element passes ``iterator`` (truthiness by default).

    Once an element fails, the iterator is not called again.
    """
    if iterator is None:
        iterator = identity
    fallback = _require_callable('every', iterator, False)
    if fallback is not None:
        return fallback
    return reduce(collection, lambda passed, element: passed and bool(iterator(element)), True)


def some(collection: Any, iterator: Optional[Predicate] = None) -> bool:
    """Return True if any element passes ``iterator`` (truthiness by default).

    Once an element passes, the iterator is not called again.
    """
    if iterator is None:
        iterator = identity
    fallback = _require_callable('some', iterator, False)
    if fallback is not None:
        return fallback
    return reduce(collection, lambda passed, element: passed or bool(iterator(element)), False)


def extend(obj: Any = None, *sources: Any) -> Any:
    """Copy every key of every source mapping onto ``obj``, overwriting.

    Returns:
        ``obj``, mutated in place
    """
    if not isinstance(obj, MutableMapping):
        return resolve_policy().handle(
            'extend', f"expected a mutable mapping, got {type(obj).__name__}", obj
        )

    def _assign(value, key):
        obj[key] = value

    each(sources, lambda source: each(source, _assign))
    return obj


def defaults(obj: Any = None, *sources: Any) -> Any:
    """Copy keys of the source mappings onto ``obj`` where ``obj`` lacks them.

    Earlier sources win over later ones. Returns ``obj``, mutated in place.
    """
    if not isinstance(obj, MutableMapping):
        return resolve_policy().handle(
            'defaults', f"expected a mutable mapping, got {type(obj).__name__}", obj
        )

    def _fill(value, key):
        if key not in obj:
            obj[key] = value

    each(sources, lambda source: each(source, _fill))
    return obj


def shuffle(array: Any) -> List[Any]:
    """Return a new list with the elements in random order.

    The input is never modified.
    """
    duplicate = map_(array, identity)
    random.shuffle(duplicate)
    return duplicate


def invoke(collection: Any, function_or_name: Any, *args: Any) -> List[Any]:
    """Call a function on every element, or a named method of every element.

    Args:
        collection: Sequence or mapping of items
        function_or_name: Callable receiving the item as first argument, or
            the name of a method to call on each item
        *args: Extra arguments passed along on every call

    Returns:
        List of the results
    """
    if callable(function_or_name):
        return map_(collection, lambda item: function_or_name(item, *args))
    if isinstance(function_or_name, str):
        return map_(collection, lambda item: getattr(item, function_or_name)(*args))
    return resolve_policy().handle(
        'invoke', f"expected a callable or method name, got {type(function_or_name).__name__}", []
    )


def sort_by(collection: Any, iterator: Iteratee = None) -> Any:
    """Sort by the result of ``iterator``, or by the key/attribute it names.

    The sort is stable. Items whose criterion is None (a missing key or
    attribute) sort last. Mutable sequences are sorted in place and returned;
    other sequences come back as a new sorted list.

    Example:
        >>> sort_by([{'name': 'curly'}, {'name': 'moe'}, {'name': 'larry'}], 'name')
        [{'name': 'curly'}, {'name': 'larry'}, {'name': 'moe'}]
    """
    if classify_collection(collection) is not CollectionShape.SEQUENCE:
        return resolve_policy().handle(
            'sort_by', f"expected a sequence, got {type(collection).__name__}", collection
        )

    if callable(iterator):
        criteria = map_(collection, lambda item: iterator(item))
    elif isinstance(iterator, (str, int)):
        criteria = map_(collection, lambda item: _get_property(item, iterator))
    else:
        return resolve_policy().handle(
            'sort_by', f"expected a callable or property name, got {type(iterator).__name__}",
            collection
        )

    order = sorted(
        range(len(criteria)),
        key=lambda position: (criteria[position] is None, criteria[position]),
    )
    ordered = map_(order, lambda position: collection[position])

    if isinstance(collection, MutableSequence):
        collection[:] = ordered
        return collection
    return ordered


def zip_(*arrays: Any) -> List[List[Any]]:
    """Group elements of the same index together, padding short arrays with None.

    Example:
        >>> zip_(['a', 'b', 'c', 'd'], [1, 2, 3])
        [['a', 1], ['b', 2], ['c', 3], ['d', None]]
    """
    if not arrays:
        return []
    if not every(arrays, lambda array: classify_collection(array) is CollectionShape.SEQUENCE):
        return resolve_policy().handle('zip_', "every argument must be a sequence", [])

    longest = reduce(
        arrays,
        lambda best, array, index: best if best[1] >= len(array) else (index, len(array)),
        (0, 0),
    )

    def _row(element, index):
        return map_(arrays, lambda array: array[index] if index < len(array) else None)

    return map_(arrays[longest[0]], _row)


def flatten(nested: Any, result: Optional[List[Any]] = None) -> List[Any]:
    """Flatten arbitrarily nested sequences into one list, depth first."""
    if result is None:
        result = []

    def _walk(element):
        if classify_collection(element) is CollectionShape.SEQUENCE:
            flatten(element, result)
        else:
            result.append(element)

    each(nested, _walk)
    return result


def _objectify(array: Any) -> Dict[Any, Any]:
    """Build an element -> element presence mapping."""
    def _add(mapping, element):
        mapping[element] = element
        return mapping

    return reduce(array, _add, {})


def intersection(*arrays: Any) -> List[Any]:
    """Return the elements present in every array.

    Elements must be hashable. Order follows the first array.
    """
    if not arrays:
        return []

    def _common(shared, candidate):
        def _keep(kept, value, key):
            if key in candidate:
                kept[key] = value
            return kept

        return reduce(shared, _keep, {})

    result = reduce(
        map_(arrays[1:], _objectify),
        _common,
        _objectify(arrays[0]),
    )
    return map_(result, identity)


def difference(array: Any = None, *others: Any) -> List[Any]:
    """Return the elements of ``array`` not present in any of ``others``.

    Elements must be hashable. Order follows ``array``.
    """
    remaining = _objectify(array)

    def _discard(element):
        remaining.pop(element, None)

    each(others, lambda other: each(other, _discard))
    return map_(remaining, identity)

"""Tests for the collection helpers built on each and reduce."""

from types import SimpleNamespace

import pytest

import underbar
from underbar import (
    InvalidArgumentError,
    StrictPolicy,
    configure,
    contains,
    defaults,
    difference,
    every,
    extend,
    filter_,
    first,
    flatten,
    identity,
    index_of,
    intersection,
    invoke,
    last,
    map_,
    pluck,
    reject,
    shuffle,
    some,
    sort_by,
    uniq,
    zip_,
)


class TestPassThroughHelpers:
    """identity, first, last."""

    def test_identity(self):
        value = object()
        assert identity(value) is value
        assert identity() is None

    def test_first(self):
        assert first([1, 2, 3]) == 1
        assert first([1, 2, 3], 2) == [1, 2]
        assert first([1, 2, 3], 5) == [1, 2, 3]
        assert first([]) is None

    def test_last(self):
        assert last([1, 2, 3]) == 3
        assert last([1, 2, 3], 2) == [2, 3]
        assert last([1, 2, 3], 0) == []
        assert last([1, 2, 3], 5) == [1, 2, 3]
        assert last(()) is None

    def test_malformed(self):
        assert first(None) is None
        assert last("abc", 2) == []

    def test_non_integer_count(self):
        """A count that isn't an int gives an empty list instead of raising."""
        assert first([1, 2, 3], 'x') == []
        assert last([1, 2, 3], 1.5) == []
        assert first([1, 2, 3], True) == []

        configure(input_policy=StrictPolicy())
        with pytest.raises(InvalidArgumentError):
            first([1, 2, 3], 'x')

    def test_last_negative_count(self):
        assert last([1, 2, 3], -1) == []


class TestSearchHelpers:
    """index_of, contains, every, some."""

    def test_index_of(self):
        assert index_of([10, 20, 30, 20], 20) == 1
        assert index_of([10, 20], 99) == -1
        assert index_of(None, 1) == -1

    def test_contains(self):
        assert contains([1, 2, 3], 2) is True
        assert contains({'a': 'x'}, 'x') is True
        assert contains([1, 2, 3], '2') is False
        assert contains([], 1) is False

    def test_every(self):
        assert every([2, 4, 6], lambda n: n % 2 == 0) is True
        assert every([2, 3, 6], lambda n: n % 2 == 0) is False
        assert every([]) is True
        assert every([1, 'a', True]) is True
        assert every([1, 0]) is False

    def test_every_short_circuits(self):
        seen = []

        def check(n):
            seen.append(n)
            return n < 2

        every([1, 5, 0, 1], check)
        assert seen == [1, 5]

    def test_some(self):
        assert some([1, 3, 4], lambda n: n % 2 == 0) is True
        assert some([1, 3], lambda n: n % 2 == 0) is False
        assert some([]) is False
        assert some([0, None, 'x']) is True

    def test_builtin_type_as_iterator(self):
        """Builtin types take only the element."""
        assert every([1, 2], bool) is True
        assert some([0, ''], bool) is False
        assert map_([0, 1], bool) == [False, True]


class TestTransformHelpers:
    """filter_, reject, map_, pluck, uniq."""

    def test_filter_and_reject(self):
        numbers = [1, 2, 3, 4, 5, 6]
        assert filter_(numbers, lambda n: n % 2 == 0) == [2, 4, 6]
        assert reject(numbers, lambda n: n % 2 == 0) == [1, 3, 5]

    def test_filter_mapping_values(self):
        assert filter_({'a': 1, 'b': 2}, lambda n: n > 1) == [2]

    def test_map_sequence_and_mapping(self):
        assert map_([1, 2, 3], lambda n: n * 2) == [2, 4, 6]
        assert map_([5, 6], lambda n, i: (i, n)) == [(0, 5), (1, 6)]
        assert map_({'a': 1, 'b': 2}, lambda value, key: f"{key}={value}") == ['a=1', 'b=2']

    def test_pluck(self):
        people = [{'name': 'moe', 'age': 30}, {'name': 'curly', 'age': 50}]
        assert pluck(people, 'age') == [30, 50]
        assert pluck([SimpleNamespace(x=1), SimpleNamespace(x=2)], 'x') == [1, 2]
        assert pluck([[1, 2], [3]], 1) == [2, None]

    def test_uniq(self):
        assert uniq([1, 2, 1, 3, 2, 4]) == [1, 2, 3, 4]
        assert uniq([1, '1', 1.0]) == [1, '1']
        assert uniq([[1], [1], [2]]) == [[1], [2]]

    def test_uniq_tuple_holding_a_list(self):
        """Tuples with unhashable members take the linear-scan path."""
        assert uniq([(1, [2]), (1, [2]), 3]) == [(1, [2]), 3]

    def test_malformed(self):
        assert filter_([1, 2], None) == []
        assert reject([1, 2], 5) == []
        assert map_(None, identity) == []
        assert map_([1, 2]) == []


class TestObjectHelpers:
    """extend, defaults."""

    def test_extend_overwrites(self):
        target = {'a': 1}
        result = extend(target, {'a': 2, 'b': 3}, {'c': 4})
        assert result is target
        assert target == {'a': 2, 'b': 3, 'c': 4}

    def test_defaults_keeps_existing(self):
        target = {'a': 1}
        defaults(target, {'a': 2, 'b': 3}, {'b': 9, 'c': 4})
        assert target == {'a': 1, 'b': 3, 'c': 4}

    def test_non_mapping_target(self):
        assert extend(None, {'a': 1}) is None
        assert defaults("x", {'a': 1}) == "x"


class TestStructuralHelpers:
    """shuffle, invoke, sort_by, zip_, flatten."""

    def test_shuffle_keeps_elements_and_input(self):
        data = list(range(20))
        shuffled = shuffle(data)
        assert data == list(range(20))
        assert sorted(shuffled) == data
        assert shuffled is not data

    def test_invoke_function_and_method_name(self):
        assert invoke([[3, 1], [2]], len) == [2, 1]
        assert invoke(['a', 'b'], 'upper') == ['A', 'B']
        assert invoke(['a-b', 'c-d'], 'split', '-') == [['a', 'b'], ['c', 'd']]
        assert invoke([1], 42) == []

    def test_sort_by_function_in_place(self):
        data = [3, -1, 2]
        result = sort_by(data, abs)
        assert result is data
        assert data == [-1, 2, 3]

    def test_sort_by_property_name(self):
        people = [{'name': 'curly'}, {'name': 'moe'}, {'name': 'larry'}]
        assert pluck(sort_by(people, 'name'), 'name') == ['curly', 'larry', 'moe']

    def test_sort_by_is_stable(self):
        data = [('b', 1), ('a', 1), ('c', 0)]
        assert sort_by(data, lambda pair: pair[1]) == [('c', 0), ('b', 1), ('a', 1)]

    def test_sort_by_tuple_returns_new_list(self):
        assert sort_by((3, 1, 2), identity) == [1, 2, 3]

    def test_sort_by_missing_key_sorts_last(self):
        data = [{'a': 2}, {}, {'a': 1}, {'b': 0}]
        assert sort_by(data, 'a') == [{'a': 1}, {'a': 2}, {}, {'b': 0}]

    def test_zip(self):
        assert zip_(['a', 'b', 'c', 'd'], [1, 2, 3]) == [['a', 1], ['b', 2], ['c', 3], ['d', None]]
        assert zip_([1], [2, 3]) == [[1, 2], [None, 3]]
        assert zip_() == []

    def test_zip_non_sequence_argument(self):
        assert zip_([1, 2], None) == []
        assert zip_(5) == []

        configure(input_policy=StrictPolicy())
        with pytest.raises(InvalidArgumentError):
            zip_([1, 2], None)

    def test_flatten(self):
        assert flatten([1, [2], [3, [[[4]]]]]) == [1, 2, 3, 4]
        assert flatten([(1, 2), ['ab', []]]) == [1, 2, 'ab']
        assert flatten(None) == []


class TestSetHelpers:
    """intersection, difference."""

    def test_intersection(self):
        assert intersection(['moe', 'curly', 'larry'], ['moe', 'groucho']) == ['moe']
        assert intersection([1, 2, 3], [2, 3, 4], [3, 2]) == [2, 3]
        assert intersection([1, 2]) == [1, 2]
        assert intersection() == []

    def test_difference(self):
        assert difference([1, 2, 3, 4], [2, 30, 40]) == [1, 3, 4]
        assert difference([1, 2, 3, 4], [2], [4]) == [1, 3]
        assert difference(None, [1]) == []


class TestHelpersIterateThroughEach:
    """Helpers never walk a collection on their own."""

    @pytest.mark.parametrize("call", [
        lambda: filter_([1, 2], identity),
        lambda: map_([1, 2], identity),
        lambda: uniq([1, 1]),
        lambda: contains([1, 2], 2),
        lambda: flatten([1, [2]]),
        lambda: difference([1, 2], [2]),
    ])
    def test_uses_each(self, monkeypatch, call):
        from underbar import api
        from underbar.core import reduction

        calls = []
        real_each = api.each

        def spy(*args, **kwargs):
            calls.append(args[0])
            return real_each(*args, **kwargs)

        monkeypatch.setattr(api, "each", spy)
        monkeypatch.setattr(reduction, "each", spy)

        call()
        assert calls, "helper did not iterate through each"


def test_flat_namespace():
    """Every helper is importable from the package root."""
    for name in ('each', 'reduce', 'once', 'memoize', 'delay', 'throttle', 'zip_', 'sort_by'):
        assert callable(getattr(underbar, name))

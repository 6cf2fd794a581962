import random
from dataclasses import dataclass

import pytest

from polyseg.collection import PolyCollection, Position
from polyseg.holder import NotEqualityComparable, non_copyable
from polyseg.queries import (
    adjacent_find,
    all_of,
    any_of,
    count,
    count_if,
    equal,
    fast_distance,
    find,
    find_end,
    find_first_of,
    find_if,
    find_if_not,
    for_each,
    for_each_n,
    is_permutation,
    mismatch,
    none_of,
    search,
    search_n,
)


@non_copyable
class Inc1:
    def __init__(self, n):
        self.n = n

    def __eq__(self, other):
        if not isinstance(other, Inc1):
            return NotImplemented
        return self.n == other.n


class Inc3:
    def __init__(self, n=-1):
        self.n = float(n)


class Empty:
    pass


@dataclass
class Boxed:
    n: int


def to_int(x):
    return int(x.n) if hasattr(x, "n") else int(x)


def int_eq(x, y):
    return to_int(x) == y


INTS = [0, 5, 1, 6, 2, 7, 3, 8, 4, 9]


@pytest.fixture
def coll():
    c = PolyCollection()
    c.register_types(Inc1, Empty, float, Inc3, int, Boxed)
    types = [Inc1, float, Inc3, int, Boxed]
    for i in range(10):
        c.insert(types[i % 5](i))
    return c


def positions(c):
    return [c.advance(c.begin(), k) for k in range(len(c) + 1)]


def test_fixture_layout(coll):
    assert [to_int(x) for x in coll] == INTS
    assert positions(coll)[2] == Position(2, 0)
    assert positions(coll)[-1] == Position(6, 0)


def test_all_any_none(coll):
    span = coll.span()
    even = lambda x: to_int(x) % 2 == 0
    assert all_of(span, even) is False
    assert any_of(span, even) is True
    assert none_of(span, lambda x: to_int(x) > 9) is True
    assert all_of(span, lambda x: True) is True
    assert any_of(span, lambda x: False) is False


def test_predicates_on_every_subrange(coll):
    pos = positions(coll)
    elements = list(coll)
    even = lambda x: to_int(x) % 2 == 0
    for i in range(len(pos)):
        for j in range(i, len(pos)):
            span = coll.span(pos[i], pos[j])
            part = elements[i:j]
            assert all_of(span, even) == all(map(even, part))
            assert any_of(span, even) == any(map(even, part))
            assert none_of(span, even) == (not any(map(even, part)))
            assert count_if(span, even) == sum(map(even, part))
            assert fast_distance(span) == j - i


def test_find_if_on_every_subrange(coll):
    pos = positions(coll)
    for i in range(len(pos)):
        for j in range(i, len(pos)):
            span = coll.span(pos[i], pos[j])
            hit = 6 in INTS[i:j]
            expected = pos[i + INTS[i:j].index(6)] if hit else pos[j]
            assert find_if(span, lambda x: to_int(x) == 6) == expected


def test_find_if_and_not(coll):
    span = coll.span()
    assert find_if(span, lambda x: to_int(x) == 6) == Position(2, 1)
    assert find_if(span, lambda x: to_int(x) == 42) == Position(6, 0)
    assert find_if_not(span, lambda x: to_int(x) < 5) == Position(0, 1)


def test_for_each_returns_function(coll):
    class Acc:
        def __init__(self):
            self.total = 0

        def __call__(self, x):
            self.total += to_int(x)

    acc = Acc()
    result = for_each(coll.span(), acc)
    assert result is acc
    assert acc.total == 45


def test_for_each_n(coll):
    seen = []
    end = for_each_n(coll, coll.begin(), 4, lambda x: seen.append(to_int(x)))
    assert seen == [0, 5, 1, 6]
    assert end == Position(3, 0)
    seen.clear()
    assert for_each_n(coll, coll.begin(), 2, lambda x: seen.append(to_int(x))) == Position(2, 0)
    assert seen == [0, 5]
    assert for_each_n(coll, Position(0, 1), 0, seen.append) == Position(0, 1)
    with pytest.raises(IndexError):
        for_each_n(coll, coll.begin(), 11, seen.append)


def test_find_with_equality(coll):
    span = coll.span()
    assert find(span, 6.0) == Position(2, 1)
    ints = coll.span(coll.begin(int), coll.end(int))
    assert find(ints, 8) == Position(4, 1)
    assert find(ints, 99) == Position(5, 0)
    assert count(ints, 3) == 1


def test_find_raises_for_non_comparable(coll):
    with pytest.raises(NotEqualityComparable):
        find(coll.span(), 3)
    with pytest.raises(NotEqualityComparable):
        count(coll.span(), 3)


def test_find_first_of(coll):
    span = coll.span()
    assert find_first_of(span, [7, 8], int_eq) == Position(3, 1)
    assert find_first_of(span, [6.0]) == Position(2, 1)
    assert find_first_of(span, [], int_eq) == Position(6, 0)


def test_adjacent_find_crosses_segments(coll):
    span = coll.span()
    assert adjacent_find(span, lambda a, b: to_int(a) + to_int(b) == 6) == Position(0, 1)
    assert adjacent_find(span, lambda a, b: to_int(a) + to_int(b) == 7) == Position(2, 0)
    assert adjacent_find(span, lambda a, b: False) == Position(6, 0)


def test_adjacent_find_default_equality():
    c = PolyCollection()
    c.register_types(int, float)
    for v in (1, 2, 2.0, 3.0):
        c.insert(v)
    assert adjacent_find(c.span()) == Position(0, 1)
    d = PolyCollection()
    d.register_types(int)
    for v in (1, 2, 3):
        d.insert(v)
    assert adjacent_find(d.span()) == Position(1, 0)


def test_search_and_find_end(coll):
    span = coll.span()
    assert search(span, [1, 6, 2], int_eq) == Position(2, 0)
    assert search(span, [], int_eq) == Position(0, 0)
    assert search(span, [9, 0], int_eq) == Position(6, 0)
    mod3 = lambda x, y: to_int(x) % 3 == y % 3
    assert search(span, [0, 2], mod3) == Position(0, 0)
    assert find_end(span, [0, 2], mod3) == Position(4, 0)
    assert find_end(span, [], mod3) == Position(6, 0)
    assert find_end(span, [5, 5], int_eq) == Position(6, 0)


def test_mismatch(coll):
    span = coll.span()
    assert mismatch(span, [0, 5, 1, 7], int_eq, bounded=True) == (Position(2, 1), 3)
    assert mismatch(span, [0, 5], int_eq, bounded=True) == (Position(2, 0), 2)
    assert mismatch(span, INTS + [1], int_eq) == (Position(6, 0), 10)
    with pytest.raises(IndexError):
        mismatch(span, [0, 5], int_eq)


def test_equal(coll):
    span = coll.span()
    assert equal(span, INTS, int_eq) is True
    assert equal(span, INTS + [1], int_eq) is True
    assert equal(span, INTS + [1], int_eq, bounded=True) is False
    assert equal(span, INTS[:5], int_eq, bounded=True) is False
    assert equal(span, [0, 4] + INTS[2:], int_eq) is False


def test_search_n(coll):
    span = coll.span()
    parity = lambda x, v: to_int(x) % 2 == v
    assert search_n(span, 2, 1, parity) == Position(0, 1)
    assert search_n(span, 2, 0, parity) == Position(2, 1)
    assert search_n(span, 3, 1, parity) == Position(6, 0)
    assert search_n(span, 0, 1, parity) == Position(0, 0)
    assert search_n(span, 1, 0, parity) == Position(0, 0)


def test_fast_distance(coll):
    assert fast_distance(coll.span()) == 10
    assert fast_distance(coll.span(Position(0, 1), Position(3, 1))) == 4
    assert fast_distance(coll.span(coll.end(), coll.end())) == 0
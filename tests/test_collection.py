import pytest

from polyseg.collection import (
    PolyCollection,
    Position,
    for_each_segment,
    segment_split,
)
from polyseg.holder import NotEqualityComparable, UnregisteredType


class Base:
    def __init__(self, n):
        self.n = n

    def __eq__(self, other):
        return type(self) is type(other) and self.n == other.n

    __hash__ = None


class A(Base):
    pass


class B(Base):
    pass


class C(Base):
    pass


class Plain:
    pass


@pytest.fixture
def coll():
    c = PolyCollection(Base)
    c.register_types(A, B, C)
    for value in (A(1), B(2), A(3), C(4), B(5)):
        c.insert(value)
    return c


def values(items):
    return [x.n for x in items]


def test_iteration_groups_by_segment(coll):
    assert values(coll) == [1, 3, 2, 5, 4]
    assert len(coll) == 5


def test_insert_unregistered_raises():
    c = PolyCollection(Base)
    with pytest.raises(UnregisteredType):
        c.insert(A(1))
    assert not c.is_registered(A)


def test_insert_wrong_base_raises(coll):
    with pytest.raises(TypeError):
        coll.insert(Plain())


def test_register_non_subclass_raises():
    c = PolyCollection(Base)
    with pytest.raises(TypeError):
        c.register_types(Plain)


def test_emplace_registers(coll):
    c = PolyCollection(Base)
    pos = c.emplace(B, 7)
    assert c.is_registered(B)
    assert c.at(pos).n == 7


def test_sizes_and_clear(coll):
    assert coll.size(A) == 2
    assert coll.size(C) == 1
    coll.clear(A)
    assert coll.empty(A)
    assert coll.size() == 3
    coll.clear()
    assert coll.empty()


def test_size_of_unregistered_raises(coll):
    class D(Base):
        pass

    with pytest.raises(UnregisteredType):
        coll.size(D)


def test_segment_is_exact_type(coll):
    assert values(coll.segment(B)) == [2, 5]


def test_segment_traversal_order(coll):
    infos = list(coll.segment_traversal())
    assert [i.type for i in infos] == [A, B, C]
    assert [values(i) for i in infos] == [[1, 3], [2, 5], [4]]


def test_reserve_and_capacity(coll):
    coll.reserve(10, A)
    assert coll.capacity(A) == 10
    coll.reserve(20)
    assert [coll.capacity(t) for t in (A, B, C)] == [20, 20, 20]


def test_begin_end_of_type(coll):
    span = coll.span(coll.begin(B), coll.end(B))
    assert values(span) == [2, 5]
    assert len(span) == 2


def test_advance_and_distance(coll):
    begin = coll.begin()
    for k in range(len(coll) + 1):
        pos = coll.advance(begin, k)
        assert coll.distance(begin, pos) == k
    assert coll.advance(begin, len(coll)) == coll.end()
    assert coll.advance(coll.end(), -len(coll)) == begin


def test_advance_out_of_range(coll):
    with pytest.raises(IndexError):
        coll.advance(coll.begin(), len(coll) + 1)


def test_at_end_raises(coll):
    with pytest.raises(IndexError):
        coll.at(coll.end())


def test_reversed_span_raises(coll):
    with pytest.raises(ValueError):
        coll.span(coll.end(), coll.begin())


def test_segment_split_partial(coll):
    first = coll.advance(coll.begin(), 1)
    last = coll.advance(coll.begin(), 3)
    infos = list(segment_split(coll, first, last))
    assert [i.type for i in infos] == [A, B]
    assert [values(i) for i in infos] == [[3], [2]]


def test_segment_split_includes_empty_segments():
    c = PolyCollection(Base)
    c.register_types(A, B, C)
    c.insert(A(1))
    c.insert(C(2))
    infos = list(segment_split(c, c.begin(), c.end()))
    assert [len(i) for i in infos] == [1, 0, 1]


def test_segment_split_empty_range(coll):
    pos = coll.advance(coll.begin(), 2)
    infos = list(segment_split(coll, pos, pos))
    assert sum(len(i) for i in infos) == 0


def test_for_each_segment_matches_split(coll):
    seen = []
    for_each_segment(coll, coll.begin(), coll.end(), lambda i: seen.append(values(i)))
    assert seen == [values(i) for i in segment_split(coll, coll.begin(), coll.end())]


def test_span_iteration_matches_collection(coll):
    assert values(coll.span()) == values(coll)


def test_equality_ignores_registration_order(coll):
    other = PolyCollection(Base)
    other.register_types(C, B, A)
    for value in (C(4), B(2), B(5), A(1), A(3)):
        other.insert(value)
    assert coll == other
    other.clear(C)
    assert coll != other


def test_equality_of_non_comparable_raises():
    class P(Plain):
        pass

    x = PolyCollection()
    y = PolyCollection()
    x.emplace(P)
    y.emplace(P)
    assert len(x) == 1
    assert len(y) == 1
    with pytest.raises(NotEqualityComparable):
        assert not (x == y)


def test_position_ordering():
    assert Position(0, 1) < Position(1, 0)
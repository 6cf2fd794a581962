"""Non-modifying queries over a span of a polymorphic collection.

Every query walks the span one segment at a time. Positions returned are
``Position`` values of the span's collection. A query that finds nothing
returns the span's end position. Binary predicates receive an element of
the span first. When no predicate is given, elements are compared with
``==``. Comparing an element whose type has no equality raises
NotEqualityComparable.
"""

from __future__ import annotations

import itertools
from typing import Any, Callable, Iterable, Iterator, TypeVar

from polyseg.collection import PolyCollection, Position, Span, segment_split
from polyseg.holder import NotEqualityComparable, is_equality_comparable

F = TypeVar("F", bound=Callable[[Any], Any])

Predicate = Callable[[Any], Any]
BinaryPredicate = Callable[[Any, Any], Any]


def _equal_to(x: Any, y: Any) -> bool:
    type_ = type(x)
    if not is_equality_comparable(type_):
        raise NotEqualityComparable(type_)
    return bool(x == y)


def _enumerate(span: Span) -> Iterator[tuple[Position, Any]]:
    """Yield the position and value of every element in the span, in order."""
    for info in segment_split(span.collection, span.first, span.last):
        for index, value in enumerate(info, info.begin):
            yield Position(info.index, index), value


def _matches_at(
    items: list[tuple[Position, Any]],
    start: int,
    needle: list[Any],
    pred: BinaryPredicate,
) -> bool:
    window = itertools.islice(items, start, start + len(needle))
    return all(pred(x, y) for (_, x), y in zip(window, needle))


def all_of(span: Span, pred: Predicate) -> bool:
    """Whether ``pred`` holds for every element of the span."""
    return all(pred(x) for x in span)


def any_of(span: Span, pred: Predicate) -> bool:
    """Whether ``pred`` holds for at least one element of the span."""
    return any(pred(x) for x in span)


def none_of(span: Span, pred: Predicate) -> bool:
    """Whether ``pred`` holds for no element of the span."""
    return not any_of(span, pred)


def for_each(span: Span, f: F) -> F:
    """Call ``f`` with every element of the span and return ``f``."""
    for x in span:
        f(x)
    return f


def for_each_n(
    collection: PolyCollection, first: Position, n: int, f: Callable[[Any], Any]
) -> Position:
    """Call ``f`` with the ``n`` elements starting at ``first``.

    Returns the position following the last element visited, or ``first``
    when ``n`` is not positive. Raises IndexError when fewer than ``n``
    elements follow ``first``.
    """
    if n <= 0:
        return first
    rest = collection.span(first, collection.end())
    if n > len(rest):
        raise IndexError(f"only {len(rest)} elements follow the position, not {n}")
    for x in itertools.islice(rest, n):
        f(x)
    return collection.advance(first, n)


def find(span: Span, value: Any) -> Position:
    """Position of the first element equal to ``value``."""
    return find_if(span, lambda x: _equal_to(x, value))


def find_if(span: Span, pred: Predicate) -> Position:
    """Position of the first element for which ``pred`` holds."""
    return next((pos for pos, x in _enumerate(span) if pred(x)), span.last)


def find_if_not(span: Span, pred: Predicate) -> Position:
    """Position of the first element for which ``pred`` does not hold."""
    return next((pos for pos, x in _enumerate(span) if not pred(x)), span.last)


def find_end(
    span: Span, needle: Iterable[Any], pred: BinaryPredicate | None = None
) -> Position:
    """Position where the last occurrence of ``needle`` in the span starts.

    An empty needle is never found.
    """
    pred = pred or _equal_to
    needle = list(needle)
    if not needle:
        return span.last
    items = list(_enumerate(span))
    for start in reversed(range(len(items) - len(needle) + 1)):
        if _matches_at(items, start, needle, pred):
            return items[start][0]
    return span.last


def find_first_of(
    span: Span, candidates: Iterable[Any], pred: BinaryPredicate | None = None
) -> Position:
    """Position of the first element matching any of ``candidates``."""
    pred = pred or _equal_to
    candidates = list(candidates)
    return find_if(span, lambda x: any(pred(x, c) for c in candidates))


def adjacent_find(span: Span, pred: BinaryPredicate | None = None) -> Position:
    """Position of the first element that matches the element following it."""
    pred = pred or _equal_to
    for (pos, x), (_, y) in itertools.pairwise(_enumerate(span)):
        if pred(x, y):
            return pos
    return span.last


def count(span: Span, value: Any) -> int:
    """Number of elements equal to ``value``."""
    return count_if(span, lambda x: _equal_to(x, value))


def count_if(span: Span, pred: Predicate) -> int:
    """Number of elements for which ``pred`` holds."""
    return sum(1 for x in span if pred(x))


def mismatch(
    span: Span,
    other: Iterable[Any],
    pred: BinaryPredicate | None = None,
    bounded: bool = False,
) -> tuple[Position, int]:
    """First place where the span and ``other`` differ.

    Returns the position in the span and the index in ``other``. When
    ``bounded`` is true, the end of ``other`` also stops the walk; otherwise
    ``other`` must be at least as long as the span and IndexError is raised
    if it ends first.
    """
    pred = pred or _equal_to
    others = iter(other)
    consumed = 0
    for pos, x in _enumerate(span):
        try:
            y = next(others)
        except StopIteration:
            if bounded:
                return pos, consumed
            raise IndexError("other sequence ends before the span") from None
        if not pred(x, y):
            return pos, consumed
        consumed += 1
    return span.last, consumed


def equal(
    span: Span,
    other: Iterable[Any],
    pred: BinaryPredicate | None = None,
    bounded: bool = False,
) -> bool:
    """Whether the span matches ``other`` element by element.

    When ``bounded`` is true both must also have the same length; otherwise
    only the first ``len(span)`` items of ``other`` are compared.
    """
    others = list(other)
    pos, consumed = mismatch(span, others, pred, bounded)
    if pos != span.last:
        return False
    return not bounded or consumed == len(others)


def is_permutation(
    span: Span,
    other: Iterable[Any],
    pred: BinaryPredicate | None = None,
    bounded: bool = False,
) -> bool:
    """Whether ``other`` holds the span's elements in some order.

    When ``bounded`` is false only the first ``len(span)`` items of
    ``other`` are considered, and IndexError is raised if it is shorter.
    """
    pred = pred or _equal_to
    values = [x for _, x in _enumerate(span)]
    others = list(other)
    if bounded:
        if len(others) != len(values):
            return False
    elif len(others) < len(values):
        raise IndexError("other sequence ends before the span")
    else:
        others = others[: len(values)]

    skip = next(
        (i for i, (x, y) in enumerate(zip(values, others)) if not pred(x, y)),
        len(values),
    )
    values, others = values[skip:], others[skip:]
    for i, x in enumerate(values):
        if any(pred(x, earlier) for earlier in values[:i]):
            continue
        matches = sum(1 for y in others if pred(x, y))
        if matches == 0 or matches != sum(1 for y in values[i:] if pred(x, y)):
            return False
    return True


def search(
    span: Span, needle: Iterable[Any], pred: BinaryPredicate | None = None
) -> Position:
    """Position where the first occurrence of ``needle`` in the span starts.

    An empty needle is found at the start of the span.
    """
    pred = pred or _equal_to
    needle = list(needle)
    if not needle:
        return span.first
    items = list(_enumerate(span))
    for start in range(len(items) - len(needle) + 1):
        if _matches_at(items, start, needle, pred):
            return items[start][0]
    return span.last


def search_n(
    span: Span, n: int, value: Any, pred: BinaryPredicate | None = None
) -> Position:
    """Position of the first run of ``n`` consecutive elements matching ``value``.

    A run of zero or fewer elements is found at the start of the span.
    """
    pred = pred or _equal_to
    if n <= 0:
        return span.first
    run = 0
    run_start = span.last
    for pos, x in _enumerate(span):
        if pred(x, value):
            if run == 0:
                run_start = pos
            run += 1
            if run == n:
                return run_start
        else:
            run = 0
    return span.last


def fast_distance(span: Span) -> int:
    """Number of elements in the span."""
    return span.collection.distance(span.first, span.last)
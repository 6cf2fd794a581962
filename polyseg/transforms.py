"""Copying and partitioning algorithms over a span of a polymorphic collection.

Every algorithm walks the span one segment at a time and returns new lists
rather than writing through an output iterator. Positions returned are
``Position`` values of the span's collection. When no predicate is given,
elements are compared with ``==``. Comparing an element whose type has no
equality raises NotEqualityComparable.
"""

from __future__ import annotations

import bisect
import itertools
import random
from typing import Any, Callable, Iterable

from polyseg.collection import PolyCollection, Position, Span
from polyseg.queries import _enumerate, _equal_to

Predicate = Callable[[Any], Any]
BinaryPredicate = Callable[[Any, Any], Any]


def copy(span: Span) -> list[Any]:
    """The elements of the span, in order."""
    return list(span)


def copy_n(collection: PolyCollection, first: Position, n: int) -> list[Any]:
    """The ``n`` elements starting at ``first``.

    Returns an empty list when ``n`` is not positive. Raises IndexError when
    fewer than ``n`` elements follow ``first``.
    """
    if n <= 0:
        return []
    return list(collection.span(first, collection.advance(first, n)))


def copy_if(span: Span, pred: Predicate) -> list[Any]:
    """The elements of the span for which ``pred`` holds."""
    return [x for x in span if pred(x)]


def move(span: Span) -> list[Any]:
    """The elements of the span, handed over without being copied."""
    return list(span)


def transform(span: Span, op: Callable[[Any], Any]) -> list[Any]:
    """``op`` applied to every element of the span."""
    return [op(x) for x in span]


def transform2(
    span: Span, other: Iterable[Any], op: Callable[[Any, Any], Any]
) -> list[Any]:
    """``op`` applied to each element of the span and the matching item of ``other``.

    Raises IndexError when ``other`` ends before the span does.
    """
    others = iter(other)
    result = []
    for x in span:
        try:
            y = next(others)
        except StopIteration:
            raise IndexError("other sequence ends before the span") from None
        result.append(op(x, y))
    return result


def replace_copy(span: Span, old: Any, new: Any) -> list[Any]:
    """The span's elements with every element equal to ``old`` replaced by ``new``."""
    return [new if _equal_to(x, old) else x for x in span]


def replace_copy_if(span: Span, pred: Predicate, new: Any) -> list[Any]:
    """The span's elements with those satisfying ``pred`` replaced by ``new``."""
    return [new if pred(x) else x for x in span]


def remove_copy(span: Span, value: Any) -> list[Any]:
    """The span's elements that are not equal to ``value``."""
    return [x for x in span if not _equal_to(x, value)]


def remove_copy_if(span: Span, pred: Predicate) -> list[Any]:
    """The span's elements for which ``pred`` does not hold."""
    return [x for x in span if not pred(x)]


def unique_copy(span: Span, pred: BinaryPredicate | None = None) -> list[Any]:
    """The first element of every run of consecutive matching elements.

    Each element is compared with the first element of the current run.
    """
    pred = pred or _equal_to
    result: list[Any] = []
    leader: Any = None
    for x in span:
        if result and pred(leader, x):
            continue
        result.append(x)
        leader = x
    return result


def rotate_copy(
    collection: PolyCollection, first: Position, middle: Position, last: Position
) -> list[Any]:
    """The elements of ``[middle, last)`` followed by those of ``[first, middle)``."""
    head = collection.span(first, middle)
    tail = collection.span(middle, last)
    return list(tail) + list(head)


def sample(span: Span, n: int, rng: random.Random) -> list[Any]:
    """``min(n, len(span))`` elements chosen at random, kept in span order.

    Each element is drawn with ``rng.randint`` by selection sampling, so a
    generator seeded the same way gives the same sample.
    """
    values = list(span)
    remaining = len(values)
    wanted = min(n, remaining)
    result = []
    for x in values:
        if wanted <= 0:
            break
        remaining -= 1
        if rng.randint(0, remaining) < wanted:
            result.append(x)
            wanted -= 1
    return result


def is_partitioned(span: Span, pred: Predicate) -> bool:
    """Whether every element satisfying ``pred`` comes before every other."""
    rest = itertools.dropwhile(pred, span)
    return not any(pred(x) for x in rest)


def partition_copy(span: Span, pred: Predicate) -> tuple[list[Any], list[Any]]:
    """The elements satisfying ``pred`` and those that do not, each in order."""
    matching: list[Any] = []
    others: list[Any] = []
    for x in span:
        (matching if pred(x) else others).append(x)
    return matching, others


def partition_point(span: Span, pred: Predicate) -> Position:
    """Position of the first element of a partitioned span not satisfying ``pred``.

    The span is searched by bisection, so it must be partitioned by ``pred``.
    """
    items = list(_enumerate(span))
    index = bisect.bisect_left(items, True, key=lambda item: not pred(item[1]))
    if index < len(items):
        return items[index][0]
    return span.last
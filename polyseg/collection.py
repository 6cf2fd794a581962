"""A polymorphic collection that keeps its elements in one segment per type."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from polyseg.holder import UnregisteredType
from polyseg.segment import Segment
from polyseg.typemap import TypeInfoMap


@dataclass(frozen=True, order=True)
class Position:
    """A place in a collection: a segment number and an index inside it.

    The position just past the last element has the segment number equal to
    the number of segments and index 0.
    """

    segment: int
    index: int = 0


@dataclass(frozen=True)
class SegmentInfo:
    """The part ``[begin, end)`` of one segment that a range covers."""

    type: type
    index: int
    segment: Segment = field(repr=False, compare=False)
    begin: int
    end: int

    def __iter__(self) -> Iterator[Any]:
        return iter(self.segment[self.begin:self.end])

    def __len__(self) -> int:
        return self.end - self.begin


@dataclass(frozen=True)
class Span:
    """The elements of a collection between two positions."""

    collection: PolyCollection = field(repr=False)
    first: Position
    last: Position

    def __iter__(self) -> Iterator[Any]:
        for info in segment_split(self.collection, self.first, self.last):
            yield from info

    def __len__(self) -> int:
        return self.collection.distance(self.first, self.last)


class PolyCollection:
    """Elements derived from ``base``, stored contiguously by concrete type.

    Segments appear in the order their types were registered, and iteration
    visits each segment in turn.
    """

    def __init__(self, base: type = object) -> None:
        if not isinstance(base, type):
            raise TypeError(f"base must be a class, not {type(base).__name__}")
        self._base = base
        self._segments: TypeInfoMap[Segment] = TypeInfoMap()
        self._order: list[Segment] = []

    @property
    def base(self) -> type:
        """The class every element must be an instance of."""
        return self._base

    # registration

    def _register(self, type_: type) -> Segment:
        if not isinstance(type_, type) or not issubclass(type_, self._base):
            raise TypeError(f"{type_!r} is not a subclass of {self._base.__name__}")
        segment, inserted = self._segments.insert(type_, Segment(type_))
        if inserted:
            self._order.append(segment)
        return segment

    def register_types(self, *args: type) -> None:
        """Create empty segments for the given types if they have none yet."""
        for type_ in args:
            self._register(type_)

    def is_registered(self, type_: type) -> bool:
        """Whether ``type_`` has a segment in this collection."""
        return type_ in self._segments

    def _segment(self, type_: type) -> Segment:
        segment = self._segments.find(type_)
        if segment is None:
            raise UnregisteredType(type_)
        return segment

    def _segment_index(self, segment: Segment) -> int:
        return next(i for i, seg in enumerate(self._order) if seg is segment)

    # insertion

    def insert(self, value: Any) -> Position:
        """Append ``value`` to the segment of its type and return its position.

        Raises UnregisteredType when the value's type has no segment.
        """
        if not isinstance(value, self._base):
            raise TypeError(
                f"{type(value).__name__} is not a subclass of {self._base.__name__}"
            )
        segment = self._segment(type(value))
        index = segment.push_back(value)
        return Position(self._segment_index(segment), index)

    def emplace(self, type_: type, *args: Any, **kwargs: Any) -> Position:
        """Construct a ``type_`` at the end of its segment, registering it if needed."""
        segment = self._register(type_)
        index = segment.emplace_back(*args, **kwargs)
        return Position(self._segment_index(segment), index)

    # capacity and segment access

    def size(self, type_: type | None = None) -> int:
        """Number of elements, in total or of one registered type."""
        if type_ is None:
            return sum(len(segment) for segment in self._order)
        return len(self._segment(type_))

    def empty(self, type_: type | None = None) -> bool:
        """Whether there are no elements, in total or of one registered type."""
        return self.size(type_) == 0

    def clear(self, type_: type | None = None) -> None:
        """Remove all elements, or only those of one registered type."""
        if type_ is None:
            for segment in self._order:
                segment.clear()
        else:
            self._segment(type_).clear()

    def segment(self, type_: type) -> Segment:
        """The segment holding the elements of exactly ``type_``."""
        return self._segment(type_)

    def segment_traversal(self) -> Iterator[SegmentInfo]:
        """Yield every segment, empty ones included, in order."""
        for i, segment in enumerate(self._order):
            yield SegmentInfo(segment.type, i, segment, 0, len(segment))

    def reserve(self, n: int, type_: type | None = None) -> None:
        """Reserve room for ``n`` elements in one segment or in every segment."""
        if type_ is None:
            for segment in self._order:
                segment.reserve(n)
        else:
            self._segment(type_).reserve(n)

    def capacity(self, type_: type) -> int:
        """Capacity of the segment of ``type_``."""
        return self._segment(type_).capacity()

    # positions

    def _normalize(self, position: Position) -> Position:
        count = len(self._order)
        if not 0 <= position.segment <= count:
            raise IndexError(f"segment {position.segment} out of range 0..{count}")
        if position.segment == count:
            if position.index != 0:
                raise IndexError("end position must have index 0")
            return position
        size = len(self._order[position.segment])
        if not 0 <= position.index <= size:
            raise IndexError(f"index {position.index} out of range 0..{size}")
        if position.index < size:
            return position
        for i, segment in enumerate(self._order[position.segment + 1:], position.segment + 1):
            if len(segment):
                return Position(i, 0)
        return Position(count, 0)

    def begin(self, type_: type | None = None) -> Position:
        """Position of the first element, overall or of one type's segment."""
        if type_ is None:
            return self._normalize(Position(0, 0))
        return Position(self._segment_index(self._segment(type_)), 0)

    def end(self, type_: type | None = None) -> Position:
        """Position past the last element, overall or of one type's segment."""
        if type_ is None:
            return Position(len(self._order), 0)
        segment = self._segment(type_)
        return Position(self._segment_index(segment), len(segment))

    def at(self, position: Position) -> Any:
        """The element at ``position``."""
        position = self._normalize(position)
        if position.segment == len(self._order):
            raise IndexError("no element at the end position")
        return self._order[position.segment][position.index]

    def _flat(self, position: Position) -> int:
        position = self._normalize(position)
        before = sum(len(segment) for segment in self._order[: position.segment])
        return before + position.index

    def _from_flat(self, offset: int) -> Position:
        for i, segment in enumerate(self._order):
            if offset < len(segment):
                return Position(i, offset)
            offset -= len(segment)
        return Position(len(self._order), 0)

    def advance(self, position: Position, n: int) -> Position:
        """The position ``n`` elements after ``position`` (before, if negative)."""
        offset = self._flat(position) + n
        if not 0 <= offset <= self.size():
            raise IndexError("advanced position out of range")
        return self._from_flat(offset)

    def distance(self, first: Position, last: Position) -> int:
        """Number of steps from ``first`` to ``last``."""
        return self._flat(last) - self._flat(first)

    def span(self, first: Position | None = None, last: Position | None = None) -> Span:
        """The elements from ``first`` up to, not including, ``last``."""
        first = self._normalize(self.begin() if first is None else first)
        last = self._normalize(self.end() if last is None else last)
        if first > last:
            raise ValueError("first position is after last position")
        return Span(self, first, last)

    # whole collection

    def __iter__(self) -> Iterator[Any]:
        for segment in self._order:
            yield from segment

    def __len__(self) -> int:
        return self.size()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PolyCollection):
            return NotImplemented
        if self.size() != other.size():
            return False
        pairs = []
        for type_, segment in self._segments:
            theirs = other._segments.find(type_)
            if theirs is None:
                if len(segment):
                    return False
            elif len(segment) != len(theirs):
                return False
            elif len(segment):
                pairs.append((segment, theirs))
        return all(mine.equal(theirs) for mine, theirs in pairs)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PolyCollection({self._base.__name__}, {self._order!r})"


def _split(collection: PolyCollection, first: Position, last: Position) -> Iterator[SegmentInfo]:
    count = len(collection._order)
    stop = last.segment if last.segment == count else last.segment + 1
    segments = collection._order[first.segment:stop]
    for i, segment in enumerate(segments, first.segment):
        begin = first.index if i == first.segment else 0
        end = last.index if i == last.segment else len(segment)
        yield SegmentInfo(segment.type, i, segment, begin, end)


def segment_split(
    collection: PolyCollection, first: Position, last: Position
) -> Iterator[SegmentInfo]:
    """Break the range ``[first, last)`` into per-segment parts."""
    span = collection.span(first, last)
    return _split(collection, span.first, span.last)


def for_each_segment(
    collection: PolyCollection,
    first: Position,
    last: Position,
    f: Callable[[SegmentInfo], Any],
) -> None:
    """Call ``f`` with every per-segment part of ``[first, last)``."""
    for info in segment_split(collection, first, last):
        f(info)
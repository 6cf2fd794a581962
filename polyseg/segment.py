"""Storage for the elements of one concrete type inside a polymorphic collection."""

from __future__ import annotations

from typing import Any, Iterator, overload

from polyseg.holder import ValueHolder


class Segment:
    """A contiguous, ordered run of elements that all have exactly one type.

    Elements are kept in value holders, so copying or comparing a segment
    raises the holder's errors when the element type forbids the operation.
    Positions are plain indices. Operations that insert return the index of
    the new element, and operations that erase return the index of the
    element that now follows the erased ones.
    """

    __slots__ = ("_type", "_store", "_capacity")

    def __init__(self, type_: type) -> None:
        if not isinstance(type_, type):
            raise TypeError(f"segment type must be a class, not {type(type_).__name__}")
        self._type = type_
        self._store: list[ValueHolder] = []
        self._capacity = 0

    @property
    def type(self) -> type:
        """The concrete type of every element in this segment."""
        return self._type

    # construction of related segments

    def copy(self) -> Segment:
        """Return a segment holding copies of every element.

        Raises NotCopyConstructible when the element type cannot be copied
        and the segment is not empty.
        """
        result = Segment(self._type)
        result._store = [holder.copy() for holder in self._store]
        result._capacity = len(result._store)
        return result

    def empty_copy(self) -> Segment:
        """Return an empty segment for the same element type."""
        return Segment(self._type)

    def equal(self, other: Segment) -> bool:
        """Whether both segments hold equal elements in the same order.

        Raises NotEqualityComparable when elements have to be compared and
        their type has no equality.
        """
        if len(self._store) != len(other._store):
            return False
        return all(a == b for a, b in zip(self._store, other._store))

    # inspection

    def __len__(self) -> int:
        return len(self._store)

    def __iter__(self) -> Iterator[Any]:
        return (holder.value for holder in self._store)

    @overload
    def __getitem__(self, index: int) -> Any: ...

    @overload
    def __getitem__(self, index: slice) -> list[Any]: ...

    def __getitem__(self, index: int | slice) -> Any:
        if isinstance(index, slice):
            return [holder.value for holder in self._store[index]]
        return self._store[index].value

    def empty(self) -> bool:
        """Whether the segment holds no elements."""
        return not self._store

    def capacity(self) -> int:
        """Number of elements the segment can hold before it has to grow."""
        return self._capacity

    def reserve(self, n: int) -> None:
        """Make room for at least ``n`` elements."""
        if n < 0:
            raise ValueError("reserve size must be non-negative")
        if n > self._capacity:
            self._capacity = n

    def shrink_to_fit(self) -> None:
        """Reduce the capacity to the number of elements held."""
        self._capacity = len(self._store)

    # modification

    def _check_value(self, value: Any) -> None:
        if type(value) is not self._type:
            raise TypeError(
                f"segment holds {self._type.__name__}, not {type(value).__name__}"
            )

    def _check_position(self, index: int) -> int:
        if not 0 <= index <= len(self._store):
            raise IndexError(f"position {index} out of range 0..{len(self._store)}")
        return index

    def _grow(self) -> None:
        size = len(self._store)
        if size > self._capacity:
            self._capacity = max(size, 2 * self._capacity)

    def _insert_holder(self, index: int, holder: ValueHolder) -> int:
        self._store.insert(index, holder)
        self._grow()
        return index

    def push_back(self, value: Any) -> int:
        """Append ``value`` and return its index."""
        self._check_value(value)
        return self._insert_holder(len(self._store), ValueHolder(value))

    def emplace_back(self, *args: Any, **kwargs: Any) -> int:
        """Construct an element from the arguments at the end; return its index."""
        return self._insert_holder(
            len(self._store), ValueHolder.emplace(self._type, *args, **kwargs)
        )

    def insert(self, index: int, value: Any) -> int:
        """Insert ``value`` before position ``index`` and return its index."""
        self._check_value(value)
        self._check_position(index)
        return self._insert_holder(index, ValueHolder(value))

    def emplace(self, index: int, *args: Any, **kwargs: Any) -> int:
        """Construct an element before position ``index``; return its index."""
        self._check_position(index)
        holder = ValueHolder.emplace(self._type, *args, **kwargs)
        return self._insert_holder(index, holder)

    def erase(self, index: int) -> int:
        """Remove the element at ``index``; return the index that follows it."""
        if not 0 <= index < len(self._store):
            raise IndexError(f"position {index} out of range 0..{len(self._store) - 1}")
        del self._store[index]
        return index

    def erase_range(self, start: int, stop: int) -> int:
        """Remove the elements in ``[start, stop)``; return ``start``."""
        self._check_position(start)
        self._check_position(stop)
        if start > stop:
            raise IndexError(f"invalid range {start}..{stop}")
        del self._store[start:stop]
        return start

    def erase_till_end(self, start: int) -> int:
        """Remove every element from ``start`` on; return ``start``."""
        return self.erase_range(start, len(self._store))

    def erase_from_begin(self, stop: int) -> int:
        """Remove every element before ``stop``; return 0."""
        return self.erase_range(0, stop)

    def clear(self) -> None:
        """Remove all elements, keeping the capacity."""
        self._store.clear()

    def __repr__(self) -> str:
        values = ", ".join(repr(holder.value) for holder in self._store)
        return f"Segment({self._type.__name__}, [{values}])"
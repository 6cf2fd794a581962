"""Value holders and the errors raised for unsupported element operations."""

from __future__ import annotations

import copy as _copy
from typing import Any, TypeVar

T = TypeVar("T", bound=type)

_COPYABLE_FLAG = "_polyseg_copyable"
_COMPARABLE_FLAG = "_polyseg_comparable"


class PolyCollectionError(Exception):
    """Base class for errors raised by polymorphic collections."""

    def __init__(self, type_: type, message: str) -> None:
        super().__init__(f"{message}: {type_.__name__}")
        self.type = type_


class UnregisteredType(PolyCollectionError):
    """The concrete type of an element is not registered in the collection."""

    def __init__(self, type_: type) -> None:
        super().__init__(type_, "type not registered")


class NotCopyConstructible(PolyCollectionError):
    """An element of a non-copyable type was asked to be copied."""

    def __init__(self, type_: type) -> None:
        super().__init__(type_, "type not copy constructible")


class NotEqualityComparable(PolyCollectionError):
    """Elements of a type without equality were asked to be compared."""

    def __init__(self, type_: type) -> None:
        super().__init__(type_, "type not equality comparable")


def non_copyable(cls: T) -> T:
    """Class decorator marking instances of ``cls`` as not copyable."""
    setattr(cls, _COPYABLE_FLAG, False)
    return cls


def non_comparable(cls: T) -> T:
    """Class decorator marking instances of ``cls`` as not comparable."""
    setattr(cls, _COMPARABLE_FLAG, False)
    return cls


def is_copyable(cls: type) -> bool:
    """Whether instances of ``cls`` may be copied."""
    return getattr(cls, _COPYABLE_FLAG, True)


def is_equality_comparable(cls: type) -> bool:
    """Whether ``cls`` defines its own equality and is not marked otherwise."""
    if not getattr(cls, _COMPARABLE_FLAG, True):
        return False
    return cls.__eq__ is not object.__eq__


class ValueHolder:
    """Holds one element, copying and comparing it only where its type allows."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    @classmethod
    def emplace(cls, type_: type, *args: Any, **kwargs: Any) -> ValueHolder:
        """Construct a ``type_`` in place from the given arguments."""
        return cls(type_(*args, **kwargs))

    def copy(self) -> ValueHolder:
        """Return a holder with a copy of the value.

        Raises NotCopyConstructible when the value's type forbids copying.
        """
        type_ = type(self.value)
        if not is_copyable(type_):
            raise NotCopyConstructible(type_)
        return ValueHolder(_copy.copy(self.value))

    def assign(self, other: ValueHolder) -> ValueHolder:
        """Take over the value held by ``other``."""
        if other is not self:
            self.value = other.value
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValueHolder):
            return NotImplemented
        type_ = type(self.value)
        if not is_equality_comparable(type_):
            raise NotEqualityComparable(type_)
        return bool(self.value == other.value)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ValueHolder({self.value!r})"
"""A mapping keyed by Python types, used to index segments by concrete type."""

from __future__ import annotations

from typing import Any, Generic, Iterator, TypeVar

V = TypeVar("V")


class TypeInfoMap(Generic[V]):
    """Mapping from a concrete type to a value, in insertion order.

    Keys must be classes. Iterating yields ``(type, value)`` pairs, and
    ``insert`` never overwrites an existing entry.
    """

    __slots__ = ("_map",)

    def __init__(self) -> None:
        self._map: dict[type, V] = {}

    @staticmethod
    def _check_key(key: Any) -> type:
        if not isinstance(key, type):
            raise TypeError(f"key must be a type, not {type(key).__name__}")
        return key

    def find(self, key: type) -> V | None:
        """Return the value stored for ``key``, or None if there is none."""
        return self._map.get(self._check_key(key))

    def insert(self, key: type, value: V) -> tuple[V, bool]:
        """Store ``value`` under ``key`` unless the key is already present.

        Returns the value now held for ``key`` and whether it was inserted.
        """
        key = self._check_key(key)
        existing = self._map.get(key)
        if key in self._map:
            return existing, False  # type: ignore[return-value]
        self._map[key] = value
        return value, True

    def swap(self, other: TypeInfoMap[V]) -> None:
        """Exchange the contents of this map with ``other``."""
        self._map, other._map = other._map, self._map

    def copy(self) -> TypeInfoMap[V]:
        """Return a new map holding the same entries (values are shared)."""
        result: TypeInfoMap[V] = TypeInfoMap()
        result._map = dict(self._map)
        return result

    def __iter__(self) -> Iterator[tuple[type, V]]:
        return iter(list(self._map.items()))

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, type) and key in self._map

    def __repr__(self) -> str:
        entries = ", ".join(f"{k.__name__}: {v!r}" for k, v in self._map.items())
        return f"TypeInfoMap({{{entries}}})"
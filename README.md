# polyseg

A polymorphic collection that stores its elements in one segment per exact
class, together with algorithms that walk a range of the collection one
segment at a time.

## Installation

```
pip install polyseg
```

For running the tests:

```
pip install "polyseg[test]"
pytest
```

## Quick start

```python
from polyseg.collection import PolyCollection
from polyseg.rolegame import Sprite, Warrior, Juggernaut, Goblin

c = PolyCollection(Sprite)
c.register_types(Warrior, Juggernaut, Goblin)

c.insert(Warrior(0))
c.insert(Juggernaut(1))
c.insert(Goblin(2))
c.emplace(Goblin, 3)

print(len(c))                  # 4
print(c.size(Goblin))          # 2
print(c.is_registered(Warrior))  # True

for sprite in c.segment(Goblin):
    print(sprite.render())     # goblin 2, goblin 3

c.clear(Juggernaut)
print(c.empty(Juggernaut))     # True
```

## The collection

`PolyCollection(base)` (module `polyseg.collection`) accepts instances of
`base`, which defaults to `object`. Each exact class has its own `Segment`
(module `polyseg.segment`); segments appear in the order their classes were
registered, and iterating the collection visits each segment in turn.

- `register_types(*classes)` creates empty segments for classes that have
  none yet; `is_registered(cls)` tells whether a class has one.
- `insert(value)` appends a value to the segment of its class. It raises
  `TypeError` if the value is not an instance of `base`, and
  `UnregisteredType` if its class has no segment.
- `emplace(cls, *args, **kwargs)` constructs a value at the end of the
  segment of `cls`, registering `cls` first if needed.
- `size`, `empty`, `clear` and `reserve` work on the whole collection or,
  given a class, on that class's segment; `capacity(cls)` reports the
  capacity of one segment. Asking about an unregistered class raises
  `UnregisteredType`.
- `segment(cls)` returns the segment itself; `segment_traversal()` yields a
  `SegmentInfo` for every segment, empty ones included.
- Two collections compare equal when they hold equal elements of the same
  classes in the same order within each segment.

A `Segment` holds values of exactly one class and supports `push_back`,
`emplace_back`, `insert`, `emplace`, `erase`, `erase_range`,
`erase_till_end`, `erase_from_begin`, `clear`, `reserve`, `shrink_to_fit`,
`capacity`, `copy`, `empty_copy` and `equal`, plus `len()`, iteration and
indexing.

## Positions and spans

`begin()` and `end()` return `Position` values (a segment number and an
index inside it); given a class, they bound that class's segment.
`at(position)` returns the element there, `advance(position, n)` moves a
position and `distance(first, last)` counts the steps between two.
`span(first, last)` gives a `Span` over that range; both bounds default to
the ends of the collection.

`segment_split(collection, first, last)` breaks a range into one
`SegmentInfo` per segment it touches, and
`for_each_segment(collection, first, last, f)` calls `f` with each of them.

## Algorithms

`polyseg.queries` holds the non-modifying algorithms: `all_of`, `any_of`,
`none_of`, `for_each`, `for_each_n`, `find`, `find_if`, `find_if_not`,
`find_end`, `find_first_of`, `adjacent_find`, `count`, `count_if`,
`mismatch`, `equal`, `is_permutation`, `search`, `search_n` and
`fast_distance`. Those that search return a `Position`; when nothing is
found they return the end of the span.

`polyseg.transforms` holds the copying algorithms, which return new lists:
`copy`, `copy_n`, `copy_if`, `move`, `transform`, `transform2`,
`replace_copy`, `replace_copy_if`, `remove_copy`, `remove_copy_if`,
`unique_copy`, `rotate_copy`, `sample`, `is_partitioned`, `partition_copy`
and `partition_point`.

```python
import random

from polyseg import queries, transforms

everything = c.span()
print(queries.count_if(everything, lambda s: s.id % 2 == 0))
print(transforms.sample(everything, 2, random.Random(1)))
```

Where no predicate is given, elements are compared with `==`.

## Value rules

`polyseg.holder` provides the `non_copyable` and `non_comparable` class
decorators, and `is_copyable` and `is_equality_comparable` to ask about a
class. A class counts as comparable only if it defines its own `__eq__` and
is not marked `non_comparable`. Copying a segment of non-copyable values
raises `NotCopyConstructible`; comparing values that are not comparable, by
collection equality or by algorithms without a predicate, raises
`NotEqualityComparable`. Both, like `UnregisteredType`, derive from
`PolyCollectionError`.

## Sample classes and demo

`polyseg.rolegame` defines sample classes: `Sprite` with `Warrior`,
`Juggernaut`, `Goblin` and the non-copyable `Elf`, plus the unrelated
`Window`.

A short walk-through of segment operations on these sprites prints its
results to standard output:

```
polyseg-demo
```
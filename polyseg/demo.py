"""Walk through the segment-specific operations of a polymorphic collection."""

from __future__ import annotations

import argparse
import itertools
import random
import sys
from typing import Callable, TextIO

from polyseg.collection import PolyCollection
from polyseg.holder import UnregisteredType
from polyseg.rolegame import Goblin, Juggernaut, Sprite, Warrior, Window

SEED = 92748


def make_sprite_factory(seed: int = SEED) -> Callable[[], Sprite]:
    """Return a function producing warriors, juggernauts and goblins at random.

    Each sprite gets the next id, starting from 0.
    """
    rng = random.Random(seed)
    ids = itertools.count()
    kinds = (Warrior, Juggernaut, Goblin)

    def make_sprite() -> Sprite:
        return rng.choice(kinds)(next(ids))

    return make_sprite


def run(out: TextIO) -> None:
    """Run the walkthrough, writing its output to ``out``."""

    def emit(*items: object) -> None:
        print(*items, file=out)

    c = PolyCollection(Sprite)
    make_sprite = make_sprite_factory(SEED)

    try:
        for _ in range(8):
            c.insert(make_sprite())
    except UnregisteredType:
        pass

    emit(int(c.is_registered(Warrior)))
    emit(int(Warrior in [t for t, in ((info.type,) for info in c.segment_traversal())]))

    c.register_types(Warrior, Juggernaut, Goblin)
    for _ in range(8):
        c.insert(make_sprite())

    c1 = PolyCollection()
    c2 = PolyCollection()
    c2.emplace(Window, "pop-up")
    try:
        c1.insert(next(iter(c2)))
    except UnregisteredType:
        pass

    emit(c.size())
    emit(c.size(Juggernaut))
    emit(len(c.segment(Juggernaut)))
    c.clear(Juggernaut)
    emit(int(c.empty(Juggernaut)))
    emit(c.size())

    warriors = c.span(c.begin(Warrior), c.end(Warrior))
    emit(",".join(w.render() for w in warriors))
    emit(",".join(w.render() for w in c.segment(Warrior)))

    for w in warriors:
        w.rank = "super" + w.rank
    emit(",".join(w.render() for w in warriors))

    rendered = []
    for w in c.segment(Warrior):
        w.rank = "super" + w.rank
        w.rank = w.rank[len("super"):]
        rendered.append(w.render())
    emit(",".join(rendered))

    emit(",".join(s.render() for info in c.segment_traversal() for s in info))

    c.reserve(100, Goblin)
    emit(c.capacity(Goblin))

    c.reserve(1000)
    emit(", ".join(str(c.capacity(t)) for t in (Warrior, Juggernaut, Goblin)))


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        description="Show segment-specific operations on a polymorphic collection."
    )
    parser.parse_args(argv)
    run(sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
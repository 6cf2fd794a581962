"""Entities of a small role game, used as sample elements."""

from __future__ import annotations

from abc import ABC, abstractmethod

from polyseg.holder import non_copyable


class Sprite(ABC):
    """Something that can be drawn, identified by a number."""

    def __init__(self, id_: int) -> None:
        self.id = id_

    @abstractmethod
    def render(self) -> str:
        """Return the text that draws this sprite."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id})"


class Warrior(Sprite):
    """A sprite with a rank."""

    def __init__(self, id_: int, rank: str = "warrior") -> None:
        super().__init__(id_)
        self.rank = rank

    def render(self) -> str:
        return f"{self.rank} {self.id}"


class Juggernaut(Warrior):
    """A warrior of rank juggernaut."""

    def __init__(self, id_: int) -> None:
        super().__init__(id_, "juggernaut")


class Goblin(Sprite):
    """A goblin sprite."""

    def render(self) -> str:
        return f"goblin {self.id}"


class Window:
    """A captioned window; not a sprite."""

    def __init__(self, caption: str) -> None:
        self.caption = caption

    def display(self) -> str:
        """Return the text that draws this window."""
        return f"[{self.caption}]"

    def __repr__(self) -> str:
        return f"Window({self.caption!r})"


@non_copyable
class Elf(Sprite):
    """An elf sprite; elves cannot be copied."""

    def render(self) -> str:
        return f"elf {self.id}"
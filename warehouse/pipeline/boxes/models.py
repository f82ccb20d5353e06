"""Box and grid-coordinate models shared by every stage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


class Position(NamedTuple):
    """Integer grid coordinate.  Hashable, so it keys visited/parent maps."""

    x: int
    y: int


@dataclass
class Box:
    """A rectangular box.

    Created unpacked at the origin by the generator.  The placer mutates
    it exactly once when the placement is committed (position, possibly
    swapped width/height, ``is_rotated``, ``is_packed``).
    """

    id: int
    width: int
    height: int
    x: int = 0
    y: int = 0
    is_rotated: bool = False
    is_packed: bool = False
    is_selected: bool = False   # UI-only; never set by the pipeline

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)

    @property
    def area(self) -> int:
        return self.width * self.height

    def copy(self) -> "Box":
        return Box(
            id=self.id, width=self.width, height=self.height,
            x=self.x, y=self.y,
            is_rotated=self.is_rotated, is_packed=self.is_packed,
            is_selected=self.is_selected,
        )

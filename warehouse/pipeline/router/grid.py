"""Obstacle model — clearance-inflated rectangles around packed boxes.

Obstacles are derived on demand from a box collection and never stored
alongside the boxes.  Both pathfinders test a moving box (its bare
footprint) against these inflated rectangles.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from warehouse.pipeline.boxes.models import Box


@dataclass(frozen=True)
class Obstacle:
    """Axis-aligned rectangle: a packed box grown by ``clearance`` per side."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def blocks(self, x: int, y: int, width: int, height: int) -> bool:
        """True if the rectangle at (x, y) overlaps this obstacle.

        Touching edges do not count as overlap.
        """
        return (
            x + width > self.x and x < self.x + self.width
            and y + height > self.y and y < self.y + self.height
        )


def inflate(box: Box, clearance: int) -> Obstacle:
    """Grow a box by ``clearance`` on all four sides."""
    return Obstacle(
        x=box.x - clearance,
        y=box.y - clearance,
        width=box.width + 2 * clearance,
        height=box.height + 2 * clearance,
    )


def build_obstacles(
    boxes: Iterable[Box],
    clearance: int,
    *,
    exclude_id: int | None = None,
) -> list[Obstacle]:
    """One inflated rectangle per packed box, skipping ``exclude_id``."""
    return [
        inflate(b, clearance)
        for b in boxes
        if b.is_packed and b.id != exclude_id
    ]


def collides(
    obstacles: list[Obstacle],
    x: int, y: int, width: int, height: int,
) -> bool:
    for ob in obstacles:
        if ob.blocks(x, y, width, height):
            return True
    return False

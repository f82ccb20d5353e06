"""Router output dataclasses and search constants."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from warehouse.pipeline.boxes.models import Position


# ── Output dataclasses ─────────────────────────────────────────────


class PathStatus(str, Enum):
    """Outcome of the packing (approach) search."""

    FOUND = "found"                     # collision-checked BFS path
    BLOCKED = "blocked"                 # no path, fallback disabled
    UNSAFE_FALLBACK = "unsafe_fallback"  # direct path, NOT collision-checked


@dataclass
class PackingPath:
    """Approach path from the dock to a committed position."""

    status: PathStatus
    waypoints: list[Position] = field(default_factory=list)

    @property
    def is_safe(self) -> bool:
        return self.status is PathStatus.FOUND


# ── Edge-directed search tables ────────────────────────────────────
#
# Edge order matters: the nearest-edge pick keeps the last minimum.

EDGES = ("left", "right", "top", "bottom")

# Move priority per target edge: the move toward the edge first, then the
# two perpendicular moves, then the move away from it.
EDGE_DIRECTIONS: dict[str, tuple[tuple[int, int], ...]] = {
    "left":   ((-1, 0), (0, -1), (0, 1), (1, 0)),
    "right":  ((1, 0), (0, -1), (0, 1), (-1, 0)),
    "top":    ((0, -1), (-1, 0), (1, 0), (0, 1)),
    "bottom": ((0, 1), (-1, 0), (1, 0), (0, -1)),
}

# Packing search expansion order (unweighted BFS).
BFS_DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))

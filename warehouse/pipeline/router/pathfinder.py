"""Grid pathfinders for moving a box through the arena.

Supports:
  - Retrieval search (find_retrieval_path): edge-directed A* from a box's
    committed position to the nearest arena edge, allowed to leave the
    arena through that edge.
  - Packing search (find_packing_path): unweighted BFS from the dock to a
    committed position, with a tagged, uncollision-checked direct-path
    fallback.

Both move the box in 4 directions by ``config.step`` and key their
visited/parent maps by integer ``Position``.
"""

from __future__ import annotations

import heapq
import logging
from collections import deque
from typing import TYPE_CHECKING

from warehouse.pipeline.boxes.models import Box, Position

from .grid import Obstacle, collides
from .models import (
    PackingPath, PathStatus,
    EDGES, EDGE_DIRECTIONS, BFS_DIRECTIONS,
)

if TYPE_CHECKING:
    from warehouse.pipeline.config import WarehouseConfig


log = logging.getLogger(__name__)


# ── Edge helpers ───────────────────────────────────────────────────


def edge_distance(
    edge: str,
    x: int, y: int, width: int, height: int,
    storage_width: int, storage_length: int,
) -> int:
    """Manhattan distance from a box at (x, y) to one arena edge.

    Negative once the box has crossed the edge.
    """
    if edge == "left":
        return x
    if edge == "right":
        return storage_width - (x + width)
    if edge == "top":
        return y
    if edge == "bottom":
        return storage_length - (y + height)
    raise ValueError(f"Unknown edge {edge!r}")


def nearest_edge(
    x: int, y: int, width: int, height: int,
    storage_width: int, storage_length: int,
) -> str:
    """Edge with the smallest distance; ties keep the last in ``EDGES``."""
    return min(
        reversed(EDGES),
        key=lambda e: edge_distance(
            e, x, y, width, height, storage_width, storage_length),
    )


def _reconstruct(
    parents: dict[Position, Position], end: Position,
) -> list[Position]:
    path = [end]
    cur = end
    while cur in parents:
        cur = parents[cur]
        path.append(cur)
    path.reverse()
    return path


# ── Retrieval search (A*) ──────────────────────────────────────────


def find_retrieval_path(
    box: Box,
    obstacles: list[Obstacle],
    config: "WarehouseConfig",
) -> list[Position] | None:
    """A* escape route from the box's position to its nearest edge.

    *obstacles* must not include the box itself.  Returns the waypoints
    from the committed position to the first position that reaches (or
    crosses) the target edge, or None if the box is trapped.
    """
    W = config.storage_width
    L = config.storage_length
    step = config.step
    bw, bh = box.width, box.height

    edge = nearest_edge(box.x, box.y, bw, bh, W, L)
    moves = [(dx * step, dy * step) for dx, dy in EDGE_DIRECTIONS[edge]]

    # Region the box may occupy: anywhere inside, or hanging out of the
    # arena by up to its own size.
    min_x, max_x = -bw, W
    min_y, max_y = -bh, L
    # Collision only matters while fully inside.
    inner_max_x = W - bw
    inner_max_y = L - bh

    start = Position(box.x, box.y)
    counter = 0
    heap: list[tuple[int, int, Position]] = [
        (edge_distance(edge, start.x, start.y, bw, bh, W, L), counter, start),
    ]
    g_scores: dict[Position, int] = {start: 0}
    parents: dict[Position, Position] = {}
    closed: set[Position] = set()

    while heap:
        _f, _cnt, cur = heapq.heappop(heap)
        if cur in closed:
            continue
        closed.add(cur)

        if edge_distance(edge, cur.x, cur.y, bw, bh, W, L) <= 0:
            return _reconstruct(parents, cur)

        tentative_g = g_scores[cur] + step

        for dx, dy in moves:
            nxt = Position(cur.x + dx, cur.y + dy)
            if nxt in closed:
                continue
            if not (min_x <= nxt.x <= max_x and min_y <= nxt.y <= max_y):
                continue
            if (0 <= nxt.x <= inner_max_x and 0 <= nxt.y <= inner_max_y
                    and collides(obstacles, nxt.x, nxt.y, bw, bh)):
                continue

            if nxt not in g_scores or tentative_g < g_scores[nxt]:
                g_scores[nxt] = tentative_g
                parents[nxt] = cur
                h = edge_distance(edge, nxt.x, nxt.y, bw, bh, W, L)
                counter += 1
                heapq.heappush(heap, (tentative_g + h, counter, nxt))

    return None


# ── Packing search (BFS) ───────────────────────────────────────────


def direct_path(start: Position, target: Position, step: int) -> list[Position]:
    """Step both axes toward *target* at once, clamping the last step.

    Ignores obstacles entirely.
    """
    path = [start]
    px, py = start
    while (px, py) != (target.x, target.y):
        if px < target.x:
            px = min(px + step, target.x)
        elif px > target.x:
            px = max(px - step, target.x)
        if py < target.y:
            py = min(py + step, target.y)
        elif py > target.y:
            py = max(py - step, target.y)
        path.append(Position(px, py))
    return path


def find_packing_path(
    target: Position,
    width: int,
    height: int,
    obstacles: list[Obstacle],
    config: "WarehouseConfig",
    *,
    allow_unsafe_fallback: bool = True,
) -> PackingPath:
    """BFS approach route from the dock to *target*.

    The box may be fully inside the arena, or overhang the dock edge
    while it is carried in.  *obstacles* are the boxes committed before
    this one.  If the arena length is not a multiple of ``config.step``,
    the first move is the short hop from the dock onto the step grid.
    When no route exists the result is an ``UNSAFE_FALLBACK``
    direct path (or ``BLOCKED`` with only the dock when the fallback is
    disabled).
    """
    W = config.storage_width
    L = config.storage_length
    step = config.step
    start = config.dock

    max_x = W - width
    max_y = L       # entry lane: overhanging the dock edge is allowed

    queue: deque[Position] = deque()
    parents: dict[Position, Position] = {}
    visited: set[Position] = {start}

    # Placements sit on multiples of step; snap off-grid docks onto it.
    entry = Position(start.x, L - L % step)
    if entry == start:
        queue.append(start)
    elif (entry.x <= max_x
          and not collides(obstacles, entry.x, entry.y, width, height)):
        visited.add(entry)
        parents[entry] = start
        queue.append(entry)

    while queue:
        cur = queue.popleft()
        if cur == target:
            return PackingPath(PathStatus.FOUND, _reconstruct(parents, cur))

        for dx, dy in BFS_DIRECTIONS:
            nxt = Position(cur.x + dx * step, cur.y + dy * step)
            if nxt in visited:
                continue
            if not (0 <= nxt.x <= max_x and 0 <= nxt.y <= max_y):
                continue
            if collides(obstacles, nxt.x, nxt.y, width, height):
                continue
            visited.add(nxt)
            parents[nxt] = cur
            queue.append(nxt)

    if not allow_unsafe_fallback:
        log.warning("Packing path to (%d, %d) blocked", target.x, target.y)
        return PackingPath(PathStatus.BLOCKED, [start])

    log.warning("Packing path to (%d, %d) blocked, using direct path "
                "without collision checks", target.x, target.y)
    return PackingPath(PathStatus.UNSAFE_FALLBACK,
                       direct_path(start, target, step))

"""Packing result validation — check a PackingResult against its config."""

from __future__ import annotations

from shapely.strtree import STRtree
from shapely.geometry import box as shapely_box

from warehouse.pipeline.boxes.models import Box, Position
from warehouse.pipeline.config import WarehouseConfig
from warehouse.pipeline.router.models import PathStatus

from .models import PackingResult


def _exits_arena(box: Box, pos: Position, config: WarehouseConfig) -> bool:
    return (
        pos.x <= 0
        or pos.x + box.width >= config.storage_width
        or pos.y <= 0
        or pos.y + box.height >= config.storage_length
    )


def _is_unit_move(a: Position, b: Position, step: int) -> bool:
    return abs(a.x - b.x) + abs(a.y - b.y) == step and (a.x == b.x or a.y == b.y)


def validate_packing(result: PackingResult, config: WarehouseConfig) -> list[str]:
    """Validate a PackingResult. Returns error messages (empty = valid)."""
    errors: list[str] = []
    c = config.clearance
    arena = shapely_box(0, 0, config.storage_width, config.storage_length)
    packed = [b for b in result.boxes if b.is_packed]

    # ── Ids unique, retrieval order is a permutation ──
    ids = [b.id for b in result.boxes]
    if len(set(ids)) != len(ids):
        errors.append("Duplicate box ids")
    if sorted(result.retrieval_order) != sorted(ids):
        errors.append("Retrieval order is not a permutation of the box ids")

    # ── Placements inside the arena ──
    for b in packed:
        if not arena.covers(shapely_box(b.x, b.y, b.x + b.width, b.y + b.height)):
            errors.append(f"Box {b.id} at ({b.x}, {b.y}) lies outside the arena")

    # ── Clearance-inflated rectangles pairwise disjoint ──
    inflated = [
        shapely_box(b.x - c, b.y - c, b.x + b.width + c, b.y + b.height + c)
        for b in packed
    ]
    tree = STRtree(inflated)
    for i, geom in enumerate(inflated):
        for j in tree.query(geom):
            j = int(j)
            if j <= i:
                continue
            if geom.intersection(inflated[j]).area > 0:
                errors.append(
                    f"Boxes {packed[i].id} and {packed[j].id} violate the "
                    f"{c}-unit clearance"
                )

    # ── Paths ──
    by_id = {b.id: b for b in result.boxes}
    for bid in list(result.packing_paths) + list(result.retrieval_paths):
        b = by_id.get(bid)
        if b is None or not b.is_packed:
            errors.append(f"Path recorded for unpacked box {bid}")

    for bid, pp in result.packing_paths.items():
        b = by_id.get(bid)
        if b is None or not pp.waypoints:
            continue
        if pp.waypoints[0] != config.dock:
            errors.append(f"Packing path for box {bid} does not start at the dock")
        if pp.status is not PathStatus.BLOCKED and pp.waypoints[-1] != b.position:
            errors.append(f"Packing path for box {bid} does not end at its position")

    for bid, path in result.retrieval_paths.items():
        b = by_id.get(bid)
        if b is None or not path:
            continue
        if path[0] != b.position:
            errors.append(f"Retrieval path for box {bid} does not start at its position")
        if not _exits_arena(b, path[-1], config):
            errors.append(f"Retrieval path for box {bid} does not reach an edge")
        for a, nxt in zip(path, path[1:]):
            if not _is_unit_move(a, nxt, config.step):
                errors.append(f"Retrieval path for box {bid} jumps {a} -> {nxt}")
                break

    return errors

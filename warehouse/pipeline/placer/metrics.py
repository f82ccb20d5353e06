"""Density metric and summary statistics."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from warehouse.pipeline.boxes.models import Box

from .models import PackingResult, PackingStats

if TYPE_CHECKING:
    from warehouse.pipeline.config import WarehouseConfig


def packed_area(boxes: Iterable[Box]) -> int:
    return sum(b.area for b in boxes if b.is_packed)


def density(boxes: Iterable[Box], config: "WarehouseConfig") -> float:
    """Occupied share of the arena, in percent (0 when nothing is packed)."""
    total = config.storage_area
    if total == 0:
        return 0.0
    return 100.0 * packed_area(boxes) / total


def compute_stats(
    result: PackingResult,
    config: "WarehouseConfig",
    solved_in: float,
) -> PackingStats:
    return PackingStats(
        boxes_packed=result.boxes_packed,
        total_boxes=result.total_boxes,
        space_efficiency=round(density(result.boxes, config)),
        solved_in=solved_in,
        unsafe_paths=len(result.unsafe_path_ids),
    )

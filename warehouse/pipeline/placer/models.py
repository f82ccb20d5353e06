"""Placer output dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple

from warehouse.pipeline.boxes.models import Box, Position
from warehouse.pipeline.router.models import PackingPath, PathStatus


# ── Output dataclasses ─────────────────────────────────────────────


@dataclass
class PackingResult:
    """Complete packing run, ready for animation or motion commands."""

    boxes: list[Box]
    packing_paths: dict[int, PackingPath] = field(default_factory=dict)
    retrieval_paths: dict[int, list[Position]] = field(default_factory=dict)
    retrieval_order: list[int] = field(default_factory=list)
    stop_reason: str | None = None      # "time_budget" | "candidate_budget" | "cancelled"

    @property
    def packed_ids(self) -> list[int]:
        return [b.id for b in self.boxes if b.is_packed]

    @property
    def unpacked_ids(self) -> list[int]:
        return [b.id for b in self.boxes if not b.is_packed]

    @property
    def boxes_packed(self) -> int:
        return sum(1 for b in self.boxes if b.is_packed)

    @property
    def total_boxes(self) -> int:
        return len(self.boxes)

    @property
    def unsafe_path_ids(self) -> list[int]:
        return [
            bid for bid, p in self.packing_paths.items()
            if p.status is PathStatus.UNSAFE_FALLBACK
        ]

    @property
    def ok(self) -> bool:
        return self.stop_reason is None and self.boxes_packed == self.total_boxes


@dataclass
class PackingStats:
    """Summary numbers shown next to the layout."""

    boxes_packed: int
    total_boxes: int
    space_efficiency: int       # density, rounded percent
    solved_in: float            # seconds
    unsafe_paths: int = 0


class Orientation(NamedTuple):
    """Footprint tried by the placement scan."""

    width: int
    height: int
    rotated: bool

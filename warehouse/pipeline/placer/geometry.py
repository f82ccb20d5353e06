"""Low-level geometry helpers for the placer."""

from __future__ import annotations

from warehouse.pipeline.boxes.models import Box

from .models import Orientation


def orientations(box: Box) -> list[Orientation]:
    """Footprints to scan, original first.  Squares get a single entry."""
    out = [Orientation(box.width, box.height, False)]
    if box.width != box.height:
        out.append(Orientation(box.height, box.width, True))
    return out


def aabb_gap(
    cx1: float, cy1: float, hw1: float, hh1: float,
    cx2: float, cy2: float, hw2: float, hh2: float,
) -> float:
    """Chebyshev gap between two AABBs given as centre + half-dims.

    Negative values mean overlap; 0 means the edges touch.
    """
    gap_x = abs(cx1 - cx2) - hw1 - hw2
    gap_y = abs(cy1 - cy2) - hh1 - hh2
    return max(gap_x, gap_y)


def inflated_overlap(
    x: int, y: int, width: int, height: int,
    other: Box,
    clearance: int,
) -> bool:
    """True if a candidate footprint and a packed box come closer than
    ``2 * clearance`` (their clearance-inflated rectangles overlap).
    """
    gap = aabb_gap(
        x + width / 2, y + height / 2,
        width / 2 + clearance, height / 2 + clearance,
        other.x + other.width / 2, other.y + other.height / 2,
        other.width / 2 + clearance, other.height / 2 + clearance,
    )
    return gap < 0

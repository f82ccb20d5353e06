"""Placer — commits boxes into the arena, keeping every box retrievable.

Submodules:
  models        Output dataclasses (PackingResult, PackingStats, Orientation).
  geometry      Orientation list and clearance-aware AABB overlap.
  feasibility   Retrieval-reachability oracle for a hypothetical commit.
  engine        Placement search and the packing orchestrator.
  metrics       Density and summary statistics.
  validation    After-the-fact checks of a PackingResult.
  serialization JSON conversion (result_to_dict, parse_result).
"""

from .models import PackingResult, PackingStats, Orientation
from .engine import pack_boxes, generate_and_pack, find_placement, shuffled_order
from .feasibility import would_block_retrieval, hypothetical_commit
from .metrics import density, compute_stats
from .validation import validate_packing
from .serialization import (
    result_to_dict, parse_result, box_to_dict, parse_box, stats_to_dict,
)
from .geometry import aabb_gap, inflated_overlap, orientations

__all__ = [
    # Models
    "PackingResult", "PackingStats", "Orientation",
    # Engine
    "pack_boxes", "generate_and_pack", "find_placement", "shuffled_order",
    # Feasibility
    "would_block_retrieval", "hypothetical_commit",
    # Metrics / validation
    "density", "compute_stats", "validate_packing",
    # Serialization
    "result_to_dict", "parse_result", "box_to_dict", "parse_box", "stats_to_dict",
    # Geometry (used by tests)
    "aabb_gap", "inflated_overlap", "orientations",
]

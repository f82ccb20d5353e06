"""Feasibility oracle — would a placement strand any committed box?

A candidate is accepted only if, with the candidate added, every committed
box (candidate included) still has a retrieval path against all the others.
Since the obstacle set only grows, re-checking everyone at each commit
keeps every earlier acceptance valid for the obstacles known at its own
step, and the last commit validates the whole final layout.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Mapping, Sequence

from warehouse.pipeline.boxes.models import Box
from warehouse.pipeline.router.grid import inflate
from warehouse.pipeline.router.pathfinder import find_retrieval_path

from .models import Orientation

if TYPE_CHECKING:
    from warehouse.pipeline.config import WarehouseConfig


log = logging.getLogger(__name__)


def hypothetical_commit(box: Box, x: int, y: int, orient: Orientation) -> Box:
    """A packed copy of *box* at (x, y); the original is left untouched."""
    return replace(
        box,
        x=x, y=y,
        width=orient.width, height=orient.height,
        is_rotated=orient.rotated,
        is_packed=True,
    )


def would_block_retrieval(
    candidate: Box,
    committed: Mapping[int, Box],
    retrieval_order: Sequence[int],
    config: "WarehouseConfig",
) -> bool:
    """True if committing *candidate* leaves some box without an exit.

    *committed* maps id -> packed box for everything committed so far and
    is not modified.  Boxes are checked in retrieval order.
    """
    snapshot = dict(committed)
    snapshot[candidate.id] = candidate
    inflated = {bid: inflate(b, config.clearance) for bid, b in snapshot.items()}

    for box_id in retrieval_order:
        box = snapshot.get(box_id)
        if box is None:
            continue
        obstacles = [ob for bid, ob in inflated.items() if bid != box_id]
        if find_retrieval_path(box, obstacles, config) is None:
            log.debug("Candidate %d at (%d, %d) strands box %d",
                      candidate.id, candidate.x, candidate.y, box_id)
            return True
    return False

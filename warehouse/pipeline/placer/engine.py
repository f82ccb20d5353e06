"""Main placement engine — greedy raster-scan placer with retrieval checks.

Algorithm overview:
  1. Copy the input boxes; shuffle all ids into a retrieval order.
  2. For each box in ascending id order, scan both orientations in
     row-major order at ``config.step`` and take the first position that
     keeps the clearance margin and passes the feasibility oracle.
  3. On commit, route the packing path from the dock (BFS) against the
     boxes committed before it.
  4. After the loop, route every packed box's retrieval path (A*) against
     the final layout.
"""

from __future__ import annotations

import logging
import math
import random
import threading
import time
from typing import Callable

from warehouse.pipeline.boxes.generator import RandomSource, generate_boxes
from warehouse.pipeline.boxes.models import Box
from warehouse.pipeline.config import PackerConfig, WarehouseConfig
from warehouse.pipeline.router.grid import build_obstacles
from warehouse.pipeline.router.pathfinder import (
    find_packing_path, find_retrieval_path,
)

from .feasibility import hypothetical_commit, would_block_retrieval
from .geometry import inflated_overlap, orientations
from .metrics import compute_stats
from .models import PackingResult, PackingStats


log = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, int], None]


# ── Run limits ─────────────────────────────────────────────────────


class _RunLimits:
    """Time / candidate budget and cancellation for one packing run."""

    def __init__(
        self,
        packer_config: PackerConfig,
        cancel: threading.Event | None,
    ) -> None:
        self.cfg = packer_config
        self.cancel = cancel
        self.start = time.monotonic()
        self.candidates = 0

    def exhausted(self) -> str | None:
        if self.cancel is not None and self.cancel.is_set():
            return "cancelled"
        if (self.cfg.time_budget_s is not None
                and time.monotonic() - self.start >= self.cfg.time_budget_s):
            return "time_budget"
        if (self.cfg.max_candidates is not None
                and self.candidates >= self.cfg.max_candidates):
            return "candidate_budget"
        return None


# ── Retrieval order ────────────────────────────────────────────────


def shuffled_order(ids: list[int], rng: RandomSource) -> list[int]:
    """Fisher–Yates shuffle of *ids* (returns a new list)."""
    order = list(ids)
    for i in range(len(order) - 1, 0, -1):
        j = int(math.floor(rng.random() * (i + 1)))
        order[i], order[j] = order[j], order[i]
    return order


# ── Placement search ───────────────────────────────────────────────


def find_placement(
    box: Box,
    committed: dict[int, Box],
    retrieval_order: list[int],
    config: WarehouseConfig,
    limits: _RunLimits | None = None,
) -> tuple[Box | None, str | None]:
    """First legal, retrievable placement for *box*.

    Returns ``(placed_copy, None)`` on success, ``(None, None)`` when the
    full scan finds nothing, or ``(None, reason)`` when a run limit stops
    the scan.  *box* and *committed* are not modified.
    """
    step = config.step
    clearance = config.clearance
    others = list(committed.values())

    for orient in orientations(box):
        max_x = config.storage_width - orient.width
        max_y = config.storage_length - orient.height
        if max_x < 0 or max_y < 0:
            continue

        for y in range(0, max_y + 1, step):
            for x in range(0, max_x + 1, step):
                if any(inflated_overlap(x, y, orient.width, orient.height,
                                        o, clearance) for o in others):
                    continue

                if limits is not None:
                    reason = limits.exhausted()
                    if reason is not None:
                        return None, reason
                    limits.candidates += 1

                candidate = hypothetical_commit(box, x, y, orient)
                if not would_block_retrieval(
                        candidate, committed, retrieval_order, config):
                    return candidate, None

    return None, None


def _commit(box: Box, placed: Box) -> None:
    box.x = placed.x
    box.y = placed.y
    box.width = placed.width
    box.height = placed.height
    box.is_rotated = placed.is_rotated
    box.is_packed = True


# ── Main entry point ───────────────────────────────────────────────


def pack_boxes(
    boxes: list[Box],
    config: WarehouseConfig,
    *,
    rng: RandomSource | None = None,
    packer_config: PackerConfig | None = None,
    cancel: threading.Event | None = None,
    on_progress: ProgressCallback | None = None,
) -> PackingResult:
    """Pack as many boxes as possible, keeping every one retrievable.

    Parameters
    ----------
    boxes : list[Box]
        Input boxes; copied, never modified.
    config : WarehouseConfig
        Arena, clearance and step.
    rng : RandomSource | None
        Source for the retrieval-order shuffle.
    packer_config : PackerConfig | None
        Run limits.  Uses defaults (unlimited) when *None*.
    cancel : threading.Event | None
        Set from another thread to stop the placement loop.
    on_progress : callable | None
        Called as ``on_progress(processed, total, packed)`` after each box.

    Returns
    -------
    PackingResult
        Always returned; unplaceable boxes stay unpacked.
    """
    if rng is None:
        rng = random.Random()
    if packer_config is None:
        packer_config = PackerConfig()

    result_boxes = [b.copy() for b in boxes]
    index_of = {b.id: i for i, b in enumerate(result_boxes)}
    retrieval_order = shuffled_order([b.id for b in result_boxes], rng)
    result = PackingResult(boxes=result_boxes, retrieval_order=retrieval_order)

    log.info("Packer: starting with %d boxes, arena %dx%d, clearance=%d, step=%d",
             len(result_boxes), config.storage_width, config.storage_length,
             config.clearance, config.step)

    limits = _RunLimits(packer_config, cancel)
    committed: dict[int, Box] = {}
    ordered = sorted(result_boxes, key=lambda b: b.id)
    total = len(ordered)

    # ── 1. Place boxes in id order ─────────────────────────────────
    for processed, box in enumerate(ordered, start=1):
        placed, reason = find_placement(
            box, committed, retrieval_order, config, limits)
        if reason is not None:
            result.stop_reason = reason
            log.warning("Packer: stopped (%s) at box %d; %d boxes not processed",
                        reason, box.id, total - processed + 1)
            break

        if placed is None:
            log.debug("Box %d (%dx%d): no feasible position",
                      box.id, box.width, box.height)
        else:
            obstacles = build_obstacles(committed.values(), config.clearance)
            _commit(box, placed)
            result.packing_paths[box.id] = find_packing_path(
                box.position, box.width, box.height, obstacles, config,
                allow_unsafe_fallback=packer_config.allow_unsafe_fallback,
            )
            committed[box.id] = box
            log.info("Packed box %d at (%d, %d) %dx%d%s",
                     box.id, box.x, box.y, box.width, box.height,
                     " rotated" if box.is_rotated else "")

        if on_progress is not None:
            on_progress(processed, total, len(committed))

    # ── 2. Retrieval paths against the final layout ────────────────
    for box_id in retrieval_order:
        box = result_boxes[index_of[box_id]]
        if not box.is_packed:
            continue
        obstacles = build_obstacles(
            committed.values(), config.clearance, exclude_id=box_id)
        path = find_retrieval_path(box, obstacles, config)
        if path is None:
            log.warning("Box %d has no retrieval path in the final layout", box_id)
            continue
        result.retrieval_paths[box_id] = path

    log.info("Packer: %d/%d boxes packed, %d unsafe packing paths",
             result.boxes_packed, result.total_boxes, len(result.unsafe_path_ids))
    return result


def generate_and_pack(
    config: WarehouseConfig,
    *,
    rng: RandomSource | None = None,
    seed: int | None = None,
    packer_config: PackerConfig | None = None,
    cancel: threading.Event | None = None,
    on_progress: ProgressCallback | None = None,
) -> tuple[PackingResult, PackingStats]:
    """Generate boxes from *config*, pack them, and time the whole run.

    One random source drives both generation and the shuffle, so a fixed
    *seed* reproduces the run exactly.
    """
    if rng is None:
        rng = random.Random(seed)

    start = time.monotonic()
    boxes = generate_boxes(config, rng)
    result = pack_boxes(
        boxes, config,
        rng=rng,
        packer_config=packer_config,
        cancel=cancel,
        on_progress=on_progress,
    )
    stats = compute_stats(result, config, time.monotonic() - start)
    return result, stats

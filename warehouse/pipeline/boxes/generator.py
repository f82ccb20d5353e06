"""Random box generation."""

from __future__ import annotations

import logging
import math
import random
from typing import TYPE_CHECKING, Protocol

from .models import Box

if TYPE_CHECKING:
    from warehouse.pipeline.config import WarehouseConfig


log = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything with a ``random() -> float in [0, 1)`` method.

    ``random.Random`` satisfies it; tests seed one for determinism.
    """

    def random(self) -> float: ...


def draw_int(rng: RandomSource, low: int, high: int) -> int:
    """Uniform integer in ``[low, high)``; returns ``low`` when they are equal."""
    return int(math.floor(rng.random() * (high - low))) + low


def generate_boxes(
    config: "WarehouseConfig",
    rng: RandomSource | None = None,
) -> list[Box]:
    """Generate ``config.num_rectangles`` unpacked boxes.

    Width and height are drawn independently from
    ``[config.min_side, config.max_side)``.  Ids run ``0..n-1``.
    """
    if rng is None:
        rng = random.Random()

    boxes: list[Box] = []
    for i in range(config.num_rectangles):
        width = draw_int(rng, config.min_side, config.max_side)
        height = draw_int(rng, config.min_side, config.max_side)
        boxes.append(Box(id=i, width=width, height=height))

    log.debug("Generated %d boxes (sides %d..%d)",
              len(boxes), config.min_side, config.max_side)
    return boxes

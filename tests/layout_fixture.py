"""Enclosed-pocket test fixture: hand-placed boxes for oracle testing.

Arena: 150 × 150, step 10, clearance 0.

    y=0    +-------------------------+
           |          top            |   id 0: 150×50 at (0, 0)
    y=50   +--------+--------+-------+
           |  left  | pocket | free  |   id 1:  50×50 at (0, 50)
           |        |        |       |   id 3:  50×50 at (50, 50)
    y=100  +--------+--------+-------+
           |         bottom          |   id 2: 150×50 at (0, 100)
    y=150  +-------------------------+

The pocket box (id 3) escapes only through the free slot on the right,
around the outside of the arena.  Filling that slot (id 4 at (100, 50))
traps it.
"""

from __future__ import annotations

from warehouse.pipeline.boxes.models import Box
from warehouse.pipeline.config import WarehouseConfig


POCKET_CONFIG = WarehouseConfig(
    storage_width=150,
    storage_length=150,
    num_rectangles=5,
    min_side=50,
    max_side=50,
    clearance=0,
    step=10,
)

POCKET_ID = 3
PLUG_ID = 4


def _packed(box_id: int, x: int, y: int, w: int, h: int) -> Box:
    return Box(id=box_id, width=w, height=h, x=x, y=y, is_packed=True)


def make_walls() -> dict[int, Box]:
    """Top, left and bottom walls, keyed by id."""
    return {
        0: _packed(0, 0, 0, 150, 50),
        1: _packed(1, 0, 50, 50, 50),
        2: _packed(2, 0, 100, 150, 50),
    }


def make_pocket_box() -> Box:
    return _packed(POCKET_ID, 50, 50, 50, 50)


def make_plug_box() -> Box:
    return _packed(PLUG_ID, 100, 50, 50, 50)


def make_pocket_layout() -> dict[int, Box]:
    """Walls plus the pocket box, all committed."""
    layout = make_walls()
    layout[POCKET_ID] = make_pocket_box()
    return layout

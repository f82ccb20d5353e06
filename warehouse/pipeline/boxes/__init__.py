"""Boxes — the items to pack.

Submodules:
  models     Box and Position.
  generator  Random box generation with an injectable random source.
"""

from .models import Box, Position
from .generator import RandomSource, generate_boxes

__all__ = ["Box", "Position", "RandomSource", "generate_boxes"]

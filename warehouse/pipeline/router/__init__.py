"""Router — moves boxes through the arena on the step grid.

Submodules:
  models      PathStatus / PackingPath and the search direction tables.
  grid        Obstacle model (clearance-inflated rectangles).
  pathfinder  Edge-directed A* (retrieval) and BFS (packing) searches.
"""

from .models import PathStatus, PackingPath
from .grid import Obstacle, inflate, build_obstacles, collides
from .pathfinder import (
    find_retrieval_path, find_packing_path,
    nearest_edge, edge_distance, direct_path,
)

__all__ = [
    # Models
    "PathStatus", "PackingPath",
    # Obstacles
    "Obstacle", "inflate", "build_obstacles", "collides",
    # Pathfinding
    "find_retrieval_path", "find_packing_path",
    "nearest_edge", "edge_distance", "direct_path",
]

"""Pipeline stages — boxes, placer, router.

The stages in order:

  boxes   — generate the candidate boxes
  placer  — commit boxes one by one, re-checking every committed box's
            escape route before each commit
  router  — obstacle model plus the packing (BFS) and retrieval (A*)
            pathfinders used by the placer

``config`` holds the shared WarehouseConfig / PackerConfig.
"""

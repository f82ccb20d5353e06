"""Shared configuration for the packing pipeline.

``WarehouseConfig`` describes the storage arena and the boxes to generate.
Every stage (generator, placer, router) reads its dimensions, clearance
and grid quantum from the same instance so they stay in sync.

``PackerConfig`` holds the placer-only run limits.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields

from .boxes.models import Position


class ConfigError(ValueError):
    """Raised when a configuration (or serialized input) is invalid."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid '{field}': {reason}")


@dataclass(frozen=True)
class WarehouseConfig:
    """Arena and box-generation parameters.

    All distances are in grid units (mm on the storage machine).
    """

    storage_width: int = 400
    """Arena extent along x."""

    storage_length: int = 400
    """Arena extent along y (y grows downward, towards the dock)."""

    num_rectangles: int = 50
    """How many boxes the generator produces."""

    min_side: int = 50
    """Lower bound (inclusive) for a generated side."""

    max_side: int = 50
    """Upper bound (exclusive) for a generated side.  Equal to
    ``min_side`` means every side is exactly ``min_side``."""

    clearance: int = 20
    """Empty margin kept around every packed box, on all four sides."""

    step: int = 10
    """Grid quantum for the placement scan and both pathfinders."""

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f.name, f"must be an integer, got {value!r}")
        if self.storage_width <= 0:
            raise ConfigError("storage_width", "must be positive")
        if self.storage_length <= 0:
            raise ConfigError("storage_length", "must be positive")
        if self.num_rectangles < 0:
            raise ConfigError("num_rectangles", "must be non-negative")
        if self.min_side <= 0:
            raise ConfigError("min_side", "must be positive")
        if self.max_side < self.min_side:
            raise ConfigError(
                "max_side",
                f"must be >= min_side ({self.max_side} < {self.min_side})",
            )
        if self.clearance < 0:
            raise ConfigError("clearance", "must be non-negative")
        if self.step <= 0:
            raise ConfigError("step", "must be positive")

    # ── Derived helpers ────────────────────────────────────────────

    @property
    def storage_area(self) -> int:
        return self.storage_width * self.storage_length

    @property
    def dock(self) -> Position:
        """Entry point of every packing path: the bottom-left corner."""
        return Position(0, self.storage_length)

    # ── Dict conversion ────────────────────────────────────────────

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "WarehouseConfig":
        """Build a config from a snake_case dict.  Missing keys use defaults."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(unknown[0], "unknown configuration key")
        return cls(**data)


@dataclass
class PackerConfig:
    """Run limits for the placement search.

    The search is polynomial in grid cells and box count; these knobs let
    the caller bound it.  Hitting a limit stops the placement loop early and
    leaves the remaining boxes unpacked.
    """

    time_budget_s: float | None = None      # wall-clock cap for the placement loop
    max_candidates: int | None = None       # cap on feasibility-oracle evaluations
    allow_unsafe_fallback: bool = True      # keep the uncollision-checked direct path


# Module-level default, importable everywhere.
DEFAULT_CONFIG = WarehouseConfig()

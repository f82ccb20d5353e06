"""Packing serialization — JSON conversion."""

from __future__ import annotations

from dataclasses import asdict

from warehouse.pipeline.boxes.models import Box, Position
from warehouse.pipeline.config import ConfigError
from warehouse.pipeline.router.models import PackingPath, PathStatus

from .models import PackingResult, PackingStats


def box_to_dict(b: Box) -> dict:
    return {
        "id": b.id,
        "width": b.width,
        "height": b.height,
        "x": b.x,
        "y": b.y,
        "is_rotated": b.is_rotated,
        "is_packed": b.is_packed,
    }


def parse_box(data: dict) -> Box:
    try:
        return Box(
            id=int(data["id"]),
            width=int(data["width"]),
            height=int(data["height"]),
            x=int(data.get("x", 0)),
            y=int(data.get("y", 0)),
            is_rotated=bool(data.get("is_rotated", False)),
            is_packed=bool(data.get("is_packed", False)),
        )
    except KeyError as e:
        raise ConfigError("box", f"missing key {e.args[0]!r}") from e


def _path_to_list(path: list[Position]) -> list[list[int]]:
    return [[p.x, p.y] for p in path]


def _parse_path(data: list) -> list[Position]:
    return [Position(int(p[0]), int(p[1])) for p in data]


def result_to_dict(result: PackingResult) -> dict:
    """Serialize a PackingResult to a JSON-safe dict."""
    return {
        "boxes": [box_to_dict(b) for b in result.boxes],
        "packing_paths": {
            str(bid): {
                "status": pp.status.value,
                "path": _path_to_list(pp.waypoints),
            }
            for bid, pp in result.packing_paths.items()
        },
        "retrieval_paths": {
            str(bid): _path_to_list(path)
            for bid, path in result.retrieval_paths.items()
        },
        "retrieval_order": list(result.retrieval_order),
        "stop_reason": result.stop_reason,
    }


def parse_result(data: dict) -> PackingResult:
    """Parse a result dict back into a PackingResult."""
    try:
        packing_paths = {
            int(bid): PackingPath(
                status=PathStatus(pp["status"]),
                waypoints=_parse_path(pp["path"]),
            )
            for bid, pp in data.get("packing_paths", {}).items()
        }
    except ValueError as e:
        raise ConfigError("packing_paths", str(e)) from e

    return PackingResult(
        boxes=[parse_box(b) for b in data["boxes"]],
        packing_paths=packing_paths,
        retrieval_paths={
            int(bid): _parse_path(path)
            for bid, path in data.get("retrieval_paths", {}).items()
        },
        retrieval_order=[int(i) for i in data.get("retrieval_order", [])],
        stop_reason=data.get("stop_reason"),
    )


def stats_to_dict(stats: PackingStats) -> dict:
    return asdict(stats)

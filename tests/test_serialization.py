"""Tests for PackingResult / PackingStats JSON conversion."""

from __future__ import annotations

import json
import unittest

from warehouse.pipeline.boxes.models import Box, Position
from warehouse.pipeline.config import ConfigError, WarehouseConfig
from warehouse.pipeline.placer import (
    PackingStats, generate_and_pack,
    parse_box, parse_result, result_to_dict, stats_to_dict,
)
from warehouse.pipeline.router import PathStatus


class TestResultSerialization(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cfg = WarehouseConfig(storage_width=150, storage_length=150,
                              num_rectangles=4, min_side=20, max_side=40,
                              clearance=5)
        cls.result, cls.stats = generate_and_pack(cfg, seed=11)

    def test_json_safe(self):
        text = json.dumps(result_to_dict(self.result))
        data = json.loads(text)
        self.assertEqual(len(data["boxes"]), 4)
        for bid in data["packing_paths"]:
            self.assertIsInstance(bid, str)

    def test_packing_path_shape(self):
        data = result_to_dict(self.result)
        for bid, pp in data["packing_paths"].items():
            self.assertIn(pp["status"], {s.value for s in PathStatus})
            self.assertEqual(pp["path"][0], [0, 150])

    def test_survives_json_text(self):
        data = json.loads(json.dumps(result_to_dict(self.result)))
        restored = parse_result(data)
        self.assertEqual(restored.boxes, self.result.boxes)
        self.assertEqual(restored.retrieval_order, self.result.retrieval_order)
        self.assertEqual(restored.retrieval_paths, self.result.retrieval_paths)
        for bid, pp in self.result.packing_paths.items():
            self.assertIs(restored.packing_paths[bid].status, pp.status)
            self.assertEqual(restored.packing_paths[bid].waypoints, pp.waypoints)
        for path in restored.retrieval_paths.values():
            self.assertIsInstance(path[0], Position)

    def test_stats_dict(self):
        d = stats_to_dict(PackingStats(3, 5, 42, 0.5, 1))
        self.assertEqual(d, {
            "boxes_packed": 3, "total_boxes": 5, "space_efficiency": 42,
            "solved_in": 0.5, "unsafe_paths": 1,
        })


class TestParseErrors(unittest.TestCase):

    def test_box_missing_key(self):
        with self.assertRaises(ConfigError):
            parse_box({"id": 1, "width": 10})

    def test_box_defaults(self):
        b = parse_box({"id": 2, "width": 10, "height": 20})
        self.assertEqual(b, Box(id=2, width=10, height=20))

    def test_unknown_path_status(self):
        data = {
            "boxes": [{"id": 0, "width": 10, "height": 10, "is_packed": True}],
            "packing_paths": {"0": {"status": "teleported", "path": [[0, 0]]}},
        }
        with self.assertRaises(ConfigError):
            parse_result(data)


if __name__ == "__main__":
    unittest.main()

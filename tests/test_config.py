"""Tests for WarehouseConfig / PackerConfig validation and dict conversion."""

from __future__ import annotations

import unittest

from warehouse.pipeline.boxes.models import Position
from warehouse.pipeline.config import (
    DEFAULT_CONFIG, ConfigError, PackerConfig, WarehouseConfig,
)


class TestWarehouseConfig(unittest.TestCase):

    def test_defaults(self):
        """Defaults match the stock 400×400 warehouse."""
        self.assertEqual(DEFAULT_CONFIG.storage_width, 400)
        self.assertEqual(DEFAULT_CONFIG.storage_length, 400)
        self.assertEqual(DEFAULT_CONFIG.num_rectangles, 50)
        self.assertEqual(DEFAULT_CONFIG.min_side, 50)
        self.assertEqual(DEFAULT_CONFIG.max_side, 50)
        self.assertEqual(DEFAULT_CONFIG.clearance, 20)
        self.assertEqual(DEFAULT_CONFIG.step, 10)

    def test_dock_is_bottom_left(self):
        cfg = WarehouseConfig(storage_width=120, storage_length=80)
        self.assertEqual(cfg.dock, Position(0, 80))
        self.assertEqual(cfg.storage_area, 120 * 80)

    def test_equal_sides_allowed(self):
        cfg = WarehouseConfig(min_side=30, max_side=30)
        self.assertEqual(cfg.min_side, cfg.max_side)

    def test_max_below_min_rejected(self):
        with self.assertRaises(ConfigError) as ctx:
            WarehouseConfig(min_side=60, max_side=40)
        self.assertEqual(ctx.exception.field, "max_side")

    def test_non_positive_dimensions_rejected(self):
        for kwargs in (
            {"storage_width": 0},
            {"storage_length": -10},
            {"min_side": 0},
            {"step": 0},
        ):
            with self.subTest(**kwargs):
                with self.assertRaises(ConfigError):
                    WarehouseConfig(**kwargs)

    def test_negative_clearance_rejected(self):
        with self.assertRaises(ConfigError):
            WarehouseConfig(clearance=-1)

    def test_zero_boxes_allowed(self):
        self.assertEqual(WarehouseConfig(num_rectangles=0).num_rectangles, 0)

    def test_non_integer_rejected(self):
        with self.assertRaises(ConfigError):
            WarehouseConfig(storage_width=12.5)
        with self.assertRaises(ConfigError):
            WarehouseConfig(clearance=True)

    def test_config_error_is_value_error(self):
        with self.assertRaises(ValueError):
            WarehouseConfig(step=-5)

    def test_frozen(self):
        with self.assertRaises(Exception):
            DEFAULT_CONFIG.step = 5


class TestConfigDict(unittest.TestCase):

    def test_from_dict_partial_uses_defaults(self):
        cfg = WarehouseConfig.from_dict({"storage_width": 200, "num_rectangles": 4})
        self.assertEqual(cfg.storage_width, 200)
        self.assertEqual(cfg.num_rectangles, 4)
        self.assertEqual(cfg.clearance, DEFAULT_CONFIG.clearance)

    def test_from_dict_unknown_key(self):
        with self.assertRaises(ConfigError) as ctx:
            WarehouseConfig.from_dict({"storageWidth": 200})
        self.assertEqual(ctx.exception.field, "storageWidth")

    def test_to_dict_feeds_from_dict(self):
        cfg = WarehouseConfig(storage_width=250, clearance=5)
        self.assertEqual(WarehouseConfig.from_dict(cfg.to_dict()), cfg)


class TestPackerConfig(unittest.TestCase):

    def test_unlimited_by_default(self):
        pc = PackerConfig()
        self.assertIsNone(pc.time_budget_s)
        self.assertIsNone(pc.max_candidates)
        self.assertTrue(pc.allow_unsafe_fallback)


if __name__ == "__main__":
    unittest.main()

"""Tests for the FastAPI packing endpoints."""

from __future__ import annotations

import json
import unittest

from fastapi.testclient import TestClient

from warehouse.web.server import app


SMALL = {
    "storage_width": 150,
    "storage_length": 150,
    "num_rectangles": 3,
    "min_side": 30,
    "max_side": 30,
    "clearance": 5,
    "seed": 4,
}


class TestServer(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def test_defaults(self):
        resp = self.client.get("/api/defaults")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["storage_width"], 400)
        self.assertEqual(data["step"], 10)

    def test_pack(self):
        resp = self.client.post("/api/pack", json=SMALL)
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["stats"]["total_boxes"], 3)
        self.assertEqual(len(data["result"]["boxes"]), 3)
        self.assertEqual(sorted(data["result"]["retrieval_order"]), [0, 1, 2])

    def test_pack_seed_is_reproducible(self):
        a = self.client.post("/api/pack", json=SMALL).json()
        b = self.client.post("/api/pack", json=SMALL).json()
        self.assertEqual(a["result"], b["result"])

    def test_invalid_config_is_400(self):
        resp = self.client.post("/api/pack", json={**SMALL, "min_side": 60,
                                                   "max_side": 40})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("max_side", resp.json()["detail"])

    def test_non_positive_budget_is_422(self):
        resp = self.client.post("/api/pack", json={**SMALL, "time_budget_s": 0})
        self.assertEqual(resp.status_code, 422)

    def test_stream(self):
        resp = self.client.post("/api/pack/stream", json=SMALL)
        self.assertEqual(resp.status_code, 200)
        events = [
            json.loads(line[len("data: "):])
            for line in resp.text.splitlines()
            if line.startswith("data: ")
        ]
        self.assertTrue(events)
        self.assertEqual(events[-1]["type"], "done")
        self.assertTrue(any(e["type"] == "progress" for e in events))

        status = self.client.get("/api/pack/status").json()
        self.assertEqual(status["status"], "done")
        self.assertEqual(self.client.post("/api/pack/cancel").json(),
                         {"status": "idle"})


if __name__ == "__main__":
    unittest.main()

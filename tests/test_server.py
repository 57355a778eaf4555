"""Tests for the HTTP API around the layout engine."""

from __future__ import annotations

import unittest

from fastapi.testclient import TestClient

from territory.web.server import app


class TestLayoutAPI(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def test_health(self):
        resp = self.client.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("spiral", resp.json()["strategies"])

    def test_column_pack_layout(self):
        resp = self.client.post("/api/layout", json={
            "participants": [
                {"id": "A", "weight": 0.7},
                {"id": "B", "weight": 0.3},
            ],
            "capacity": 100,
            "strategy": "column_pack",
            "report": True,
        })
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["tiles"]["A"], {"x": -6, "y": -4, "width": 8, "height": 8})
        self.assertEqual(body["tiles"]["B"], {"x": 2, "y": -4, "width": 5, "height": 5})
        self.assertEqual(body["boundary"]["width"], 13)
        self.assertEqual(body["report"]["used_cells"], 89)

    def test_world_positions(self):
        resp = self.client.post("/api/layout", json={
            "participants": [{"id": "solo", "weight": 1.0}],
            "capacity": 2500,
            "cell_size": 0.5,
        })
        self.assertEqual(resp.status_code, 200)
        world = resp.json()["tiles"]["solo"]["world"]
        self.assertAlmostEqual(world["x"], 0.0)
        self.assertAlmostEqual(world["y"], 0.0)

    def test_fallback_reported(self):
        resp = self.client.post("/api/layout", json={
            "participants": [
                {"id": "A", "weight": 0.7},
                {"id": "B", "weight": 0.3},
            ],
            "capacity": 100,
            "strategy": "spiral",
            "spiral": {"max_radius": 0},
        })
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["strategy"], "column_pack")
        self.assertEqual(body["requested_strategy"], "spiral")
        self.assertIn("B", body["fallback_reason"])

    def test_exhausted_without_fallback(self):
        resp = self.client.post("/api/layout", json={
            "participants": [
                {"id": "A", "weight": 0.7},
                {"id": "B", "weight": 0.3},
            ],
            "capacity": 100,
            "strategy": "spiral",
            "spiral": {"max_radius": 0},
            "fallback": None,
        })
        self.assertEqual(resp.status_code, 409)

    def test_capacity_exceeded(self):
        resp = self.client.post("/api/layout", json={
            "participants": [
                {"id": "p1", "weight": 1 / 3},
                {"id": "p2", "weight": 1 / 3},
                {"id": "p3", "weight": 1 / 3},
            ],
            "capacity": 9,
            "min_tile_size": 3,
        })
        self.assertEqual(resp.status_code, 409)
        self.assertIn("27", resp.json()["detail"])

    def test_negative_weight(self):
        resp = self.client.post("/api/layout", json={
            "participants": [{"id": "A", "weight": -1}],
            "capacity": 100,
        })
        self.assertEqual(resp.status_code, 422)

    def test_unknown_strategy(self):
        resp = self.client.post("/api/layout", json={
            "participants": [{"id": "A", "weight": 1}],
            "strategy": "hexagonal",
        })
        self.assertEqual(resp.status_code, 422)


if __name__ == "__main__":
    unittest.main()

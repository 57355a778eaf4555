"""Randomized invariant checks for every placement strategy.

Each case draws a seeded set of raw investment amounts (1–200
participants, a few with zero weight) on the default 50×50 grid and
checks the finished layout independently of the engine's own verifier:

  - No two tiles intersect (Shapely intersection area)
  - Every positive-weight participant gets a tile of at least the minimum side
  - Tile area follows the share wherever the floor does not apply
  - The boundary is the exact bounding box and is centred on the origin
  - Identical inputs give identical output
"""

from __future__ import annotations

import math
import random
import unittest

from shapely.geometry import box as shapely_box

from territory.engine import (
    Strategy, LayoutConfig, compute_layout, size_participants,
)
from tests.territory_fixture import make_random_participants


CAPACITY = 2500
MIN_TILE = 3

MAX_COUNT = {
    Strategy.GRID: 200,
    Strategy.COLUMN_PACK: 200,
    Strategy.SPIRAL: 200,
}
# Spiral cost grows with n², so it runs fewer random cases.
CASES_PER_STRATEGY = {
    Strategy.GRID: 12,
    Strategy.COLUMN_PACK: 12,
    Strategy.SPIRAL: 6,
}


def _cases(strategy: Strategy):
    rng = random.Random(f"territory-{strategy.value}")
    counts = [1, 2, MAX_COUNT[strategy]]
    counts += [rng.randint(1, MAX_COUNT[strategy]) for _ in range(CASES_PER_STRATEGY[strategy] - 3)]
    for count in counts:
        yield count, make_random_participants(rng, count)


class TestLayoutInvariants(unittest.TestCase):

    def _check(self, strategy: Strategy, participants) -> None:
        config = LayoutConfig(verify=False)
        result = compute_layout(participants, CAPACITY, strategy, config)
        sized = {s.id: s for s in size_participants(participants, CAPACITY, MIN_TILE)}

        # Every positive-weight participant is placed (fallback, never drop)
        self.assertEqual(set(result.tiles), set(sized))
        self.assertEqual(result.dropped, [])

        # Minimum floor
        for pid, tile in result.tiles.items():
            self.assertGreaterEqual(tile.side, MIN_TILE, pid)

        # Weight-proportional area (per-participant strategies only)
        if result.strategy != Strategy.GRID:
            for pid, tile in result.tiles.items():
                s = sized[pid]
                self.assertEqual(tile.width, s.side)
                if not s.floored:
                    self.assertLessEqual(tile.area, s.target_cells)
                    self.assertLess(s.target_cells, (s.side + 1) ** 2)

        # No overlap
        ids = list(result.tiles)
        boxes = [
            shapely_box(t.x, t.y, t.right, t.bottom)
            for t in result.tiles.values()
        ]
        for i in range(len(boxes)):
            for j in range(i + 1, len(boxes)):
                self.assertEqual(
                    boxes[i].intersection(boxes[j]).area, 0,
                    f"{ids[i]} and {ids[j]} overlap ({strategy.value})",
                )

        # Exact, centred boundary
        b = result.boundary
        if result.tiles:
            tiles = result.tiles.values()
            self.assertEqual(b.min_x, min(t.x for t in tiles))
            self.assertEqual(b.max_x, max(t.right for t in tiles))
            self.assertEqual(b.min_y, min(t.y for t in tiles))
            self.assertEqual(b.max_y, max(t.bottom for t in tiles))
        self.assertLessEqual(abs(b.min_x + b.max_x), 1)
        self.assertLessEqual(abs(b.min_y + b.max_y), 1)
        self.assertEqual(b.width, b.max_x - b.min_x)
        self.assertEqual(b.height, b.max_y - b.min_y)

    def test_grid(self):
        for count, participants in _cases(Strategy.GRID):
            with self.subTest(count=count):
                self._check(Strategy.GRID, participants)

    def test_column_pack(self):
        for count, participants in _cases(Strategy.COLUMN_PACK):
            with self.subTest(count=count):
                self._check(Strategy.COLUMN_PACK, participants)

    def test_spiral(self):
        for count, participants in _cases(Strategy.SPIRAL):
            with self.subTest(count=count):
                self._check(Strategy.SPIRAL, participants)


class TestDeterminism(unittest.TestCase):

    def test_repeat_and_shuffle(self):
        rng = random.Random(2024)
        for strategy in Strategy:
            count = min(40, MAX_COUNT[strategy])
            participants = make_random_participants(rng, count)
            shuffled = list(participants)
            rng.shuffle(shuffled)
            with self.subTest(strategy=strategy):
                first = compute_layout(participants, CAPACITY, strategy)
                second = compute_layout(participants, CAPACITY, strategy)
                third = compute_layout(shuffled, CAPACITY, strategy)
                self.assertEqual(first, second)
                self.assertEqual(first.tiles, third.tiles)
                self.assertEqual(first.boundary, third.boundary)

    def test_share_sum_is_order_independent(self):
        # fsum keeps normalised shares bit-identical under reordering.
        rng = random.Random(99)
        participants = make_random_participants(rng, 150)
        a = size_participants(participants, CAPACITY, MIN_TILE)
        b = size_participants(list(reversed(participants)), CAPACITY, MIN_TILE)
        self.assertEqual(a, b)
        self.assertTrue(all(math.isfinite(s.share) for s in a))


if __name__ == "__main__":
    unittest.main()

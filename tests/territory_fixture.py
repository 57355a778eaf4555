"""Territory test fixtures — hardcoded and randomized participant sets.

  - two_investors:   A (0.7) and B (0.3) on a 10×10 grid (capacity 100).
                     Sides: A = floor(sqrt(70)) = 8, B = floor(sqrt(30)) = 5.
  - sole_owner:      one participant owning the whole 50×50 grid.
  - equal_thirds:    three 1/3 shares on a 3×3 grid — the 3-cell minimum
                     floor needs 27 cells, more than the 9 available.
  - equal_quarters:  four 0.25 shares on a 10×10 grid, every side 5.
  - random_participants: seeded raw amounts for property checks.
"""

from __future__ import annotations

import random

from territory.engine import Participant


def make_two_investors() -> list[Participant]:
    return [
        Participant(id="A", weight=0.7),
        Participant(id="B", weight=0.3),
    ]


def make_sole_owner() -> list[Participant]:
    return [Participant(id="solo", weight=1.0)]


def make_equal_thirds() -> list[Participant]:
    return [
        Participant(id="p1", weight=1 / 3),
        Participant(id="p2", weight=1 / 3),
        Participant(id="p3", weight=1 / 3),
    ]


def make_equal_quarters() -> list[Participant]:
    return [
        Participant(id=pid, weight=0.25)
        for pid in ("d", "b", "a", "c")
    ]


def make_random_participants(rng: random.Random, count: int) -> list[Participant]:
    """Raw investment amounts; a few participants get zero."""
    participants = []
    for i in range(count):
        amount = 0.0 if rng.random() < 0.05 else round(rng.uniform(1, 500), 2)
        participants.append(Participant(id=f"inv_{i:03d}", weight=amount))
    return participants

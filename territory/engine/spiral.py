"""Spiral placement — ring search outward from the centre.

Tiles are placed largest first.  For each tile, rings of growing radius
are sampled at fixed angular increments; the first ring that yields any
collision-free candidate wins, and within that ring the candidate whose
tile centre lies closest to the origin is taken.

Cost: every candidate is checked against every placed tile, so the worst
case is O(n² · rings · angles).  That is fine for tens to low hundreds
of participants; larger groups should use column-pack or grid.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from .geometry import overlaps_any
from .models import (
    SizedParticipant, Tile, PlacedTiles, LayoutConfig,
    ExhaustedPolicy, PlacementExhausted,
)


log = logging.getLogger(__name__)


def ring_offsets(radius: int, angle_step_deg: float) -> list[tuple[int, int]]:
    """Integer offsets sampled on one ring, in scan order.

    Radius 0 yields only the centre.  Offsets that round to the same
    cell are kept once, at their first angle.
    """
    if radius == 0:
        return [(0, 0)]
    steps = max(1, int(math.ceil(360.0 / angle_step_deg - 1e-9)))
    seen: set[tuple[int, int]] = set()
    offsets: list[tuple[int, int]] = []
    for i in range(steps):
        theta = math.radians(i * angle_step_deg)
        off = (round(radius * math.cos(theta)), round(radius * math.sin(theta)))
        if off not in seen:
            seen.add(off)
            offsets.append(off)
    return offsets


def spiral_rings(
    angle_step_deg: float, radius_step: int, max_radius: int,
) -> list[list[tuple[int, int]]]:
    """Candidate offsets for every ring from 0 up to *max_radius*."""
    return [
        ring_offsets(radius, angle_step_deg)
        for radius in range(0, max_radius + 1, radius_step)
    ]


def _center_dist_sq(tile: Tile) -> float:
    cx, cy = tile.center
    return cx * cx + cy * cy


def find_slot(
    side: int,
    placed: Sequence[Tile],
    rings: Sequence[Sequence[tuple[int, int]]],
) -> Tile | None:
    """Search *rings* outward for a free ``side × side`` slot.

    Returns None when no ring has a collision-free candidate.
    """
    half = side // 2
    for ring in rings:
        best: Tile | None = None
        best_d = math.inf
        for ox, oy in ring:
            cand = Tile(x=ox - half, y=oy - half, width=side, height=side)
            if overlaps_any(cand, placed):
                continue
            d = _center_dist_sq(cand)
            if d < best_d:
                best, best_d = cand, d
        if best is not None:
            return best
    return None


def place_spiral(
    sized: Sequence[SizedParticipant],
    capacity: int,
    config: LayoutConfig,
) -> PlacedTiles:
    """Place every participant on the spiral.

    Raises
    ------
    PlacementExhausted
        If a participant has no free slot within the search bound and
        the policy is ``ExhaustedPolicy.FAIL``.
    """
    spiral = config.spiral
    max_radius = spiral.resolved_max_radius(capacity)
    # Ring offsets depend only on the config.
    rings = spiral_rings(spiral.angle_step_deg, spiral.radius_step, max_radius)

    tiles: dict[str, Tile] = {}
    placed: list[Tile] = []
    dropped: list[str] = []

    for s in sized:
        slot = find_slot(s.side, placed, rings)
        if slot is None:
            if config.on_exhausted == ExhaustedPolicy.DROP:
                log.warning("Dropping %s: no %d×%d slot within radius %d",
                            s.id, s.side, s.side, max_radius)
                dropped.append(s.id)
                continue
            raise PlacementExhausted(s.id, s.side, max_radius)

        tiles[s.id] = slot
        placed.append(slot)
        log.debug("Spiral-placed %s %d×%d at (%d, %d)",
                  s.id, s.side, s.side, slot.x, slot.y)

    log.info("Spiral: placed %d/%d (max radius %d)",
             len(tiles), len(sized), max_radius)
    return PlacedTiles(tiles=tiles, dropped=dropped)

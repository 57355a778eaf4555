"""Shared layout constants for the territory engine.

These values describe the bounded area, the minimum tile size and the
spiral search knobs.  The engine models (``SpiralConfig``, ``LayoutConfig``)
and the web server both derive their defaults from this single source of
truth.

Change a value here and every caller picks it up automatically.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class LayoutRules:
    """Default rules for laying out territories.

    All distances are in grid cells unless noted otherwise.
    """

    capacity: int = 2500
    """Total unit cells in the bounded area (50×50)."""

    min_tile_size: int = 3
    """Smallest side length any participant with a positive weight gets."""

    angle_step_deg: float = 15.0
    """Angular increment between spiral candidates on one ring."""

    radius_step: int = 2
    """Distance between two consecutive spiral rings."""

    radius_margin: int = 10
    """Cells added to the grid side to get the default spiral search bound."""

    cell_size: float = 1.0
    """World units per cell, used by the renderer projection."""

    # ── Derived helpers ────────────────────────────────────────────

    def max_radius_for(self, capacity: int) -> int:
        """Default spiral search bound for a given capacity: ``N + margin``."""
        return math.isqrt(capacity) + self.radius_margin


# Module-level singleton, importable everywhere.
LAYOUT_RULES = LayoutRules()

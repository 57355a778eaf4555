"""Column-pack placement (billboard style).

Tiles are stacked top-down into columns of a fixed height budget; when
the next tile would overflow the current column a new column starts to
its right, as wide as the widest tile of the previous one.  Non-overlap
follows from construction, so no collision checks are needed and the
pass always terminates: O(n log n) for the sort, O(n) for the packing.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from .models import SizedParticipant, Tile, PlacedTiles, LayoutConfig


log = logging.getLogger(__name__)


def place_columns(
    sized: Sequence[SizedParticipant],
    capacity: int,
    config: LayoutConfig,
) -> PlacedTiles:
    """Greedily pack tiles into vertical columns.  Never fails."""
    height = config.column_height or math.isqrt(capacity)

    tiles: dict[str, Tile] = {}
    current_x = 0
    current_y = 0
    column_width = 0
    columns = 1 if sized else 0

    for s in sized:
        if current_y + s.side > height and current_y > 0:
            current_x += column_width
            current_y = 0
            column_width = 0
            columns += 1

        tiles[s.id] = Tile(x=current_x, y=current_y, width=s.side, height=s.side)
        log.debug("Column-placed %s %d×%d at (%d, %d)",
                  s.id, s.side, s.side, current_x, current_y)
        column_width = max(column_width, s.side)
        current_y += s.side

    log.info("Column-pack: %d tiles in %d column(s) of height %d",
             len(tiles), columns, height)
    return PlacedTiles(tiles=tiles)

"""Uniform grid placement.

Every participant gets the same square, sized from one reference
participant, and the squares are dealt row by row into a
``ceil(sqrt(n)) × ceil(sqrt(n))`` grid centred on the origin.  This is
a deliberate "uniform size" layout: per-participant sizing lives in the
spiral and column-pack strategies.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from .models import (
    SizedParticipant, Tile, PlacedTiles, LayoutConfig, InvalidInput,
)


log = logging.getLogger(__name__)


def grid_dimension(count: int) -> int:
    """Cells per grid row: ``ceil(sqrt(count))``."""
    side = math.isqrt(count)
    return side if side * side == count else side + 1


def uniform_side(sized: Sequence[SizedParticipant], reference: str | None) -> int:
    """Side length shared by every tile in the grid."""
    if reference is None:
        return sized[0].side
    for s in sized:
        if s.id == reference:
            return s.side
    raise InvalidInput(f"Grid reference '{reference}' is not a placed participant")


def place_grid(
    sized: Sequence[SizedParticipant],
    capacity: int,
    config: LayoutConfig,
) -> PlacedTiles:
    """Deal uniform squares into a centred grid.  Never fails."""
    if not sized:
        return PlacedTiles(tiles={})

    size = uniform_side(sized, config.grid_reference)
    grid_size = grid_dimension(len(sized))
    start_x = -(grid_size * size) // 2
    start_y = start_x

    tiles: dict[str, Tile] = {}
    for index, s in enumerate(sized):
        grid_x = index % grid_size
        grid_y = index // grid_size
        tiles[s.id] = Tile(
            x=start_x + grid_x * size,
            y=start_y + grid_y * size,
            width=size,
            height=size,
        )
        log.debug("Grid-placed %s at cell (%d, %d)", s.id, grid_x, grid_y)

    log.info("Grid: %d tiles of %d×%d in a %d×%d grid",
             len(tiles), size, size, grid_size, grid_size)
    return PlacedTiles(tiles=tiles)

"""Low-level tile geometry: collision, bounding box, centering, projection."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from ..config import LAYOUT_RULES
from .models import Boundary, Tile, EMPTY_BOUNDARY


def tiles_overlap(a: Tile, b: Tile) -> bool:
    """Return True if two tiles share a positive area.

    Tiles that only touch along an edge or a corner do not overlap.
    """
    return not (
        a.right <= b.x
        or b.right <= a.x
        or a.bottom <= b.y
        or b.bottom <= a.y
    )


def overlaps_any(candidate: Tile, placed: Iterable[Tile]) -> bool:
    """Check *candidate* against every already-placed tile."""
    for other in placed:
        if tiles_overlap(candidate, other):
            return True
    return False


def compute_boundary(tiles: Iterable[Tile]) -> Boundary:
    """Minimal axis-aligned box enclosing all tiles.

    An empty input gives the zero boundary.
    """
    min_x = min_y = None
    max_x = max_y = None
    for t in tiles:
        if min_x is None:
            min_x, max_x, min_y, max_y = t.x, t.right, t.y, t.bottom
            continue
        min_x = min(min_x, t.x)
        max_x = max(max_x, t.right)
        min_y = min(min_y, t.y)
        max_y = max(max_y, t.bottom)
    if min_x is None:
        return EMPTY_BOUNDARY
    return Boundary(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y)


def center_tiles(
    tiles: Mapping[str, Tile], boundary: Boundary,
) -> tuple[dict[str, Tile], Boundary]:
    """Translate tiles and boundary so the box is centred on the origin.

    The shift is ``min + floor(extent / 2)`` on each axis, so afterwards
    ``min + max`` is 0 for even extents and 1 for odd ones.
    """
    dx = -(boundary.min_x + boundary.width // 2)
    dy = -(boundary.min_y + boundary.height // 2)
    if dx == 0 and dy == 0:
        return dict(tiles), boundary
    moved = {pid: t.shifted(dx, dy) for pid, t in tiles.items()}
    return moved, Boundary(
        min_x=boundary.min_x + dx,
        max_x=boundary.max_x + dx,
        min_y=boundary.min_y + dy,
        max_y=boundary.max_y + dy,
    )


def world_position(
    tile: Tile, cell_size: float = LAYOUT_RULES.cell_size,
) -> tuple[float, float]:
    """Map a tile to the renderer's world coordinates (tile centre, Y up)."""
    cx, cy = tile.center
    return (cx * cell_size, -cy * cell_size)

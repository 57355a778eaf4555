"""Input validation and layout verification.

``validate_request`` rejects malformed input before any placement work.
``check_capacity`` rejects requests whose minimum tiles cannot fit.
``verify_layout`` re-checks a finished layout with Shapely, independently
of the integer geometry the strategies use.  Returns error messages
(empty = valid).
"""

from __future__ import annotations

import math
from collections.abc import Collection, Sequence

from shapely.geometry import box as shapely_box
from shapely.ops import unary_union
from shapely.strtree import STRtree

from .models import (
    Participant, SizedParticipant, SpiralConfig, LayoutConfig, LayoutResult,
    Strategy, InvalidInput, CapacityExceeded,
)


def validate_request(
    participants: Sequence[Participant],
    capacity: int,
    config: LayoutConfig,
    strategies: Collection[Strategy],
) -> None:
    """Raise InvalidInput for the first problem found in the request.

    Strategy-specific settings are only checked for the *strategies* the
    call can actually run (the requested one and its fallback).
    """
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
        raise InvalidInput(f"Capacity must be a positive integer, got {capacity!r}")
    if not isinstance(config.min_tile_size, int) or config.min_tile_size <= 0:
        raise InvalidInput(
            f"min_tile_size must be a positive integer, got {config.min_tile_size!r}"
        )

    seen: set[str] = set()
    for p in participants:
        if not isinstance(p.id, str) or not p.id:
            raise InvalidInput(f"Participant id must be a non-empty string, got {p.id!r}")
        if p.id in seen:
            raise InvalidInput(f"Duplicate participant id '{p.id}'")
        seen.add(p.id)
        if not isinstance(p.weight, (int, float)) or not math.isfinite(p.weight):
            raise InvalidInput(f"Participant '{p.id}': weight must be a finite number")
        if p.weight < 0:
            raise InvalidInput(f"Participant '{p.id}': negative weight {p.weight}")

    if Strategy.SPIRAL in strategies:
        _validate_spiral(config.spiral)
    if (Strategy.COLUMN_PACK in strategies
            and config.column_height is not None and config.column_height <= 0):
        raise InvalidInput("Column height must be positive")


def _validate_spiral(spiral: SpiralConfig) -> None:
    if spiral.angle_step_deg <= 0:
        raise InvalidInput("Spiral angle step must be positive")
    if spiral.radius_step <= 0:
        raise InvalidInput("Spiral radius step must be positive")
    if spiral.max_radius is not None and spiral.max_radius < 0:
        raise InvalidInput("Spiral max radius must not be negative")


def check_capacity(
    participants: Sequence[Participant], capacity: int, min_tile_size: int,
) -> None:
    """Raise CapacityExceeded if the minimum tiles alone overflow *capacity*."""
    count = sum(1 for p in participants if p.weight > 0)
    required = count * min_tile_size * min_tile_size
    if required > capacity:
        raise CapacityExceeded(required, capacity, count)


def verify_layout(
    result: LayoutResult,
    sized: Sequence[SizedParticipant],
    min_tile_size: int,
) -> list[str]:
    """Check a finished layout against every engine invariant."""
    errors: list[str] = []
    ids = list(result.tiles)
    tiles = [result.tiles[i] for i in ids]

    # ── Every sized participant is placed or explicitly dropped ──
    expected = {s.id for s in sized}
    dropped = set(result.dropped)
    for pid in sorted(expected - set(ids) - dropped):
        errors.append(f"Participant '{pid}' has no tile and was not dropped")
    for pid in sorted(set(ids) - expected):
        errors.append(f"Tile for unknown participant '{pid}'")

    # ── Minimum size ──
    for pid, t in zip(ids, tiles):
        if t.side < min_tile_size:
            errors.append(f"Tile '{pid}' side {t.side} below minimum {min_tile_size}")

    if not tiles:
        b = result.boundary
        if (b.min_x, b.max_x, b.min_y, b.max_y) != (0, 0, 0, 0):
            errors.append("Empty layout must have a zero boundary")
        return errors

    # ── No overlap ──
    boxes = [shapely_box(t.x, t.y, t.right, t.bottom) for t in tiles]
    tree = STRtree(boxes)
    for i, geom in enumerate(boxes):
        for j in tree.query(geom):
            j = int(j)
            if j <= i:
                continue
            area = geom.intersection(boxes[j]).area
            if area > 0:
                errors.append(
                    f"Tiles '{ids[i]}' and '{ids[j]}' overlap by {area:g} cells"
                )

    # ── Boundary is the exact bounding box ──
    xmin, ymin, xmax, ymax = unary_union(boxes).bounds
    b = result.boundary
    if (b.min_x, b.min_y, b.max_x, b.max_y) != (xmin, ymin, xmax, ymax):
        errors.append(
            f"Boundary ({b.min_x}, {b.min_y}, {b.max_x}, {b.max_y}) is not the "
            f"bounding box ({xmin:g}, {ymin:g}, {xmax:g}, {ymax:g})"
        )

    # ── Centred within one cell ──
    if abs(b.min_x + b.max_x) > 1 or abs(b.min_y + b.max_y) > 1:
        errors.append(
            f"Boundary centre ({(b.min_x + b.max_x) / 2}, "
            f"{(b.min_y + b.max_y) / 2}) is not at the origin"
        )

    return errors

"""Layout orchestrator — validate, size, place, bound, centre."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from .columns import place_columns
from .geometry import compute_boundary, center_tiles
from .grid import place_grid
from .models import (
    Participant, SizedParticipant, PlacedTiles, LayoutConfig, LayoutResult,
    Strategy, InvalidInput, PlacementExhausted, LayoutInvariantError,
)
from .sizing import size_participants
from .spiral import place_spiral
from .validation import validate_request, check_capacity, verify_layout


log = logging.getLogger(__name__)


PlaceFn = Callable[[Sequence[SizedParticipant], int, LayoutConfig], PlacedTiles]

# Strategy registry: every entry has the same signature.
STRATEGIES: dict[Strategy, PlaceFn] = {
    Strategy.GRID: place_grid,
    Strategy.SPIRAL: place_spiral,
    Strategy.COLUMN_PACK: place_columns,
}


def get_strategy(strategy: Strategy | str) -> PlaceFn:
    """Look up a placement function by enum member or name."""
    try:
        return STRATEGIES[Strategy(strategy)]
    except ValueError:
        raise InvalidInput(
            f"Unknown strategy: {strategy}. "
            f"Available: {[s.value for s in STRATEGIES]}"
        ) from None


def _finish(
    placed: PlacedTiles,
    strategy: Strategy,
    sized: Sequence[SizedParticipant],
    config: LayoutConfig,
) -> LayoutResult:
    boundary = compute_boundary(placed.tiles.values())
    tiles, boundary = center_tiles(placed.tiles, boundary)
    result = LayoutResult(
        tiles=tiles,
        boundary=boundary,
        strategy=strategy,
        dropped=list(placed.dropped),
    )
    if config.verify:
        problems = verify_layout(result, sized, config.min_tile_size)
        if problems:
            raise LayoutInvariantError(problems)
    return result


def compute_layout(
    participants: Sequence[Participant],
    capacity: int,
    strategy: Strategy | str = Strategy.SPIRAL,
    config: LayoutConfig | None = None,
) -> LayoutResult:
    """Lay out every participant as a non-overlapping square tile.

    The call is a pure function of its arguments: nothing is cached or
    shared between calls, so it is safe to run concurrently on
    independent inputs.

    Parameters
    ----------
    participants : sequence of Participant
        The full participant set (ids unique, weights non-negative).
    capacity : int
        Total unit cells in the bounded area.
    strategy : Strategy or str
        Placement algorithm to run.
    config : LayoutConfig, optional
        Tuning knobs; defaults come from ``territory.config``.

    Returns
    -------
    LayoutResult
        Centred tiles and their boundary.  ``strategy`` names the
        algorithm that actually produced them.

    Raises
    ------
    InvalidInput
        Malformed participants, capacity or config.
    CapacityExceeded
        The minimum tiles alone need more than *capacity* cells.
    PlacementExhausted
        The spiral ran dry and no fallback is configured.
    """
    config = config or LayoutConfig()
    place = get_strategy(strategy)
    requested = Strategy(strategy)
    runnable = {requested}
    if config.fallback is not None:
        get_strategy(config.fallback)
        runnable.add(Strategy(config.fallback))

    validate_request(participants, capacity, config, runnable)
    check_capacity(participants, capacity, config.min_tile_size)

    sized = size_participants(
        participants, capacity, config.min_tile_size, config.weight_mode,
    )

    try:
        placed = place(sized, capacity, config)
    except PlacementExhausted as exc:
        if config.fallback is None or Strategy(config.fallback) == requested:
            raise
        fallback = Strategy(config.fallback)
        log.warning("%s failed (%s), falling back to %s",
                    requested.value, exc, fallback.value)
        result = _finish(
            get_strategy(fallback)(sized, capacity, config),
            fallback, sized, config,
        )
        result.requested_strategy = requested
        result.fallback_reason = str(exc)
        return result

    result = _finish(placed, requested, sized, config)
    result.requested_strategy = requested
    log.info("Layout (%s): %d tile(s), boundary %d×%d",
             requested.value, len(result.tiles),
             result.boundary.width, result.boundary.height)
    return result

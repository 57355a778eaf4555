"""Weight sizing — shares, target cells and tile side lengths."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from .models import Participant, SizedParticipant, WeightMode, InvalidInput


log = logging.getLogger(__name__)

# Float slack when comparing a share sum against 1.
SHARE_TOLERANCE = 1e-9


def normalize_shares(
    participants: Sequence[Participant], mode: WeightMode = WeightMode.AUTO,
) -> dict[str, float]:
    """Return ``{id: share}`` for every participant.

    AUTO keeps weights as shares unless they sum above 1, in which case
    they are scaled down by the sum.  AMOUNTS always divides by the sum.
    SHARES rejects a sum above 1.  Zero total gives all-zero shares.
    """
    total = math.fsum(p.weight for p in participants)
    if total <= 0:
        return {p.id: 0.0 for p in participants}

    if mode == WeightMode.AMOUNTS:
        divisor = total
    elif total > 1.0 + SHARE_TOLERANCE:
        if mode == WeightMode.SHARES:
            raise InvalidInput(f"Shares sum to {total:.6g}, above 1")
        log.warning("Shares sum to %.1f%% — normalising to 100%%", total * 100)
        divisor = total
    else:
        divisor = 1.0

    return {p.id: p.weight / divisor for p in participants}


def side_length(share: float, capacity: int, min_tile_size: int) -> int:
    """Tile side for one share: ``max(min, floor(sqrt(share * capacity)))``.

    The cell count is rounded before the square root so float noise such
    as ``0.3 * 100 = 30.000000000000004`` does not change the result.
    A non-positive share gives 0 (the participant is not placed).
    """
    if share <= 0:
        return 0
    target = round(share * capacity)
    return max(min_tile_size, math.isqrt(target))


def placement_order(sized: Sequence[SizedParticipant]) -> list[SizedParticipant]:
    """Canonical order used by every strategy: side descending, then id."""
    return sorted(sized, key=lambda s: (-s.side, s.id))


def size_participants(
    participants: Sequence[Participant],
    capacity: int,
    min_tile_size: int,
    mode: WeightMode = WeightMode.AUTO,
) -> list[SizedParticipant]:
    """Size every participant with a positive share, in placement order.

    Participants whose share is zero are left out; they receive no tile.
    """
    shares = normalize_shares(participants, mode)
    sized: list[SizedParticipant] = []
    for p in participants:
        share = shares[p.id]
        side = side_length(share, capacity, min_tile_size)
        if side == 0:
            log.debug("Skipping %s: zero weight", p.id)
            continue
        sized.append(SizedParticipant(
            id=p.id,
            share=share,
            target_cells=round(share * capacity),
            side=side,
        ))
    return placement_order(sized)

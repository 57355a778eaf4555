"""Engine input/output dataclasses, configuration and error types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from territory.config import LAYOUT_RULES


# ── Input dataclasses ──────────────────────────────────────────────


@dataclass(frozen=True)
class Participant:
    """An owner of a territory.

    ``weight`` is either a share of the group (0–1) or a raw amount;
    see ``WeightMode``.  ``metadata`` is carried along for the caller
    and never inspected by the engine.
    """

    id: str
    weight: float
    metadata: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class SizedParticipant:
    """A participant after sizing: its normalised share and tile side."""

    id: str
    share: float
    target_cells: int
    side: int

    @property
    def floored(self) -> bool:
        """True when the minimum tile size overrode the weight-derived side."""
        return self.side * self.side > self.target_cells


# ── Output dataclasses ─────────────────────────────────────────────


@dataclass(frozen=True)
class Tile:
    """An axis-aligned block of cells.  ``(x, y)`` is the top-left cell."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def side(self) -> int:
        return min(self.width, self.height)

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def shifted(self, dx: int, dy: int) -> Tile:
        return Tile(self.x + dx, self.y + dy, self.width, self.height)


@dataclass(frozen=True)
class Boundary:
    """Minimal bounding box over a set of tiles (max edges exclusive)."""

    min_x: int
    max_x: int
    min_y: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y


EMPTY_BOUNDARY = Boundary(0, 0, 0, 0)


@dataclass
class PlacedTiles:
    """Raw strategy output, before boundary and centering."""

    tiles: dict[str, Tile]
    dropped: list[str] = field(default_factory=list)


class Strategy(str, Enum):
    """Interchangeable placement algorithms."""

    GRID = "grid"
    SPIRAL = "spiral"
    COLUMN_PACK = "column_pack"


@dataclass
class LayoutResult:
    """Complete layout: one tile per placed participant plus the boundary."""

    tiles: dict[str, Tile]
    boundary: Boundary
    strategy: Strategy
    requested_strategy: Strategy | None = None
    fallback_reason: str | None = None
    dropped: list[str] = field(default_factory=list)

    @property
    def fell_back(self) -> bool:
        return self.requested_strategy is not None and self.requested_strategy != self.strategy


# ── Configuration ──────────────────────────────────────────────────


class WeightMode(str, Enum):
    """How participant weights are turned into shares."""

    AUTO = "auto"          # shares, normalised only when they sum above 1
    SHARES = "shares"      # shares, a sum above 1 is rejected
    AMOUNTS = "amounts"    # raw amounts, always normalised by the sum


class ExhaustedPolicy(str, Enum):
    """What the spiral does with a participant it cannot place."""

    FAIL = "fail"
    DROP = "drop"


@dataclass
class SpiralConfig:
    """Spiral search knobs.  ``max_radius=None`` means ``N + margin``."""

    angle_step_deg: float = LAYOUT_RULES.angle_step_deg
    radius_step: int = LAYOUT_RULES.radius_step
    max_radius: int | None = None

    def resolved_max_radius(self, capacity: int) -> int:
        if self.max_radius is not None:
            return self.max_radius
        return LAYOUT_RULES.max_radius_for(capacity)


@dataclass
class LayoutConfig:
    """All tuneable layout parameters in one place."""

    min_tile_size: int = LAYOUT_RULES.min_tile_size
    spiral: SpiralConfig = field(default_factory=SpiralConfig)
    weight_mode: WeightMode = WeightMode.AUTO

    # Grid strategy: every tile gets the side of this participant.
    # None picks the first participant in placement order (the largest).
    grid_reference: str | None = None

    # Column-pack strategy: column height budget.  None means N.
    column_height: int | None = None

    # Strategy substituted when the spiral reports PlacementExhausted.
    fallback: Strategy | None = Strategy.COLUMN_PACK
    on_exhausted: ExhaustedPolicy = ExhaustedPolicy.FAIL

    # Re-check every invariant on the finished layout before returning it.
    verify: bool = True


# ── Errors ─────────────────────────────────────────────────────────


class LayoutError(Exception):
    """Base class for every error the engine reports."""


class InvalidInput(LayoutError):
    """Raised before any placement work when the inputs are malformed."""


class CapacityExceeded(LayoutError):
    """Raised when the minimum tiles alone need more cells than available."""

    def __init__(self, required: int, capacity: int, count: int) -> None:
        self.required = required
        self.capacity = capacity
        self.count = count
        super().__init__(
            f"{count} participant(s) need at least {required} cells "
            f"but capacity is {capacity}"
        )


class PlacementExhausted(LayoutError):
    """Raised when the spiral finds no free slot within its search bound."""

    def __init__(self, participant_id: str, side: int, max_radius: int) -> None:
        self.participant_id = participant_id
        self.side = side
        self.max_radius = max_radius
        super().__init__(
            f"Cannot place '{participant_id}' ({side}×{side}): "
            f"no free slot within radius {max_radius}"
        )


class LayoutInvariantError(LayoutError):
    """Raised when a finished layout fails verification."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__("Layout violates invariants: " + "; ".join(problems))

"""Territory layout engine — weighted participants to non-overlapping tiles.

Submodules:
  models        Input/output dataclasses, configuration and error types.
  geometry      Tile collision, bounding box, centering, world projection.
  sizing        Shares, target cells and tile side lengths.
  grid          Uniform-size grid placement.
  spiral        Ring search outward from the centre.
  columns       Column-pack (billboard) placement.
  validation    Input checks and layout verification (Shapely).
  orchestrator  Strategy selection, fallback and the compute_layout entry point.
  serialization JSON conversion (layout_to_dict, parse_layout, ...).
  report        Target vs. actual cell accounting.
"""

from .models import (
    Participant, SizedParticipant, Tile, Boundary, LayoutResult,
    Strategy, WeightMode, ExhaustedPolicy, SpiralConfig, LayoutConfig,
    LayoutError, InvalidInput, CapacityExceeded, PlacementExhausted,
    LayoutInvariantError,
)
from .orchestrator import compute_layout, get_strategy, STRATEGIES
from .geometry import tiles_overlap, compute_boundary, center_tiles, world_position
from .sizing import side_length, size_participants, normalize_shares
from .serialization import layout_to_dict, parse_layout, parse_participants, parse_config
from .report import cell_report
from .validation import verify_layout

__all__ = [
    # Models
    "Participant", "SizedParticipant", "Tile", "Boundary", "LayoutResult",
    "Strategy", "WeightMode", "ExhaustedPolicy", "SpiralConfig", "LayoutConfig",
    # Errors
    "LayoutError", "InvalidInput", "CapacityExceeded", "PlacementExhausted",
    "LayoutInvariantError",
    # Orchestrator
    "compute_layout", "get_strategy", "STRATEGIES",
    # Geometry
    "tiles_overlap", "compute_boundary", "center_tiles", "world_position",
    # Sizing
    "side_length", "size_participants", "normalize_shares",
    # Serialization
    "layout_to_dict", "parse_layout", "parse_participants", "parse_config",
    # Report / verification
    "cell_report", "verify_layout",
]

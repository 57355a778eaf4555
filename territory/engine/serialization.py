"""Layout serialization — JSON conversion."""

from __future__ import annotations

from typing import Any

from .geometry import world_position
from .models import (
    Participant, Tile, Boundary, LayoutResult, LayoutConfig, SpiralConfig,
    Strategy, WeightMode, ExhaustedPolicy, InvalidInput,
)


def layout_to_dict(result: LayoutResult, cell_size: float | None = None) -> dict:
    """Serialize a LayoutResult to a JSON-safe dict.

    With *cell_size* set, every tile also carries its renderer
    position under ``"world"``.
    """
    tiles = {}
    for pid, t in result.tiles.items():
        entry: dict[str, Any] = {
            "x": t.x, "y": t.y, "width": t.width, "height": t.height,
        }
        if cell_size is not None:
            wx, wy = world_position(t, cell_size)
            entry["world"] = {"x": wx, "y": wy}
        tiles[pid] = entry

    b = result.boundary
    return {
        "tiles": tiles,
        "boundary": {
            "minX": b.min_x, "maxX": b.max_x,
            "minY": b.min_y, "maxY": b.max_y,
            "width": b.width, "height": b.height,
        },
        "strategy": result.strategy.value,
        **({"requested_strategy": result.requested_strategy.value}
           if result.requested_strategy else {}),
        **({"fallback_reason": result.fallback_reason}
           if result.fallback_reason else {}),
        "dropped": list(result.dropped),
    }


def parse_layout(data: dict) -> LayoutResult:
    """Parse a layout dict back into a LayoutResult."""
    tiles = {
        pid: Tile(x=int(t["x"]), y=int(t["y"]),
                  width=int(t["width"]), height=int(t["height"]))
        for pid, t in data["tiles"].items()
    }
    b = data["boundary"]
    requested = data.get("requested_strategy")
    return LayoutResult(
        tiles=tiles,
        boundary=Boundary(
            min_x=int(b["minX"]), max_x=int(b["maxX"]),
            min_y=int(b["minY"]), max_y=int(b["maxY"]),
        ),
        strategy=Strategy(data["strategy"]),
        requested_strategy=Strategy(requested) if requested else None,
        fallback_reason=data.get("fallback_reason"),
        dropped=list(data.get("dropped", [])),
    )


def parse_participants(data: list) -> list[Participant]:
    """Parse ``[{"id": ..., "weight": ..., ...}]`` into participants.

    Keys other than ``id`` and ``weight`` are kept as metadata.
    """
    participants = []
    for i, item in enumerate(data):
        try:
            pid = item["id"]
            weight = float(item["weight"])
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidInput(f"Participant #{i}: {exc}") from exc
        metadata = {k: v for k, v in item.items() if k not in ("id", "weight")}
        participants.append(Participant(id=str(pid), weight=weight, metadata=metadata))
    return participants


def parse_config(data: dict | None) -> LayoutConfig:
    """Parse a config dict (all keys optional) into a LayoutConfig."""
    if not data:
        return LayoutConfig()
    defaults = LayoutConfig()
    spiral_data = data.get("spiral") or {}
    try:
        spiral = SpiralConfig(
            angle_step_deg=float(spiral_data.get(
                "angle_step_deg", defaults.spiral.angle_step_deg)),
            radius_step=int(spiral_data.get(
                "radius_step", defaults.spiral.radius_step)),
            max_radius=(int(spiral_data["max_radius"])
                        if spiral_data.get("max_radius") is not None else None),
        )
        fallback = data.get("fallback", defaults.fallback)
        column_height = data.get("column_height")
        return LayoutConfig(
            min_tile_size=int(data.get("min_tile_size", defaults.min_tile_size)),
            spiral=spiral,
            weight_mode=WeightMode(data.get("weight_mode", defaults.weight_mode)),
            grid_reference=data.get("grid_reference"),
            column_height=int(column_height) if column_height is not None else None,
            fallback=Strategy(fallback) if fallback is not None else None,
            on_exhausted=ExhaustedPolicy(data.get("on_exhausted", defaults.on_exhausted)),
            verify=bool(data.get("verify", defaults.verify)),
        )
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"Invalid layout config: {exc}") from exc

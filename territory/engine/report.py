"""Cell accounting — how close each tile comes to its target area."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .models import Participant, LayoutConfig, LayoutResult
from .sizing import size_participants


@dataclass
class CellUsage:
    """Target vs. actual cells for one participant."""

    id: str
    share: float
    target_cells: int
    actual_cells: int
    floored: bool

    @property
    def efficiency(self) -> float:
        if self.target_cells == 0:
            return 0.0
        return self.actual_cells / self.target_cells


@dataclass
class CellReport:
    rows: list[CellUsage]
    used_cells: int
    capacity: int

    @property
    def utilisation(self) -> float:
        return self.used_cells / self.capacity if self.capacity else 0.0

    def to_dict(self) -> dict:
        return {
            "participants": [
                {
                    "id": r.id,
                    "share": r.share,
                    "target_cells": r.target_cells,
                    "actual_cells": r.actual_cells,
                    "efficiency": round(r.efficiency, 4),
                    "floored": r.floored,
                }
                for r in self.rows
            ],
            "used_cells": self.used_cells,
            "capacity": self.capacity,
            "utilisation": round(self.utilisation, 4),
        }

    def format_lines(self) -> list[str]:
        lines = [
            f"{r.id}: {r.actual_cells} cells "
            f"(target {r.target_cells}, {r.efficiency * 100:.1f}%"
            f"{', floored' if r.floored else ''})"
            for r in self.rows
        ]
        lines.append(
            f"Total: {self.used_cells}/{self.capacity} cells "
            f"({self.utilisation * 100:.1f}%)"
        )
        return lines


def cell_report(
    participants: Sequence[Participant],
    result: LayoutResult,
    capacity: int,
    config: LayoutConfig | None = None,
) -> CellReport:
    """Compare each placed tile with the cells its share asks for.

    Dropped or unplaced participants are left out of the rows.
    """
    config = config or LayoutConfig()
    sized = size_participants(
        participants, capacity, config.min_tile_size, config.weight_mode,
    )
    rows = []
    for s in sized:
        tile = result.tiles.get(s.id)
        if tile is None:
            continue
        rows.append(CellUsage(
            id=s.id,
            share=s.share,
            target_cells=s.target_cells,
            actual_cells=tile.area,
            floored=s.floored,
        ))
    return CellReport(
        rows=rows,
        used_cells=sum(r.actual_cells for r in rows),
        capacity=capacity,
    )

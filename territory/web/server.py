"""
FastAPI web server — recompute a layout whenever the participant set changes.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from territory.config import LAYOUT_RULES
from territory.engine import (
    Participant, Strategy, WeightMode, ExhaustedPolicy,
    compute_layout, layout_to_dict, parse_config, cell_report,
    InvalidInput, CapacityExceeded, PlacementExhausted,
)


log = logging.getLogger("territory.server")


# ── .env loader ────────────────────────────────────────────────────

def _load_env():
    root = Path(__file__).resolve().parents[2]
    for name in (".env", ".env.local"):
        p = root / name
        if p.exists():
            for line in p.read_text(encoding="utf-8").splitlines():
                line = line.strip()
                if line and "=" in line and not line.startswith("#"):
                    k, v = line.split("=", 1)
                    k = k.strip()
                    v = v.strip().strip('"').strip("'")
                    if k and k not in os.environ:
                        os.environ[k] = v

_load_env()

DEFAULT_CAPACITY = int(os.environ.get("TERRITORY_CAPACITY", LAYOUT_RULES.capacity))
DEFAULT_MIN_TILE = int(os.environ.get("TERRITORY_MIN_TILE_SIZE", LAYOUT_RULES.min_tile_size))

# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="Territory")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Models ─────────────────────────────────────────────────────────

class ParticipantIn(BaseModel):
    id: str
    weight: float
    metadata: dict = Field(default_factory=dict)


class SpiralIn(BaseModel):
    angle_step_deg: float = LAYOUT_RULES.angle_step_deg
    radius_step: int = LAYOUT_RULES.radius_step
    max_radius: int | None = None


class LayoutRequest(BaseModel):
    participants: list[ParticipantIn]
    capacity: int = DEFAULT_CAPACITY
    strategy: Strategy = Strategy.SPIRAL
    min_tile_size: int = DEFAULT_MIN_TILE
    spiral: SpiralIn = Field(default_factory=SpiralIn)
    weight_mode: WeightMode = WeightMode.AUTO
    grid_reference: str | None = None
    column_height: int | None = None
    fallback: Strategy | None = Strategy.COLUMN_PACK
    on_exhausted: ExhaustedPolicy = ExhaustedPolicy.FAIL
    cell_size: float | None = None
    report: bool = False


# ── Routes ─────────────────────────────────────────────────────────

@app.get("/api/health")
def health():
    return {"status": "ok", "strategies": [s.value for s in Strategy]}


@app.post("/api/layout")
def layout(req: LayoutRequest):
    """Compute a fresh layout for the full participant set.

    Every call is independent — the previous layout is simply replaced
    by the caller.
    """
    participants = [
        Participant(id=p.id, weight=p.weight, metadata=p.metadata)
        for p in req.participants
    ]
    try:
        config = parse_config({
            "min_tile_size": req.min_tile_size,
            "spiral": req.spiral.model_dump(),
            "weight_mode": req.weight_mode,
            "grid_reference": req.grid_reference,
            "column_height": req.column_height,
            "fallback": req.fallback,
            "on_exhausted": req.on_exhausted,
        })
        result = compute_layout(participants, req.capacity, req.strategy, config)
    except InvalidInput as exc:
        raise HTTPException(422, str(exc))
    except (CapacityExceeded, PlacementExhausted) as exc:
        log.info("Layout rejected: %s", exc)
        raise HTTPException(409, str(exc))

    body = layout_to_dict(result, cell_size=req.cell_size)
    if req.report:
        body["report"] = cell_report(
            participants, result, req.capacity, config,
        ).to_dict()
    return body


def main(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn
    uvicorn.run("territory.web.server:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()

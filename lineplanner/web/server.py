"""
FastAPI web server — balancing and layout endpoints for the 3D planner UI.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, replace

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from lineplanner.pipeline.balancing import (
    LinePlannerError, plan, summarize, balanced_to_dict, summary_to_dict,
)
from lineplanner.pipeline.config import FLOOR_RULES
from lineplanner.pipeline.layout import (
    generate_layout, find_collisions, check_section_allotments, layout_to_dict,
)
from lineplanner.pipeline.operations import parse_operations


log = logging.getLogger(__name__)

# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="LinePlanner")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Models ─────────────────────────────────────────────────────────

class OperationIn(BaseModel):
    op_no: str | int
    op_name: str = ""
    machine_type: str
    smv: float | str | None = None
    section: str | None = ""


class BalanceRequest(BaseModel):
    operations: list[OperationIn]
    target_output: float = Field(..., description="Units per day.")
    working_minutes: float = Field(..., description="Working minutes per day.")


class LayoutRequest(BalanceRequest):
    line_no: str = ""
    transition_fixtures: bool = False


# ── Routes ─────────────────────────────────────────────────────────

@app.get("/api/config")
def get_config():
    """Return the floor rules the placer uses."""
    return asdict(FLOOR_RULES)


@app.post("/api/balance")
def balance(req: BalanceRequest):
    """Machine counts per operation plus the line summary."""
    operations = parse_operations([o.model_dump() for o in req.operations])
    try:
        balanced = plan(operations, req.target_output, req.working_minutes)
    except LinePlannerError as exc:
        raise HTTPException(400, str(exc))

    summary = summarize(balanced, req.target_output, req.working_minutes)
    return {
        "balanced": balanced_to_dict(balanced),
        "summary": summary_to_dict(summary),
    }


@app.post("/api/layout")
def layout(req: LayoutRequest):
    """Balance the bulletin and place every machine on the floor.

    Collision and section-allotment problems do not fail the request;
    they are returned as ``warnings`` for the UI to show.
    """
    operations = parse_operations([o.model_dump() for o in req.operations])
    rules = replace(FLOOR_RULES, transition_fixtures=req.transition_fixtures)
    try:
        entities = generate_layout(
            operations, req.target_output, req.working_minutes, rules=rules)
        balanced = plan(operations, req.target_output, req.working_minutes)
    except LinePlannerError as exc:
        raise HTTPException(400, str(exc))

    warnings = find_collisions(entities) + check_section_allotments(entities, req.line_no)
    for w in warnings:
        log.warning("Layout check: %s", w)

    summary = summarize(balanced, req.target_output, req.working_minutes)
    return {
        "entities": layout_to_dict(entities),
        "summary": summary_to_dict(summary),
        "warnings": warnings,
    }


def main(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn
    uvicorn.run("lineplanner.web.server:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()

# apps/api/routers/synergy.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request
from logging import Logger

from apps.api.deps import get_planner, to_selection
from apps.api.schemas import (
    ActivateResponse,
    ActivatedSynergyOut,
    GridResponse,
    SelectionIn,
    UnitOut,
)
from synergy_planner.planner import SynergyPlanner

router = APIRouter()


@router.get("/units", response_model=List[UnitOut])
def units(planner: SynergyPlanner = Depends(get_planner)) -> List[UnitOut]:
    """Roster in dataset order."""
    return [
        UnitOut(
            name=u.name,
            cost=u.cost,
            type=u.type,
            traits=list(u.traits),
            triple_trait=u.triple_trait,
        )
        for u in planner.dataset.units
    ]


@router.get("/grid", response_model=GridResponse)
def grid(planner: SynergyPlanner = Depends(get_planner)) -> GridResponse:
    """Origin x class grid with unit names per cell (every pair present)."""
    cells = {
        origin: {cls: [u.name for u in cell.units] for cls, cell in row.items()}
        for origin, row in planner.grid.items()
    }
    synergy = planner.dataset.synergy
    return GridResponse(
        origins=[t.name for t in synergy.origins],
        classes=[t.name for t in synergy.classes],
        cells=cells,
    )


@router.post("/activate", response_model=ActivateResponse)
def activate(
    req: SelectionIn,
    request: Request,
    planner: SynergyPlanner = Depends(get_planner),
) -> ActivateResponse:
    """
    Evaluate a selection snapshot. Unknown unit names are ignored and emblems
    are counted as given (no vocabulary check), matching the engine contract.
    """
    logger: Logger = request.app.state.logger
    state = planner.evaluate(to_selection(req, planner))
    logger.info("Activated %d synergies for %d units", len(state.synergies), len(req.units))
    return ActivateResponse(
        ok=True,
        unit_count=state.unit_count,
        synergies=[
            ActivatedSynergyOut(
                name=s.name,
                current_count=s.current_count,
                activated_thresholds=list(s.activated_thresholds),
                is_origin=s.is_origin,
            )
            for s in state.synergies
        ],
    )

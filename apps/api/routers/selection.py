# apps/api/routers/selection.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from apps.api.deps import from_selection, get_planner, to_selection
from apps.api.schemas import RejectionOut, SelectionChangeIn, SelectionChangeResponse
from synergy_planner.models import SelectionUpdate
from synergy_planner.planner import SynergyPlanner

router = APIRouter(prefix="/selection")


def _response(update: SelectionUpdate) -> SelectionChangeResponse:
    """Rejections are ordinary 200 responses with ok=false."""
    rej = update.rejection
    return SelectionChangeResponse(
        ok=rej is None,
        selection=from_selection(update.selection),
        rejection=(
            RejectionOut(reason=rej.reason, value=rej.value, message=rej.message)
            if rej is not None
            else None
        ),
        pending_input=update.pending_input,
    )


@router.post("/units", response_model=SelectionChangeResponse)
def add_unit(req: SelectionChangeIn, planner: SynergyPlanner = Depends(get_planner)):
    return _response(planner.add_unit(to_selection(req.selection, planner), req.name))


@router.post("/units/remove", response_model=SelectionChangeResponse)
def remove_unit(req: SelectionChangeIn, planner: SynergyPlanner = Depends(get_planner)):
    return _response(planner.remove_unit(to_selection(req.selection, planner), req.name))


@router.post("/emblems", response_model=SelectionChangeResponse)
def add_emblem(req: SelectionChangeIn, planner: SynergyPlanner = Depends(get_planner)):
    return _response(planner.add_emblem(to_selection(req.selection, planner), req.name))


@router.post("/emblems/remove", response_model=SelectionChangeResponse)
def remove_emblem(req: SelectionChangeIn, planner: SynergyPlanner = Depends(get_planner)):
    return _response(planner.remove_emblem(to_selection(req.selection, planner), req.name))

# apps/api/routers/compositions.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from apps.api.deps import from_selection, get_planner
from apps.api.schemas import CompositionOut, CompositionsResponse, SelectionOut
from synergy_planner.planner import SynergyPlanner

router = APIRouter(prefix="/compositions")


@router.get("", response_model=CompositionsResponse)
def list_compositions(
    name: str = "",
    unit: List[str] = Query(default=[]),
    planner: SynergyPlanner = Depends(get_planner),
) -> CompositionsResponse:
    """Filter by case-insensitive name substring and required units (?unit=A&unit=B)."""
    found = planner.compositions(name, unit)
    return CompositionsResponse(
        compositions=[
            CompositionOut(name=c.name, units=list(c.units), tier=c.tier, strategy=c.strategy)
            for c in found
        ]
    )


@router.post("/{name}/load", response_model=SelectionOut)
def load_composition(name: str, planner: SynergyPlanner = Depends(get_planner)) -> SelectionOut:
    comp = planner.find_composition(name)
    if comp is None:
        raise HTTPException(status_code=404, detail=f"Unknown composition: {name}")
    return from_selection(planner.load_composition(comp))

# apps/api/deps.py
from __future__ import annotations

from fastapi import HTTPException, Request

from synergy_planner.models import Selection
from synergy_planner.planner import SynergyPlanner
from synergy_planner.selection import resolve_unit_name

from apps.api.schemas import SelectionIn, SelectionOut


def get_planner(request: Request) -> SynergyPlanner:
    planner = getattr(request.app.state, "planner", None)
    if planner is None:
        raise HTTPException(status_code=503, detail="Dataset not loaded")
    return planner


def to_selection(payload: SelectionIn, planner: SynergyPlanner) -> Selection:
    """Request snapshot -> Selection.

    Unit names resolve case-insensitively to roster names (unknown names are
    kept as sent), then duplicates collapse with order kept.
    """
    roster = planner.dataset.units
    resolved = (resolve_unit_name(name, roster) or name for name in payload.units)
    return Selection(units=tuple(dict.fromkeys(resolved)), emblems=tuple(payload.emblems))


def from_selection(selection: Selection) -> SelectionOut:
    return SelectionOut(units=list(selection.units), emblems=list(selection.emblems))

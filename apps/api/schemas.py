# apps/api/schemas.py
from __future__ import annotations
from typing import Dict, List, Optional, Literal
from pydantic import BaseModel, Field

RejectionReasonOut = Literal[
    "unknown_unit",
    "duplicate_unit",
    "unknown_emblem",
    "emblem_not_selected",
    "unit_not_selected",
]

class SelectionIn(BaseModel):
    units: List[str] = Field(default_factory=list)
    emblems: List[str] = Field(default_factory=list)

class SelectionOut(BaseModel):
    units: List[str]
    emblems: List[str]

class ActivatedSynergyOut(BaseModel):
    name: str
    current_count: int
    activated_thresholds: List[str]
    is_origin: bool

class ActivateResponse(BaseModel):
    ok: bool = True
    unit_count: int
    synergies: List[ActivatedSynergyOut] = Field(default_factory=list)

class UnitOut(BaseModel):
    name: str
    cost: int
    type: str
    traits: List[str]
    triple_trait: bool = False

class GridResponse(BaseModel):
    origins: List[str]
    classes: List[str]
    # origin -> class -> unit names
    cells: Dict[str, Dict[str, List[str]]]

class RejectionOut(BaseModel):
    reason: RejectionReasonOut
    value: str
    message: str

class SelectionChangeIn(BaseModel):
    selection: SelectionIn = Field(default_factory=SelectionIn)
    name: str

class SelectionChangeResponse(BaseModel):
    ok: bool
    selection: SelectionOut
    rejection: Optional[RejectionOut] = None
    pending_input: str = ""

class CompositionOut(BaseModel):
    name: str
    units: List[str]
    tier: str = ""
    strategy: str = ""

class CompositionsResponse(BaseModel):
    compositions: List[CompositionOut] = Field(default_factory=list)

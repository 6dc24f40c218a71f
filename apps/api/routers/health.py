# apps/api/routers/health.py
from __future__ import annotations
from fastapi import APIRouter, Request

router = APIRouter()

@router.get("/health")
def health(request: Request):
    loaded = getattr(request.app.state, "planner", None) is not None
    return {"status": "ok", "dataset_loaded": loaded}

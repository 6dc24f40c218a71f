# apps/api/main.py
from __future__ import annotations

import os
import logging

from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware

from apps.api.routers.compositions import router as compositions_router
from apps.api.routers.health import router as health_router
from apps.api.routers.selection import router as selection_router
from apps.api.routers.synergy import router as synergy_router
from synergy_planner.io.loader import Loader
from synergy_planner.models import Dataset
from synergy_planner.planner import SynergyPlanner


def _setup_logger() -> logging.Logger:
    logger = logging.getLogger("api")
    logger.setLevel(logging.INFO)
    if not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[API] %(asctime)s | %(levelname)s | %(message)s"))
        logger.addHandler(h)
    logger.propagate = False
    return logger


def _load_planner(logger: logging.Logger, data_dir: str, rules: str | None) -> SynergyPlanner | None:
    """Planner for `data_dir`, or None when the folder does not exist.

    A folder that exists but holds a corrupt dataset raises DataIntegrityError,
    so a bad deploy fails at startup rather than on the first request.
    """
    if not os.path.isdir(data_dir):
        logger.warning("Data directory %s not found. API will answer 503 until restarted.", data_dir)
        return None
    dataset = Loader(logger).load_dataset(data_dir, rules=rules)
    logger.info("Dataset loaded from %s", data_dir)
    return SynergyPlanner(dataset=dataset, logger=logger)


def create_app(dataset: Dataset | None = None) -> FastAPI:
    app = FastAPI(title="Synergy Planner API", version="1.0.0")

    # ---- Logger ----
    logger = _setup_logger()
    app.state.logger = logger

    # ---- Dataset ----
    if dataset is not None:
        app.state.planner = SynergyPlanner(dataset=dataset, logger=logger)
    else:
        app.state.planner = _load_planner(
            logger,
            os.getenv("SYNERGY_DATA_DIR", "data"),
            os.getenv("SYNERGY_RULES") or None,
        )

    # ---- Middleware ----
    app.add_middleware(GZipMiddleware, minimum_size=1024)

    # ---- Routers ----
    app.include_router(synergy_router, tags=["synergy"])
    app.include_router(selection_router, tags=["selection"])
    app.include_router(compositions_router, tags=["compositions"])
    app.include_router(health_router, tags=["meta"])

    return app


app = create_app()

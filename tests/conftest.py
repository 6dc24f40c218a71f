"""Shared fixtures: a small synthetic roster exercising every rule."""

import copy
import logging
from pathlib import Path

import pytest

from synergy_planner.io.loader import Loader
from synergy_planner.planner import SynergyPlanner

REPO_DATA_DIR = Path(__file__).resolve().parent.parent / "data"

SYNERGIES = {
    "origins": [
        {"name": "Dragon", "bonuses": {}},
        {"name": "OriginA", "bonuses": {"4": "bonus-A4", "2": "bonus-A2"}},
        {"name": "OriginB", "bonuses": {"1": "bonus-B1"}},
    ],
    "classes": [
        {"name": "ClassX", "bonuses": {"2": "bonus-X2"}},
        {"name": "ClassY", "bonuses": {"1": "bonus-Y1", "3": "bonus-Y3"}},
    ],
}

UNITS = {
    "units": [
        {"name": "UnitX", "cost": 4, "type": "Tank", "traits": ["Dragon", "OriginA"]},
        {"name": "UnitY", "cost": 1, "type": "Fighter", "traits": ["OriginA"]},
        {"name": "UnitZ", "cost": 2, "type": "Caster", "traits": ["OriginA", "OriginB", "ClassX"]},
        {"name": "UnitW", "cost": 3, "type": "Caster", "traits": ["OriginB", "ClassY", "Unlisted"]},
        {"name": "Nomsy (Red)", "cost": 2, "type": "Caster", "traits": ["OriginB", "ClassX"]},
        {"name": "Nomsy (Blue)", "cost": 2, "type": "Caster", "traits": ["OriginB", "ClassY"]},
        {"name": "Dragonling", "cost": 5, "type": "Tank", "traits": ["Dragon", "OriginB", "ClassX"],
         "triple_trait": True},
    ]
}

EMBLEMS = ["OriginA", "OriginB", "ClassX", "ClassY"]

COMPOSITIONS = {
    "compositions": [
        {"name": "Dragon Rush", "units": ["UnitX", "unity", "Ghost"], "tier": "S",
         "strategy": "Fast eight for the dragon."},
        {"name": "Twin Origins", "units": ["UnitZ", "UnitW"], "tier": "B", "strategy": ""},
    ]
}


@pytest.fixture
def logger():
    return logging.getLogger("tests.synergy_planner")


@pytest.fixture
def payloads():
    """Deep copies so a test may corrupt its own copy freely."""
    return {
        "units": copy.deepcopy(UNITS),
        "synergies": copy.deepcopy(SYNERGIES),
        "emblems": list(EMBLEMS),
        "compositions": copy.deepcopy(COMPOSITIONS),
    }


@pytest.fixture
def dataset(payloads, logger):
    return Loader(logger).dataset_from_payloads(**payloads)


@pytest.fixture
def planner(dataset, logger):
    return SynergyPlanner(dataset=dataset, logger=logger)


@pytest.fixture
def repo_data_dir():
    return str(REPO_DATA_DIR)

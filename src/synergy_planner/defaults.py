# ===== Built-in defaults (used when rules.json is absent) =====

from __future__ import annotations

# Dataset file names inside a data directory
UNITS_FILE = "units.json"
SYNERGIES_FILE = "synergies.json"
EMBLEMS_FILE = "emblems.json"
COMPOSITIONS_FILE = "compositions.json"
RULES_FILE = "rules.json"

# Special traits: a carrier's OTHER origins count `origin_weight` times and the
# carrier occupies `board_slots` slots on the board.
DEFAULT_WEIGHTING_RULES: list[dict] = [
    {"trait": "Dragon", "origin_weight": 3, "board_slots": 2},
]

# Mutually exclusive unit variants, matched by name prefix
DEFAULT_EXCLUSIVE_GROUPS: list[dict] = [
    {"name": "Nomsy", "prefix": "Nomsy ("},
]

# Valid shop cost tiers
MIN_UNIT_COST = 1
MAX_UNIT_COST = 5

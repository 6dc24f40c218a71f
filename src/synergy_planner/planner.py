"""SynergyPlanner: one loaded dataset plus the operations callers need.

The planner is read-only after construction. It caches the grid (built once per
dataset) and binds the pure selection rules to the dataset's roster, emblem
vocabulary and rule table. Callers own the Selection snapshots.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from . import selection as selection_rules
from .engine import activate, count_units
from .grid import build_grid
from .models import (
    BoardState,
    Composition,
    Dataset,
    GridData,
    SavedTeam,
    Selection,
    SelectionUpdate,
)
from .teams import filter_compositions, find_by_name, load_composition, load_team


class SynergyPlanner:
    """Facade over grid building, activation and selection rules for one dataset."""

    def __init__(self, *, dataset: Dataset, logger) -> None:
        self.logger = logger
        self.dataset = dataset
        self._grid: GridData | None = None

        self.logger.info(
            f"🧩 Planner ready ({len(dataset.units)} units, "
            f"{len(dataset.synergy.origins)} origins, {len(dataset.synergy.classes)} classes, "
            f"{len(dataset.emblems)} emblems, {len(dataset.compositions)} compositions)"
        )

    # ---------------- Grid ----------------
    @property
    def grid(self) -> GridData:
        if self._grid is None:
            self._grid = build_grid(self.dataset.units, self.dataset.synergy)
        return self._grid

    # ---------------- Activation ----------------
    def evaluate(self, selection: Selection) -> BoardState:
        """Active synergies and board size for one snapshot."""
        d = self.dataset
        names = selection.unit_names
        return BoardState(
            synergies=tuple(activate(names, d.units, d.synergy, selection.emblems, d.rules)),
            unit_count=count_units(names, d.units, d.rules),
        )

    # ---------------- Selection rules ----------------
    def add_unit(self, selection: Selection, raw_name: str) -> SelectionUpdate:
        return self._logged(
            selection_rules.add_unit(selection, raw_name, self.dataset.units, self.dataset.rules)
        )

    def remove_unit(self, selection: Selection, name: str) -> SelectionUpdate:
        return self._logged(selection_rules.remove_unit(selection, name))

    def add_emblem(self, selection: Selection, name: str) -> SelectionUpdate:
        return self._logged(selection_rules.add_emblem(selection, name, self.dataset.emblems))

    def remove_emblem(self, selection: Selection, name: str) -> SelectionUpdate:
        return self._logged(selection_rules.remove_emblem(selection, name))

    def build_selection(
        self,
        units: Iterable[str] = (),
        emblems: Iterable[str] = (),
        start: Selection | None = None,
    ) -> tuple[Selection, List[SelectionUpdate]]:
        """Apply adds in order; returns the final snapshot and the rejected updates."""
        current = start or Selection()
        rejected: List[SelectionUpdate] = []
        for name in units:
            update = self.add_unit(current, name)
            current = update.selection
            if not update.accepted:
                rejected.append(update)
        for name in emblems:
            update = self.add_emblem(current, name)
            current = update.selection
            if not update.accepted:
                rejected.append(update)
        return current, rejected

    # ---------------- Compositions / teams ----------------
    def find_composition(self, name: str) -> Composition | None:
        return find_by_name(self.dataset.compositions, name)

    def compositions(self, name_query: str = "", required_units: Sequence[str] = ()) -> List[Composition]:
        """Filter compositions; required unit names are matched case-insensitively."""
        required = [selection_rules.resolve_unit_name(u, self.dataset.units) or u for u in required_units]
        return filter_compositions(self.dataset.compositions, name_query, required)

    def load_composition(self, composition: Composition) -> Selection:
        selection, skipped = load_composition(composition, self.dataset.units)
        if skipped:
            self.logger.warning(
                f"⚠️ Composition {composition.name!r} lists unknown units (skipped): {', '.join(skipped)}"
            )
        return selection

    def load_team(self, team: SavedTeam) -> Selection:
        selection, skipped = load_team(team, self.dataset.units)
        if skipped:
            self.logger.warning(
                f"⚠️ Team {team.name!r} lists unknown units (skipped): {', '.join(skipped)}"
            )
        return selection

    # ---------------- helpers ----------------
    def _logged(self, update: SelectionUpdate) -> SelectionUpdate:
        if update.rejection is not None:
            self.logger.warning(f"⚠️ {update.rejection.message}")
        return update

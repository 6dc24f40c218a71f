"""Origin x class grid of the full roster."""

from __future__ import annotations

from typing import Iterable, List

from .models import GridCell, GridData, SynergyData, Unit


def build_grid(units: Iterable[Unit], synergy: SynergyData) -> GridData:
    """Place every unit into each (origin, class) cell it satisfies.

    Every origin x class pair gets a cell, even when empty. A unit with two
    origins and one class lands in two cells; a unit with no origin or no class
    lands nowhere. Cells keep roster order.
    """
    grid: GridData = {
        origin.name: {cls.name: GridCell() for cls in synergy.classes}
        for origin in synergy.origins
    }
    origin_names = synergy.origin_names
    class_names = synergy.class_names

    for unit in units:
        unit_origins = [t for t in unit.traits if t in origin_names]
        unit_classes = [t for t in unit.traits if t in class_names]
        for origin in unit_origins:
            row = grid[origin]
            for cls in unit_classes:
                cell = row[cls].units
                # traits are validated unique, this only guards hand-built units
                if not cell or cell[-1] is not unit:
                    cell.append(unit)
    return grid


def occupied_cells(grid: GridData) -> List[tuple[str, str, GridCell]]:
    """(origin, class, cell) for non-empty cells, in grid order."""
    return [
        (origin, cls, cell)
        for origin, row in grid.items()
        for cls, cell in row.items()
        if cell.units
    ]


def cells_for_unit(grid: GridData, unit_name: str) -> List[tuple[str, str]]:
    """All (origin, class) coordinates holding the named unit."""
    return [
        (origin, cls)
        for origin, row in grid.items()
        for cls, cell in row.items()
        if any(u.name == unit_name for u in cell.units)
    ]

"""Compositions and saved teams: filtering and loading into a selection."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List, Sequence, TypeVar

from .models import Composition, SavedTeam, Selection, Unit
from .selection import selection_from_names

T = TypeVar("T", Composition, SavedTeam)


def _matches(item: Composition | SavedTeam, name_query: str, required_units: Sequence[str]) -> bool:
    query = name_query.strip().lower()
    if query and query not in item.name.lower():
        return False
    return all(u in item.units for u in required_units)


def filter_compositions(
    compositions: Iterable[Composition],
    name_query: str = "",
    required_units: Sequence[str] = (),
) -> List[Composition]:
    """Compositions whose name contains `name_query` (case-insensitive) and that
    include every unit in `required_units` (exact names). Blank filters match all.
    """
    return [c for c in compositions if _matches(c, name_query, required_units)]


def filter_saved_teams(
    teams: Iterable[SavedTeam],
    name_query: str = "",
    required_units: Sequence[str] = (),
) -> List[SavedTeam]:
    """Same filter semantics as filter_compositions."""
    return [t for t in teams if _matches(t, name_query, required_units)]


def find_by_name(items: Iterable[T], name: str) -> T | None:
    wanted = name.strip().lower()
    return next((i for i in items if i.name.lower() == wanted), None)


def load_composition(composition: Composition, units: Sequence[Unit]) -> tuple[Selection, list[str]]:
    """Fresh snapshot holding the composition's units; emblems are cleared."""
    return selection_from_names(composition.units, units)


def load_team(team: SavedTeam, units: Sequence[Unit]) -> tuple[Selection, list[str]]:
    return selection_from_names(team.units, units)


def make_saved_team(name: str, selection: Selection, now: datetime | None = None) -> SavedTeam:
    """Snapshot the selected units under a user-given name (not persisted)."""
    clean = name.strip()
    if not clean:
        raise ValueError("team name must not be blank")
    stamp = now or datetime.now(timezone.utc)
    return SavedTeam(
        id=str(int(stamp.timestamp() * 1000)),
        name=clean,
        units=selection.units,
        created_at=stamp.isoformat(),
    )

"""Selection rules: pure functions from one Selection snapshot to the next.

Nothing here raises on bad user input. A refused change comes back as a
SelectionUpdate carrying the unchanged snapshot, a Rejection, and the raw
candidate text so the caller can put it back in front of the user.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from .models import (
    Rejection,
    RejectionReason,
    Selection,
    SelectionUpdate,
    SynergyRules,
    Unit,
)


def resolve_unit_name(raw: str, units: Sequence[Unit]) -> str | None:
    """Canonical roster name matching `raw` case-insensitively, else None."""
    wanted = raw.strip().lower()
    for unit in units:
        if unit.name.lower() == wanted:
            return unit.name
    return None


def _reject(selection: Selection, reason: str, value: str, message: str, raw: str) -> SelectionUpdate:
    return SelectionUpdate(
        selection=selection,
        rejection=Rejection(reason=reason, value=value, message=message),
        pending_input=raw,
    )


# ---------------------------- units ----------------------------

def add_unit(
    selection: Selection,
    raw_name: str,
    units: Sequence[Unit],
    rules: SynergyRules,
) -> SelectionUpdate:
    """Add a unit by (case-insensitive) name.

    Adding a member of an exclusivity group first drops every other member of
    that group.
    """
    name = resolve_unit_name(raw_name, units)
    if name is None:
        return _reject(
            selection, RejectionReason.UNKNOWN_UNIT, raw_name,
            f'"{raw_name}" is not a valid unit name', raw_name,
        )
    if name in selection.unit_names:
        return _reject(
            selection, RejectionReason.DUPLICATE_UNIT, name,
            f'"{name}" is already selected', raw_name,
        )

    kept = selection.units
    group = rules.group_of(name)
    if group is not None:
        kept = tuple(n for n in kept if not group.matches(n))
    return SelectionUpdate(selection=Selection(units=kept + (name,), emblems=selection.emblems))


def remove_unit(selection: Selection, name: str) -> SelectionUpdate:
    if name not in selection.unit_names:
        return _reject(
            selection, RejectionReason.UNIT_NOT_SELECTED, name,
            f'"{name}" is not selected', name,
        )
    return SelectionUpdate(
        selection=Selection(
            units=tuple(n for n in selection.units if n != name),
            emblems=selection.emblems,
        )
    )


def remove_unit_at(selection: Selection, index: int) -> SelectionUpdate:
    """Remove the unit shown at display position `index`."""
    if not 0 <= index < len(selection.units):
        raise IndexError(f"unit index {index} out of range")
    return remove_unit(selection, selection.units[index])


# ---------------------------- emblems ----------------------------

def add_emblem(selection: Selection, name: str, vocabulary: Iterable[str]) -> SelectionUpdate:
    """Append an emblem; the name must match the vocabulary exactly."""
    if name not in set(vocabulary):
        return _reject(
            selection, RejectionReason.UNKNOWN_EMBLEM, name,
            f'"{name}" is not a valid emblem name', name,
        )
    return SelectionUpdate(
        selection=Selection(units=selection.units, emblems=selection.emblems + (name,))
    )


def remove_emblem(selection: Selection, name: str) -> SelectionUpdate:
    """Remove the first occurrence of `name` only."""
    if name not in selection.emblems:
        return _reject(
            selection, RejectionReason.EMBLEM_NOT_SELECTED, name,
            f'"{name}" is not applied', name,
        )
    emblems = list(selection.emblems)
    emblems.remove(name)
    return SelectionUpdate(selection=Selection(units=selection.units, emblems=tuple(emblems)))


def remove_emblem_at(selection: Selection, index: int) -> SelectionUpdate:
    if not 0 <= index < len(selection.emblems):
        raise IndexError(f"emblem index {index} out of range")
    return remove_emblem(selection, selection.emblems[index])


# ---------------------------- bulk ----------------------------

def clear() -> Selection:
    return Selection()


def selection_from_names(names: Iterable[str], units: Sequence[Unit]) -> tuple[Selection, list[str]]:
    """Snapshot from a stored name list, with emblems cleared.

    Returns (selection, skipped) where skipped holds names matching no unit.
    Repeated names collapse to one entry.
    """
    picked: list[str] = []
    skipped: list[str] = []
    for raw in names:
        name = resolve_unit_name(raw, units)
        if name is None:
            skipped.append(raw)
        elif name not in picked:
            picked.append(name)
    return Selection(units=tuple(picked)), skipped

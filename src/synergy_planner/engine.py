"""Synergy activation engine.

- Inputs:
    selected : names of the chosen units (set semantics, unknown names ignored)
    units    : full roster
    synergy  : origins + classes with their bonus thresholds
    emblems  : applied emblem trait names (duplicates stack, +1 each)
    rules    : special-trait weighting table

- Rules:
    - A unit carrying a special trait (default 'Dragon') counts each of its
      OTHER origins `origin_weight` times; the special trait itself counts once.
    - Classes always count once.
    - A trait is active when at least one threshold <= its count.

- Returns records in origins-then-classes order.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Sequence

from .defaults import DEFAULT_EXCLUSIVE_GROUPS, DEFAULT_WEIGHTING_RULES
from .models import (
    ActivatedSynergy,
    ExclusivityGroup,
    SynergyData,
    SynergyRules,
    Unit,
    WeightingRule,
)
from .thresholds import reached_thresholds


def default_rules() -> SynergyRules:
    """Rule table built from the built-in defaults."""
    return SynergyRules(
        weighting=tuple(WeightingRule(**r) for r in DEFAULT_WEIGHTING_RULES),
        exclusive_groups=tuple(
            ExclusivityGroup.by_prefix(g["name"], g["prefix"]) for g in DEFAULT_EXCLUSIVE_GROUPS
        ),
    )


DEFAULT_RULES = default_rules()


# ----------------------------- helpers -----------------------------

def selected_units(selected: Iterable[str], units: Sequence[Unit]) -> List[Unit]:
    """Roster units whose name is selected, in roster order."""
    names = set(selected)
    return [u for u in units if u.name in names]


def trait_weight(unit: Unit, trait: str, origin_names: frozenset[str], rules: SynergyRules) -> int:
    """Contribution of one trait on one unit."""
    if rules.is_special_trait(trait):
        return 1
    rule = rules.weighting_for(unit)
    if rule is not None and trait in origin_names:
        return rule.origin_weight
    return 1


def trait_counts(
    selected: Iterable[str],
    units: Sequence[Unit],
    synergy: SynergyData,
    emblems: Iterable[str] = (),
    rules: SynergyRules | None = None,
) -> Counter:
    """Effective weighted count per trait name (units + emblems)."""
    rules = DEFAULT_RULES if rules is None else rules
    origin_names = synergy.origin_names
    counts: Counter = Counter()
    for unit in selected_units(selected, units):
        for trait in unit.traits:
            counts[trait] += trait_weight(unit, trait, origin_names, rules)
    for emblem in emblems:
        counts[emblem] += 1
    return counts


# ----------------------------- public API -----------------------------

def activate(
    selected: Iterable[str],
    units: Sequence[Unit],
    synergy: SynergyData,
    emblems: Iterable[str] = (),
    rules: SynergyRules | None = None,
) -> List[ActivatedSynergy]:
    """Compute which synergies reach a bonus threshold."""
    counts = trait_counts(selected, units, synergy, emblems, rules)
    origin_names = synergy.origin_names
    out: List[ActivatedSynergy] = []
    for trait in synergy.all_traits():
        count = counts.get(trait.name, 0)
        if count <= 0:
            continue
        reached = reached_thresholds(trait.bonuses, count)
        if not reached:
            continue
        out.append(
            ActivatedSynergy(
                name=trait.name,
                current_count=count,
                activated_thresholds=tuple(reached),
                is_origin=trait.name in origin_names,
            )
        )
    return out


def count_units(
    selected: Iterable[str],
    units: Sequence[Unit],
    rules: SynergyRules | None = None,
) -> int:
    """Board size: 1 per unit, special-trait carriers count their board_slots."""
    rules = DEFAULT_RULES if rules is None else rules
    total = 0
    for unit in selected_units(selected, units):
        rule = rules.weighting_for(unit)
        total += rule.board_slots if rule is not None else 1
    return total

"""Models for the Synergy Planner.

This module defines dataclasses that represent the main entities of the synergy
system: roster units, traits, the derived grid and activation records, and the
immutable selection snapshot owned by callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Tuple


@dataclass(slots=True, frozen=True)
class Unit:
    """A single roster unit.

    Attributes:
        name: Unique unit name (e.g., 'Shyvana').
        cost: Shop cost tier, 1-5.
        type: Category tag (e.g., 'Tank', 'Caster').
        traits: Names of the traits this unit carries.
        triple_trait: Display-only marker; it does NOT change trait weighting.
        ability: Opaque ability payload, carried through untouched.
        stats: Opaque stat payload, carried through untouched.
    """

    name: str
    cost: int
    type: str
    traits: Tuple[str, ...]
    triple_trait: bool = False
    ability: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)
    stats: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    def __repr__(self) -> str:
        return f"Unit(name='{self.name}', cost={self.cost}, traits={list(self.traits)})"


@dataclass(slots=True, frozen=True)
class Trait:
    """An origin or class trait.

    Attributes:
        name: Trait name, unique across origins and classes.
        bonuses: Threshold key (decimal string, e.g. "2") -> bonus description.
        description: Free-text description of the trait.
        champions: Informational list of unit names listed with the trait.
    """

    name: str
    bonuses: Dict[str, str] = field(default_factory=dict, hash=False)
    description: str = ""
    champions: Tuple[str, ...] = ()

    def __repr__(self) -> str:
        return f"Trait(name='{self.name}', thresholds={list(self.bonuses)})"


@dataclass(slots=True, frozen=True)
class SynergyData:
    """Two disjoint trait collections: origins and classes."""

    origins: Tuple[Trait, ...]
    classes: Tuple[Trait, ...]

    @property
    def origin_names(self) -> frozenset[str]:
        return frozenset(t.name for t in self.origins)

    @property
    def class_names(self) -> frozenset[str]:
        return frozenset(t.name for t in self.classes)

    def all_traits(self) -> Tuple[Trait, ...]:
        """Origins first, then classes."""
        return self.origins + self.classes


@dataclass(slots=True)
class GridCell:
    """Units carrying both the row origin and the column class."""

    units: List[Unit] = field(default_factory=list)


# origin name -> class name -> cell
GridData = Dict[str, Dict[str, GridCell]]


@dataclass(slots=True, frozen=True)
class ActivatedSynergy:
    """A trait that reached at least one bonus threshold.

    Attributes:
        name: Trait name.
        current_count: Effective weighted count (units, weighting and emblems).
        activated_thresholds: Threshold keys <= current_count, ascending.
        is_origin: True for origins, False for classes.
    """

    name: str
    current_count: int
    activated_thresholds: Tuple[str, ...]
    is_origin: bool


@dataclass(slots=True, frozen=True)
class BoardState:
    """Everything derived from one selection snapshot."""

    synergies: Tuple[ActivatedSynergy, ...]
    unit_count: int


# ========= Rules (special-trait weighting, exclusivity) =========


@dataclass(slots=True, frozen=True)
class WeightingRule:
    """A special trait that re-weights the other origins of its carrier.

    Attributes:
        trait: Name of the special trait (e.g., 'Dragon').
        origin_weight: Contribution of each OTHER origin on a carrier.
        board_slots: How many board slots a carrier occupies.
    """

    trait: str
    origin_weight: int = 3
    board_slots: int = 2


@dataclass(slots=True, frozen=True)
class ExclusivityGroup:
    """Units matched by `predicate` are mutually exclusive in a selection."""

    name: str
    predicate: Callable[[str], bool] = field(compare=False, hash=False)

    @classmethod
    def by_prefix(cls, name: str, prefix: str) -> "ExclusivityGroup":
        return cls(name=name, predicate=lambda unit_name: unit_name.startswith(prefix))

    def matches(self, unit_name: str) -> bool:
        return bool(self.predicate(unit_name))


@dataclass(slots=True, frozen=True)
class SynergyRules:
    """Data-driven rule table consumed by the engine and the selection rules."""

    weighting: Tuple[WeightingRule, ...] = ()
    exclusive_groups: Tuple[ExclusivityGroup, ...] = ()

    def weighting_for(self, unit: Unit) -> WeightingRule | None:
        """First weighting rule whose special trait the unit carries."""
        for rule in self.weighting:
            if rule.trait in unit.traits:
                return rule
        return None

    def is_special_trait(self, trait: str) -> bool:
        return any(rule.trait == trait for rule in self.weighting)

    def group_of(self, unit_name: str) -> ExclusivityGroup | None:
        for group in self.exclusive_groups:
            if group.matches(unit_name):
                return group
        return None


# ========= Selection snapshot =========


@dataclass(slots=True, frozen=True)
class Selection:
    """Immutable selection snapshot.

    Attributes:
        units: Selected unit names in display order (no duplicates).
        emblems: Applied emblem trait names in display order (duplicates stack).
    """

    units: Tuple[str, ...] = ()
    emblems: Tuple[str, ...] = ()

    @property
    def unit_names(self) -> frozenset[str]:
        return frozenset(self.units)


@dataclass(slots=True, frozen=True)
class Rejection:
    """A non-fatal refusal of a selection change."""

    reason: str  # one of RejectionReason
    value: str
    message: str


class RejectionReason:
    UNKNOWN_UNIT = "unknown_unit"
    DUPLICATE_UNIT = "duplicate_unit"
    UNKNOWN_EMBLEM = "unknown_emblem"
    EMBLEM_NOT_SELECTED = "emblem_not_selected"
    UNIT_NOT_SELECTED = "unit_not_selected"


@dataclass(slots=True, frozen=True)
class SelectionUpdate:
    """Result of a selection change.

    `selection` is the next snapshot (unchanged when rejected). On rejection the
    raw candidate text is echoed in `pending_input` so it can be corrected.
    """

    selection: Selection
    rejection: Rejection | None = None
    pending_input: str = ""

    @property
    def accepted(self) -> bool:
        return self.rejection is None


# ========= Compositions / saved teams =========


@dataclass(slots=True, frozen=True)
class Composition:
    """A curated team composition."""

    name: str
    units: Tuple[str, ...]
    tier: str = ""
    strategy: str = ""


@dataclass(slots=True, frozen=True)
class SavedTeam:
    """A user-named team kept in memory by the caller."""

    id: str
    name: str
    units: Tuple[str, ...]
    created_at: str


@dataclass(slots=True, frozen=True)
class Dataset:
    """Parsed and validated static data for one game set."""

    units: Tuple[Unit, ...]
    synergy: SynergyData
    emblems: Tuple[str, ...] = ()
    compositions: Tuple[Composition, ...] = ()
    rules: SynergyRules = field(default_factory=SynergyRules)

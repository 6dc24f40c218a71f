# synergy_planner/io/parsers.py
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Tuple, TYPE_CHECKING

from ..defaults import MAX_UNIT_COST, MIN_UNIT_COST
from ..errors import DataIntegrityError
from ..models import (
    Composition,
    ExclusivityGroup,
    SynergyData,
    SynergyRules,
    Trait,
    Unit,
    WeightingRule,
)
from ..thresholds import validate_bonus_keys

if TYPE_CHECKING:
    from logging import Logger


def _require_keys(d: Dict[str, Any], keys: Iterable[str], where: str) -> None:
    missing = [k for k in keys if k not in d]
    if missing:
        raise DataIntegrityError(f"missing keys {missing}", where=where)


def _unwrap(data: Any, key: str, what: str) -> List[Any]:
    """Accept either {key: [...]} or a bare list."""
    if isinstance(data, dict) and key in data:
        data = data[key]
    if not isinstance(data, list):
        raise DataIntegrityError(f"{what} payload must be a list (or an object with '{key}')")
    return data


def _str_list(value: Any, where: str) -> Tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise DataIntegrityError("must be a list of strings", where=where)
    return tuple(value)


# ---------------------------- units ----------------------------

def parse_units(data: Any) -> List[Unit]:
    """Validate and convert the roster payload -> List[Unit]."""
    items = _unwrap(data, "units", "units")
    out: List[Unit] = []
    seen: set[str] = set()
    for i, item in enumerate(items):
        where = f"units[{i}]"
        if not isinstance(item, dict):
            raise DataIntegrityError("must be an object", where=where)
        _require_keys(item, ["name", "cost", "traits"], where)

        name = str(item["name"])
        if name in seen:
            raise DataIntegrityError(f"duplicate unit name {name!r}", where=where)
        seen.add(name)

        traits = _str_list(item["traits"], f"{where}.traits")
        if len(set(traits)) != len(traits):
            raise DataIntegrityError(f"unit {name!r} declares a trait twice: {list(traits)}", where=where)

        cost = item["cost"]
        if isinstance(cost, bool) or not isinstance(cost, int):
            raise DataIntegrityError(f"invalid cost {cost!r}", where=where)
        if not MIN_UNIT_COST <= cost <= MAX_UNIT_COST:
            raise DataIntegrityError(
                f"cost {cost} outside {MIN_UNIT_COST}-{MAX_UNIT_COST}", where=where
            )

        out.append(
            Unit(
                name=name,
                cost=cost,
                type=str(item.get("type", "")),
                traits=traits,
                triple_trait=bool(item.get("triple_trait", False)),
                ability=dict(item.get("ability") or {}),
                stats=dict(item.get("stats") or {}),
            )
        )
    return out


# ---------------------------- synergies ----------------------------

def _parse_traits(items: Any, kind: str) -> List[Trait]:
    if not isinstance(items, list):
        raise DataIntegrityError(f"'{kind}' must be a list")
    out: List[Trait] = []
    seen: set[str] = set()
    for i, item in enumerate(items):
        where = f"{kind}[{i}]"
        if not isinstance(item, dict):
            raise DataIntegrityError("must be an object", where=where)
        _require_keys(item, ["name"], where)
        name = str(item["name"])
        if name in seen:
            raise DataIntegrityError(f"duplicate trait name {name!r}", where=where)
        seen.add(name)

        bonuses = item.get("bonuses") or {}
        if not isinstance(bonuses, dict):
            raise DataIntegrityError("'bonuses' must be an object", where=where)
        champions = item.get("champions") or []
        out.append(
            Trait(
                name=name,
                bonuses=validate_bonus_keys(bonuses, where=f"{where} ({name})"),
                description=str(item.get("description", "")),
                champions=_str_list(champions, f"{where}.champions"),
            )
        )
    return out


def parse_synergies(data: Any) -> SynergyData:
    """Validate {origins: [...], classes: [...]} -> SynergyData."""
    if not isinstance(data, dict):
        raise DataIntegrityError("synergies payload must be an object with 'origins' and 'classes'")
    _require_keys(data, ["origins", "classes"], "synergies")
    origins = _parse_traits(data["origins"], "origins")
    classes = _parse_traits(data["classes"], "classes")

    clash = {t.name for t in origins} & {t.name for t in classes}
    if clash:
        raise DataIntegrityError(f"names used as both origin and class: {sorted(clash)}")
    return SynergyData(origins=tuple(origins), classes=tuple(classes))


# ---------------------------- emblems / compositions ----------------------------

def parse_emblems(data: Any, synergy: SynergyData, logger: "Logger | None" = None) -> List[str]:
    """Emblem vocabulary; names that match no trait are dropped with a warning."""
    if isinstance(data, dict) and "emblems" in data:
        data = data["emblems"]
    names = _str_list(data, "emblems")
    known = synergy.origin_names | synergy.class_names
    out: List[str] = []
    for name in names:
        if name not in known:
            if logger:
                logger.warning(f"⚠️ Emblem {name!r} matches no origin or class (skipped)")
            continue
        if name not in out:
            out.append(name)
    return out


def parse_compositions(data: Any) -> List[Composition]:
    items = _unwrap(data, "compositions", "compositions")
    out: List[Composition] = []
    for i, item in enumerate(items):
        where = f"compositions[{i}]"
        if not isinstance(item, dict):
            raise DataIntegrityError("must be an object", where=where)
        _require_keys(item, ["name", "units"], where)
        out.append(
            Composition(
                name=str(item["name"]),
                units=_str_list(item["units"], f"{where}.units"),
                tier=str(item.get("tier", "")),
                strategy=str(item.get("strategy", "")),
            )
        )
    return out


# ---------------------------- rules ----------------------------

def parse_rules(data: Any) -> SynergyRules:
    """{weighting: [{trait, origin_weight?, board_slots?}], exclusive_groups: [{name, prefix}]}"""
    if not isinstance(data, dict):
        raise DataIntegrityError("rules payload must be an object")

    weighting: List[WeightingRule] = []
    for i, item in enumerate(data.get("weighting") or []):
        where = f"rules.weighting[{i}]"
        if not isinstance(item, dict):
            raise DataIntegrityError("must be an object", where=where)
        _require_keys(item, ["trait"], where)
        try:
            rule = WeightingRule(
                trait=str(item["trait"]),
                origin_weight=int(item.get("origin_weight", 3)),
                board_slots=int(item.get("board_slots", 2)),
            )
        except (TypeError, ValueError):
            raise DataIntegrityError("weights must be integers", where=where)
        if rule.origin_weight < 1 or rule.board_slots < 1:
            raise DataIntegrityError("weights must be >= 1", where=where)
        weighting.append(rule)

    groups: List[ExclusivityGroup] = []
    for i, item in enumerate(data.get("exclusive_groups") or []):
        where = f"rules.exclusive_groups[{i}]"
        if not isinstance(item, dict):
            raise DataIntegrityError("must be an object", where=where)
        _require_keys(item, ["name", "prefix"], where)
        prefix = str(item["prefix"])
        if not prefix:
            raise DataIntegrityError("prefix must not be empty", where=where)
        groups.append(ExclusivityGroup.by_prefix(str(item["name"]), prefix))

    return SynergyRules(weighting=tuple(weighting), exclusive_groups=tuple(groups))

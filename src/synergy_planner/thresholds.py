"""Bonus-threshold helpers shared by the loader and the activation engine.

Threshold keys are stored the way datasets ship them: decimal strings ("2",
"4", ...). They are unordered in storage and always processed ascending.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Tuple

from .errors import DataIntegrityError


def parse_threshold(key: Any, *, where: str | None = None) -> int:
    """Parse a threshold key into a positive int, or raise DataIntegrityError."""
    if isinstance(key, bool):
        raise DataIntegrityError(f"threshold key {key!r} is not a positive integer", where=where)
    if isinstance(key, int):
        value = key
    elif isinstance(key, str) and key.isascii() and key.isdigit():
        value = int(key)
    else:
        raise DataIntegrityError(f"threshold key {key!r} is not a positive integer", where=where)
    if value <= 0:
        raise DataIntegrityError(f"threshold key {key!r} must be >= 1", where=where)
    return value


def ordered_thresholds(bonuses: Mapping[str, Any]) -> List[Tuple[int, str]]:
    """(numeric value, original key) pairs, ascending by value."""
    return sorted(((int(k), k) for k in bonuses), key=lambda pair: pair[0])


def reached_thresholds(bonuses: Mapping[str, Any], count: int) -> List[str]:
    """Keys whose numeric value is <= count, ascending."""
    return [key for value, key in ordered_thresholds(bonuses) if value <= count]


def next_threshold(bonuses: Mapping[str, Any], count: int) -> int | None:
    """Smallest threshold strictly above count, or None when all are reached."""
    for value, _ in ordered_thresholds(bonuses):
        if value > count:
            return value
    return None


def validate_bonus_keys(bonuses: Mapping[Any, Any], *, where: str) -> dict[str, str]:
    """Normalize a bonus table to {decimal key: description}.

    Raises DataIntegrityError on the first bad key, or when two keys collapse to
    the same numeric threshold (e.g. "2" and "02").
    """
    out: dict[str, str] = {}
    seen: set[int] = set()
    for key, desc in bonuses.items():
        value = parse_threshold(key, where=where)
        if value in seen:
            raise DataIntegrityError(f"duplicate threshold {value}", where=where)
        seen.add(value)
        out[str(key)] = str(desc)
    return out

# synergy_planner/io/loader.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Union, TYPE_CHECKING

from .sources import DataDirectory, DictSource, FileSource
from . import parsers
from ..defaults import (
    COMPOSITIONS_FILE,
    DEFAULT_EXCLUSIVE_GROUPS,
    DEFAULT_WEIGHTING_RULES,
    EMBLEMS_FILE,
    RULES_FILE,
    SYNERGIES_FILE,
    UNITS_FILE,
)
from ..errors import DataIntegrityError
from ..models import Composition, Dataset, SynergyData, SynergyRules, Unit

if TYPE_CHECKING:
    from logging import Logger

SourceLike = Union[str, Path, FileSource, DictSource]


class Loader:
    """
    Unified loader that works with both file paths and in-memory JSON.

    - Required files (units, synergies) raise when missing or corrupt.
    - Optional files (emblems, compositions, rules) fall back to empty data or
      built-in defaults with an info log.
    - Every integrity problem surfaces as DataIntegrityError here, at load
      time, so query-time code can assume a valid dataset.
    """

    def __init__(self, logger: "Logger | None" = None):
        self.logger = logger

    # ---------- Public API ----------
    def load_units(self, source: SourceLike) -> List[Unit]:
        data = self._coerce_to_data(source)
        out = parsers.parse_units(data)
        self._info(f"✅ Loaded {len(out)} units.")
        return out

    def load_synergies(self, source: SourceLike) -> SynergyData:
        data = self._coerce_to_data(source)
        synergy = parsers.parse_synergies(data)
        self._info(
            f"✅ Loaded {len(synergy.origins)} origins and {len(synergy.classes)} classes."
        )
        return synergy

    def load_emblems_or_default(self, source: SourceLike | None, synergy: SynergyData) -> List[str]:
        data = self._optional_data(source, "emblems")
        if data is None:
            return []
        out = parsers.parse_emblems(data, synergy, self.logger)
        self._info(f"✅ Loaded {len(out)} emblems.")
        return out

    def load_compositions_or_default(self, source: SourceLike | None) -> List[Composition]:
        data = self._optional_data(source, "compositions")
        if data is None:
            return []
        out = parsers.parse_compositions(data)
        self._info(f"✅ Loaded {len(out)} compositions.")
        return out

    def load_rules(self, source: SourceLike) -> SynergyRules:
        """Rules from an explicit source; a missing file raises FileNotFoundError."""
        rules = parsers.parse_rules(self._coerce_to_data(source))
        self._log_rules(rules)
        return rules

    def load_rules_or_default(self, source: SourceLike | None) -> SynergyRules:
        data = self._optional_data(source, "rules")
        if data is None:
            data = {
                "weighting": DEFAULT_WEIGHTING_RULES,
                "exclusive_groups": DEFAULT_EXCLUSIVE_GROUPS,
            }
        rules = parsers.parse_rules(data)
        self._log_rules(rules)
        return rules

    def load_dataset(self, data_dir: str | Path, *, rules: SourceLike | None = None) -> Dataset:
        """Load every dataset file from one directory.

        `rules` overrides <data_dir>/rules.json when given.
        """
        folder = DataDirectory(data_dir)
        if not folder.exists():
            self._error(f"❌ Data directory not found: {data_dir}")
            raise FileNotFoundError(str(data_dir))

        units = self.load_units(folder.source(UNITS_FILE))
        synergy = self.load_synergies(folder.source(SYNERGIES_FILE))
        self._check_roster(units, synergy)
        return Dataset(
            units=tuple(units),
            synergy=synergy,
            emblems=tuple(self.load_emblems_or_default(folder.source(EMBLEMS_FILE), synergy)),
            compositions=tuple(self.load_compositions_or_default(folder.source(COMPOSITIONS_FILE))),
            rules=(
                self.load_rules(rules)
                if rules is not None
                else self.load_rules_or_default(folder.source(RULES_FILE))
            ),
        )

    def dataset_from_payloads(
        self,
        *,
        units: Any,
        synergies: Any,
        emblems: Any = None,
        compositions: Any = None,
        rules: Any = None,
    ) -> Dataset:
        """Same as load_dataset, for JSON already in memory."""
        unit_list = self.load_units(DictSource(units, "units"))
        synergy = self.load_synergies(DictSource(synergies, "synergies"))
        self._check_roster(unit_list, synergy)
        return Dataset(
            units=tuple(unit_list),
            synergy=synergy,
            emblems=tuple(self.load_emblems_or_default(DictSource(emblems, "emblems"), synergy)),
            compositions=tuple(self.load_compositions_or_default(DictSource(compositions, "compositions"))),
            rules=self.load_rules_or_default(DictSource(rules, "rules")),
        )

    # ---------- Helpers ----------
    def _coerce_to_data(self, source: SourceLike) -> Any:
        if isinstance(source, (str, Path)):
            source = FileSource(source)
        if isinstance(source, FileSource):
            if not source.exists():
                self._error(f"❌ File not found: {source.describe()}")
                raise FileNotFoundError(source.describe())
            try:
                data = source.load_json()
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                self._error(f"❌ Not valid JSON: {source.describe()}")
                raise DataIntegrityError(f"not valid JSON ({e})", where=source.describe()) from e
            self._debug(f"📘 Loaded file: {source.describe()}")
            return data
        if isinstance(source, DictSource):
            return source.load_json()
        # raw dict/list fallback
        return source

    def _optional_data(self, source: SourceLike | None, name: str) -> Any:
        """Data for an optional file, or None when it is absent."""
        if source is None:
            self._info(f"ℹ️ No {name} provided, using built-in defaults.")
            return None
        if isinstance(source, (str, Path)):
            source = FileSource(source)
        if isinstance(source, (FileSource, DictSource)) and not source.exists():
            self._info(f"ℹ️ No {name} at {source.describe()}, using built-in defaults.")
            return None
        return self._coerce_to_data(source)

    def _log_rules(self, rules: SynergyRules) -> None:
        self._debug(
            "📘 Rules: special traits="
            + (", ".join(r.trait for r in rules.weighting) or "(none)")
            + "; exclusive groups="
            + (", ".join(g.name for g in rules.exclusive_groups) or "(none)")
        )

    def _check_roster(self, units: List[Unit], synergy: SynergyData) -> None:
        """Traits on units that name no origin/class are allowed, but noted."""
        known = synergy.origin_names | synergy.class_names
        stray = sorted({t for u in units for t in u.traits if t not in known})
        if stray:
            self._debug(f"ℹ️ Unit traits with no synergy entry (ignored): {', '.join(stray)}")

    # ---------- Logging wrappers ----------
    def _debug(self, msg: str) -> None:
        if self.logger:
            self.logger.debug(msg)

    def _info(self, msg: str) -> None:
        if self.logger:
            self.logger.info(msg)

    def _error(self, msg: str) -> None:
        if self.logger:
            self.logger.error(msg)

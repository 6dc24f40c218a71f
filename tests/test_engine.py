"""
Tests for the synergy activation engine and the unit count aggregator.
"""

from synergy_planner.engine import activate, count_units, trait_counts
from synergy_planner.models import SynergyRules, Unit, WeightingRule


def _names(result):
    return [s.name for s in result]


# ═══════════════════════════════════════════════════════════════════════════
# TRAIT COUNTING
# ═══════════════════════════════════════════════════════════════════════════

class TestTraitCounts:
    """Weighted per-trait counts."""

    def test_plain_unit_counts_once(self, dataset):
        counts = trait_counts({"UnitY"}, dataset.units, dataset.synergy)
        assert counts == {"OriginA": 1}

    def test_dragon_triples_other_origin(self, dataset):
        counts = trait_counts({"UnitX"}, dataset.units, dataset.synergy)
        assert counts["Dragon"] == 1
        assert counts["OriginA"] == 3

    def test_dragon_does_not_weight_classes(self, dataset):
        counts = trait_counts({"Dragonling"}, dataset.units, dataset.synergy)
        assert counts == {"Dragon": 1, "OriginB": 3, "ClassX": 1}

    def test_triple_trait_flag_does_not_weight(self, dataset):
        flagged = Unit(name="Flagged", cost=1, type="Fighter", traits=("OriginA",), triple_trait=True)
        counts = trait_counts({"Flagged"}, [flagged], dataset.synergy)
        assert counts["OriginA"] == 1

    def test_same_emblem_twice_adds_two(self, dataset):
        base = trait_counts({"UnitZ"}, dataset.units, dataset.synergy, [])
        stacked = trait_counts({"UnitZ"}, dataset.units, dataset.synergy, ["ClassX", "ClassX"])
        assert stacked["ClassX"] - base["ClassX"] == 2

    def test_unknown_names_ignored(self, dataset):
        assert trait_counts({"Ghost"}, dataset.units, dataset.synergy) == {}

    def test_custom_weighting_rule(self, dataset):
        rules = SynergyRules(weighting=(WeightingRule(trait="OriginB", origin_weight=2, board_slots=3),))
        counts = trait_counts({"UnitZ", "UnitX"}, dataset.units, dataset.synergy, rules=rules)
        # UnitZ carries OriginB: its OriginA counts twice. UnitX is ordinary now.
        assert counts["OriginB"] == 1
        assert counts["OriginA"] == 2 + 1
        assert counts["Dragon"] == 1


# ═══════════════════════════════════════════════════════════════════════════
# ACTIVATION
# ═══════════════════════════════════════════════════════════════════════════

class TestActivate:
    """Threshold activation."""

    def test_empty_selection(self, dataset):
        assert activate(set(), dataset.units, dataset.synergy, []) == []

    def test_dragon_scenario(self, dataset):
        """UnitX (Dragon, OriginA) + UnitY (OriginA) -> OriginA at 4."""
        result = activate({"UnitX", "UnitY"}, dataset.units, dataset.synergy, [])
        assert len(result) == 1
        origin_a = result[0]
        assert origin_a.name == "OriginA"
        assert origin_a.current_count == 4
        assert origin_a.activated_thresholds == ("2", "4")
        assert origin_a.is_origin is True
        # Dragon has no thresholds and is never emitted
        assert "Dragon" not in _names(result)
        assert count_units({"UnitX", "UnitY"}, dataset.units) == 3

    def test_below_lowest_threshold_not_emitted(self, dataset):
        assert activate({"UnitY"}, dataset.units, dataset.synergy, []) == []

    def test_threshold_one_stays_active_at_100(self, dataset):
        at_one = activate({"UnitW"}, dataset.units, dataset.synergy, [])
        origin_b = next(s for s in at_one if s.name == "OriginB")
        assert origin_b.current_count == 1
        assert origin_b.activated_thresholds == ("1",)

        at_hundred = activate({"UnitW"}, dataset.units, dataset.synergy, ["OriginB"] * 99)
        origin_b = next(s for s in at_hundred if s.name == "OriginB")
        assert origin_b.current_count == 100
        assert origin_b.activated_thresholds == ("1",)

    def test_thresholds_sorted_numerically(self, dataset):
        """'4' is stored before '2'; output is still ascending."""
        result = activate({"UnitX"}, dataset.units, dataset.synergy, ["OriginA"])
        assert result[0].activated_thresholds == ("2", "4")

    def test_origins_then_classes_order(self, dataset):
        result = activate({"UnitW", "UnitZ", "Nomsy (Red)"}, dataset.units, dataset.synergy, [])
        assert _names(result) == ["OriginB", "ClassX", "ClassY"]
        assert [s.is_origin for s in result] == [True, False, False]
        assert [s.current_count for s in result] == [3, 2, 1]

    def test_emblem_alone_can_activate(self, dataset):
        result = activate(set(), dataset.units, dataset.synergy, ["ClassY"])
        assert _names(result) == ["ClassY"]
        assert result[0].activated_thresholds == ("1",)

    def test_emblem_for_unknown_trait_ignored(self, dataset):
        assert activate(set(), dataset.units, dataset.synergy, ["Nope"]) == []

    def test_activation_is_monotonic(self, dataset):
        """Adding units never removes an activated threshold."""
        chosen: set[str] = set()
        previous: dict[str, tuple] = {}
        for unit in dataset.units:
            chosen.add(unit.name)
            current = {
                s.name: s.activated_thresholds
                for s in activate(chosen, dataset.units, dataset.synergy, [])
            }
            for name, thresholds in previous.items():
                assert set(thresholds) <= set(current[name])
            previous = current

    def test_inputs_not_mutated(self, dataset):
        selected = {"UnitX", "UnitY"}
        emblems = ["OriginA", "OriginA"]
        activate(selected, dataset.units, dataset.synergy, emblems)
        assert selected == {"UnitX", "UnitY"}
        assert emblems == ["OriginA", "OriginA"]


# ═══════════════════════════════════════════════════════════════════════════
# UNIT COUNT
# ═══════════════════════════════════════════════════════════════════════════

class TestCountUnits:
    """Board size."""

    def test_special_plus_ordinary(self, dataset):
        assert count_units({"UnitX", "UnitY"}, dataset.units) == 3

    def test_empty(self, dataset):
        assert count_units(set(), dataset.units) == 0

    def test_unknown_ignored(self, dataset):
        assert count_units({"UnitY", "Ghost"}, dataset.units) == 1

    def test_custom_board_slots(self, dataset):
        rules = SynergyRules(weighting=(WeightingRule(trait="ClassY", board_slots=4),))
        assert count_units({"UnitW", "UnitX"}, dataset.units, rules) == 4 + 1

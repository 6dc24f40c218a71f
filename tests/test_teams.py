"""
Tests for composition / saved-team filtering and loading.
"""

from datetime import datetime, timezone

import pytest

from synergy_planner.models import Composition, SavedTeam, Selection
from synergy_planner.teams import (
    filter_compositions,
    filter_saved_teams,
    find_by_name,
    load_composition,
    load_team,
    make_saved_team,
)


class TestFilters:
    """Name substring + required units."""

    def test_blank_filters_match_all(self, dataset):
        assert filter_compositions(dataset.compositions) == list(dataset.compositions)

    def test_name_substring_case_insensitive(self, dataset):
        found = filter_compositions(dataset.compositions, name_query="  RUSH ")
        assert [c.name for c in found] == ["Dragon Rush"]

    def test_every_required_unit(self, dataset):
        assert [c.name for c in filter_compositions(dataset.compositions, required_units=["UnitZ"])] == [
            "Twin Origins"
        ]
        assert filter_compositions(dataset.compositions, required_units=["UnitZ", "UnitX"]) == []

    def test_required_units_are_exact(self, dataset):
        assert filter_compositions(dataset.compositions, required_units=["unitz"]) == []

    def test_saved_teams_same_semantics(self):
        teams = [
            SavedTeam(id="1", name="Late game", units=("UnitX", "UnitY"), created_at="2024-01-01T00:00:00+00:00"),
            SavedTeam(id="2", name="Early", units=("UnitY",), created_at="2024-01-02T00:00:00+00:00"),
        ]
        assert [t.id for t in filter_saved_teams(teams, "game")] == ["1"]
        assert [t.id for t in filter_saved_teams(teams, required_units=["UnitY"])] == ["1", "2"]


class TestLoad:
    def test_find_by_name(self, dataset):
        assert find_by_name(dataset.compositions, "twin origins").name == "Twin Origins"
        assert find_by_name(dataset.compositions, "Twin") is None

    def test_load_composition_resolves_and_skips(self, dataset):
        rush = find_by_name(dataset.compositions, "Dragon Rush")
        selection, skipped = load_composition(rush, dataset.units)
        assert selection.units == ("UnitX", "UnitY")
        assert selection.emblems == ()
        assert skipped == ["Ghost"]

    def test_load_team(self, dataset):
        saved = Selection(units=("unitw", "Ghost", "Nomsy (Blue)"), emblems=("ClassY",))
        team = make_saved_team("Mine", saved, now=datetime(2024, 1, 1, tzinfo=timezone.utc))
        selection, skipped = load_team(team, dataset.units)
        assert selection.units == ("UnitW", "Nomsy (Blue)")
        assert selection.emblems == ()
        assert skipped == ["Ghost"]

    def test_unknown_only_composition_gives_empty_selection(self, dataset):
        ghosts = Composition(name="Ghosts", units=("Ghost", "Phantom"))
        selection, skipped = load_composition(ghosts, dataset.units)
        assert selection == Selection()
        assert skipped == ["Ghost", "Phantom"]


class TestMakeSavedTeam:
    def test_snapshot(self):
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        team = make_saved_team("  Mine ", Selection(units=("UnitX",), emblems=("OriginA",)), now=now)
        assert team.id == "1704067200000"
        assert team.name == "Mine"
        assert team.units == ("UnitX",)
        assert team.created_at.startswith("2024-01-01T00:00:00")

    def test_blank_name(self):
        with pytest.raises(ValueError):
            make_saved_team("   ", Selection())

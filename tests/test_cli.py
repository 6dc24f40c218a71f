"""
Tests for the click CLI, run against the sample dataset in data/.
"""

import json
import logging

import pytest
from click.testing import CliRunner

from apps.cli.main import cli


@pytest.fixture(autouse=True)
def fresh_logger():
    """setup_logger binds its handler to whatever stderr CliRunner swapped in."""
    yield
    logger = logging.getLogger("synergy_planner")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


@pytest.fixture
def run(repo_data_dir):
    runner = CliRunner()

    def _run(*args, data_dir=repo_data_dir):
        return runner.invoke(cli, ["--data-dir", str(data_dir), *args])

    return _run


class TestActivate:
    def test_dragon_counts_three_and_takes_two_slots(self, run):
        result = run("activate", "-u", "shyvana", "-u", "SETT", "-u", "Tristana")
        assert result.exit_code == 0, result.output
        assert "Board size: 4" in result.output
        assert "Ragewing [origin]: count 5  thresholds=['3']  (next at 6)" in result.output
        assert "Gain 15% bonus attack speed while furious." in result.output

    def test_no_bonus_text(self, run):
        result = run("activate", "-u", "Shyvana", "-u", "Sett", "--no-bonus-text")
        assert result.exit_code == 0, result.output
        assert "Ragewing [origin]: count 4" in result.output
        assert "while furious" not in result.output

    def test_empty_selection(self, run):
        result = run("activate")
        assert result.exit_code == 0, result.output
        assert "Board size: 0" in result.output
        assert "No active synergies." in result.output

    def test_rejections_reported(self, run):
        result = run("activate", "-u", "Teemo", "-e", "Dragon")
        assert result.exit_code == 0
        assert '"Teemo" is not a valid unit name' in result.output
        assert '"Dragon" is not a valid emblem name' in result.output

    def test_nomsy_variants_exclusive(self, run):
        result = run("activate", "-u", "Nomsy (Mage)", "-u", "nomsy (evoker)")
        assert result.exit_code == 0, result.output
        assert "Units: Nomsy (Evoker)" in result.output

    def test_emblems_stack(self, run):
        result = run("activate", "-u", "Karma", "-e", "Mage", "-e", "Mage")
        assert result.exit_code == 0, result.output
        assert "Mage [class]: count 3  thresholds=['3']  (next at 5)" in result.output

    def test_from_composition(self, run):
        result = run("activate", "-c", "ragewing fury", "--no-bonus-text")
        assert result.exit_code == 0, result.output
        assert "Board size: 5" in result.output
        assert "Ragewing [origin]: count 5" in result.output

    def test_unknown_composition(self, run):
        result = run("activate", "-c", "Nope")
        assert result.exit_code == 2
        assert "unknown composition" in result.output


class TestGrid:
    def test_origin_row(self, run):
        result = run("grid", "--origin", "Ragewing", "-u", "sett")
        assert result.exit_code == 0, result.output
        assert "Ragewing / Guardian" in result.output
        assert "Sett (1) ✓" in result.output
        assert "Shyvana* (4)" in result.output
        assert "Jade / Guardian" not in result.output

    def test_show_empty(self, run):
        result = run("grid", "--origin", "Dragon", "--class", "Mage", "--show-empty")
        assert result.exit_code == 0, result.output
        assert "Dragon / Mage" in result.output
        assert "(empty)" in result.output

    def test_no_match(self, run):
        result = run("grid", "--origin", "Nope")
        assert result.exit_code == 0
        assert "(no matching cells)" in result.output


class TestCompositions:
    def test_filter_by_unit(self, run):
        result = run("compositions", "-u", "shyvana")
        assert result.exit_code == 0, result.output
        assert "Compositions (1)" in result.output
        assert "Ragewing Fury [A]" in result.output

    def test_filter_by_name(self, run):
        result = run("compositions", "--name", "MAGES")
        assert result.exit_code == 0, result.output
        assert "Astral Mages" in result.output
        assert "Jade Evokers" not in result.output


class TestValidate:
    def test_summary(self, run):
        result = run("validate")
        assert result.exit_code == 0, result.output
        assert "Dataset OK" in result.output
        assert "Units: 15" in result.output
        assert "Special traits: Dragon" in result.output

    def test_corrupt_dataset(self, run, tmp_path, payloads):
        payloads["synergies"]["origins"][1]["bonuses"] = {"two": "broken"}
        (tmp_path / "units.json").write_text(json.dumps(payloads["units"]), encoding="utf-8")
        (tmp_path / "synergies.json").write_text(json.dumps(payloads["synergies"]), encoding="utf-8")
        result = run("validate", data_dir=tmp_path)
        assert result.exit_code == 1
        assert "threshold key 'two'" in result.output

    def test_missing_required_file(self, run, tmp_path):
        result = run("validate", data_dir=tmp_path)
        assert result.exit_code == 1
        assert "units.json" in result.output

    def test_invalid_json(self, run, tmp_path, payloads):
        (tmp_path / "units.json").write_text("{not json", encoding="utf-8")
        (tmp_path / "synergies.json").write_text(json.dumps(payloads["synergies"]), encoding="utf-8")
        result = run("validate", data_dir=tmp_path)
        assert result.exit_code == 1
        assert not isinstance(result.exception, ValueError)
        assert "not valid JSON" in result.output

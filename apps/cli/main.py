# apps/cli/main.py
"""Command-line interface for the synergy planner"""

from __future__ import annotations

from typing import Any, Dict, Tuple

import click

from synergy_planner.errors import DataIntegrityError
from synergy_planner.io.loader import Loader
from synergy_planner.planner import SynergyPlanner
from synergy_planner.reporter import ReportOptions, SynergyReporter
from synergy_planner.utils import setup_logger


# ---------- Root group: loads everything once ----------
@click.group()
@click.option(
    "--data-dir",
    type=click.Path(exists=True, file_okay=False, readable=True, path_type=str),
    default="data",
    show_default=True,
    help="Folder holding units.json and synergies.json (emblems/compositions/rules optional).",
)
@click.option(
    "--rules",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=str),
    default=None,
    show_default=True,
    help="Optional rules JSON overriding <data-dir>/rules.json.",
)
@click.option("--verbose", is_flag=True, help="Enable detailed debug logs.")
@click.pass_context
def cli(ctx: click.Context, data_dir: str, rules: str | None, verbose: bool):
    """🐉 Synergy Planner"""
    logger = setup_logger(verbose)
    loader = Loader(logger)

    logger.info("🚀 Loading dataset...")
    try:
        dataset = loader.load_dataset(data_dir, rules=rules)
    except (DataIntegrityError, FileNotFoundError) as e:
        logger.error(f"❌ Dataset rejected: {e}")
        raise click.ClickException(str(e))

    # Stash the planner for all subcommands
    ctx.obj = {
        "logger": logger,
        "planner": SynergyPlanner(dataset=dataset, logger=logger),
    }


# ---------- Subcommand: evaluate a board ----------
@cli.command("activate")
@click.option("--unit", "-u", "units", multiple=True, help="Unit to select (repeatable, case-insensitive).")
@click.option("--emblem", "-e", "emblems", multiple=True, help="Emblem to apply (repeatable, stacks).")
@click.option("--composition", "-c", default=None, help="Start from a named composition.")
@click.option("--no-bonus-text", is_flag=True, help="Hide bonus descriptions.")
@click.pass_obj
def cmd_activate(
    shared: Dict[str, Any],
    units: Tuple[str, ...],
    emblems: Tuple[str, ...],
    composition: str | None,
    no_bonus_text: bool,
):
    """Show active synergies and board size for a selection."""
    planner: SynergyPlanner = shared["planner"]

    start = None
    if composition:
        comp = planner.find_composition(composition)
        if comp is None:
            raise click.BadParameter(f"unknown composition {composition!r}", param_hint="--composition")
        start = planner.load_composition(comp)

    selection, rejected = planner.build_selection(units, emblems, start=start)
    for update in rejected:
        click.secho(f"⚠️ {update.rejection.message}", fg="yellow", err=True)

    SynergyReporter().emit_board(
        state=planner.evaluate(selection),
        selection=selection,
        synergy=planner.dataset.synergy,
        options=ReportOptions(show_bonus_text=not no_bonus_text),
    )


# ---------- Subcommand: grid ----------
@cli.command("grid")
@click.option("--origin", default=None, help="Only show this origin's row.")
@click.option("--class", "class_name", default=None, help="Only show this class's column.")
@click.option("--show-empty", is_flag=True, help="Include empty cells.")
@click.option("--highlight", "-u", multiple=True, help="Mark these units in the grid.")
@click.pass_obj
def cmd_grid(
    shared: Dict[str, Any],
    origin: str | None,
    class_name: str | None,
    show_empty: bool,
    highlight: Tuple[str, ...],
):
    """Print the origin × class grid."""
    planner: SynergyPlanner = shared["planner"]
    selection, _ = planner.build_selection(highlight)
    SynergyReporter().emit_grid(
        planner.grid,
        options=ReportOptions(
            show_empty_cells=show_empty,
            origin=origin,
            class_name=class_name,
            highlight=selection.unit_names,
        ),
    )


# ---------- Subcommand: compositions ----------
@cli.command("compositions")
@click.option("--name", default="", help="Case-insensitive name filter.")
@click.option("--unit", "-u", "units", multiple=True, help="Require this unit (repeatable).")
@click.pass_obj
def cmd_compositions(shared: Dict[str, Any], name: str, units: Tuple[str, ...]):
    """List compositions, optionally filtered."""
    planner: SynergyPlanner = shared["planner"]
    SynergyReporter().emit_compositions(planner.compositions(name, list(units)))


# ---------- Subcommand: validate ----------
@cli.command("validate")
@click.pass_obj
def cmd_validate(shared: Dict[str, Any]):
    """Load the dataset and print a summary."""
    planner: SynergyPlanner = shared["planner"]
    SynergyReporter().emit_summary(planner.dataset)


def main() -> None:
    cli(prog_name="synergy-planner")


if __name__ == "__main__":
    main()

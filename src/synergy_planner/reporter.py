"""Console report helper for the CLI.

Usage:
    from .reporter import SynergyReporter, ReportOptions

    reporter = SynergyReporter()
    reporter.emit_board(state=planner.evaluate(selection), selection=selection,
                        synergy=dataset.synergy)
    reporter.emit_grid(planner.grid, options=ReportOptions(show_empty_cells=False))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

import click

from .grid import occupied_cells
from .models import BoardState, Composition, Dataset, GridData, Selection, SynergyData
from .thresholds import next_threshold
from .utils import cost_color


# ------------------------------- options -------------------------------

@dataclass
class ReportOptions:
    show_empty_cells: bool = False
    show_bonus_text: bool = True
    origin: Optional[str] = None
    class_name: Optional[str] = None
    highlight: frozenset[str] = frozenset()


# ----------------------------- reporter -----------------------------

class SynergyReporter:
    """Uniform printer for boards, grids and composition lists."""

    def __init__(self, *, use_colors: bool = True):
        self.use_colors = use_colors

    # ---- public ----
    def emit_board(
        self,
        *,
        state: BoardState,
        selection: Selection,
        synergy: SynergyData,
        options: Optional[ReportOptions] = None,
    ) -> None:
        opts = options or ReportOptions()
        traits = {t.name: t for t in synergy.all_traits()}

        self._print_header("✅ Board evaluated", color="green", bold=True)
        self._print_kv("🧍 Units", ", ".join(selection.units) or "(none)")
        self._print_kv("🎖️ Emblems", ", ".join(selection.emblems) or "(none)")
        self._print_kv("📐 Board size", str(state.unit_count), strong=True)
        self._println("")

        if not state.synergies:
            self._print_line("No active synergies.", color="yellow")
            return

        self._print_header("Active synergies:", color="yellow")
        for s in state.synergies:
            kind = "origin" if s.is_origin else "class"
            trait = traits[s.name]
            nxt = next_threshold(trait.bonuses, s.current_count)
            tail = f"  (next at {nxt})" if nxt is not None else "  (max)"
            self._println(
                f"  • {s.name} [{kind}]: count {s.current_count}  "
                f"thresholds={list(s.activated_thresholds)}{tail}"
            )
            if opts.show_bonus_text:
                for key in s.activated_thresholds:
                    self._println(f"      {key}: {trait.bonuses[key]}")
        self._println("")

    def emit_grid(self, grid: GridData, *, options: Optional[ReportOptions] = None) -> None:
        opts = options or ReportOptions()
        self._print_header("🗺️ Origin × Class grid", color="blue", bold=True)

        if opts.show_empty_cells:
            cells = [(o, c, cell) for o, row in grid.items() for c, cell in row.items()]
        else:
            cells = occupied_cells(grid)

        shown = 0
        for origin, cls, cell in cells:
            if opts.origin and origin != opts.origin:
                continue
            if opts.class_name and cls != opts.class_name:
                continue
            shown += 1
            self._print_line(f"{origin} / {cls}", color="blue")
            if not cell.units:
                self._println("  (empty)")
            for unit in cell.units:
                marker = " ✓" if unit.name in opts.highlight else ""
                star = "*" if unit.triple_trait else ""
                self._print_line(f"  • {unit.name}{star} ({unit.cost}){marker}", color=cost_color(unit.cost))
        if shown == 0:
            self._println("(no matching cells)")
        self._println("")

    def emit_compositions(self, compositions: Iterable[Composition]) -> None:
        rows: List[Composition] = list(compositions)
        self._print_header(f"📚 Compositions ({len(rows)})", color="blue", bold=True)
        for comp in rows:
            tier = f" [{comp.tier}]" if comp.tier else ""
            self._print_line(f"{comp.name}{tier}", color="yellow")
            self._println(f"  units: {', '.join(comp.units)}")
            if comp.strategy:
                self._println(f"  strategy: {comp.strategy}")
        self._println("")

    def emit_summary(self, dataset: Dataset) -> None:
        self._print_header("✅ Dataset OK", color="green", bold=True)
        self._print_kv("• Units", str(len(dataset.units)))
        self._print_kv("• Origins", str(len(dataset.synergy.origins)))
        self._print_kv("• Classes", str(len(dataset.synergy.classes)))
        self._print_kv("• Emblems", str(len(dataset.emblems)))
        self._print_kv("• Compositions", str(len(dataset.compositions)))
        special = ", ".join(r.trait for r in dataset.rules.weighting) or "(none)"
        self._print_kv("• Special traits", special)

    # ---- printing primitives ----
    def _print_header(self, text: str, *, color: Optional[str] = None, bold: bool = False) -> None:
        if self.use_colors and color:
            click.secho(text, fg=color, bold=bold)
        else:
            self._println(text)

    def _print_kv(self, k: str, v: str, *, strong: bool = False) -> None:
        line = f"{k}: {v}"
        if self.use_colors and strong:
            click.secho(line, fg="green", bold=True)
        else:
            self._println(line)

    def _print_line(self, text: str, *, color: Optional[str] = None) -> None:
        if self.use_colors and color:
            click.secho(text, fg=color)
        else:
            self._println(text)

    def _println(self, text: str = "") -> None:
        click.echo(text)

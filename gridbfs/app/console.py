# gridbfs/app/console.py
"""Terminal rendering of a grid with rich markup, plus the headless runner."""

from typing import Optional

from rich.console import Console

from gridbfs.core.scheduler import StepScheduler
from gridbfs.core.session import SearchSession
from gridbfs.core.types import CellKind, Grid, SearchResult

# -----------------------------
# Cell glyphs
# -----------------------------
GLYPHS = {
    CellKind.FREE:        "[dim].[/dim]",
    CellKind.BLOCKED:     "[grey30]#[/grey30]",
    CellKind.SOURCE:      "[bold red]S[/bold red]",
    CellKind.DESTINATION: "[bold green]D[/bold green]",
    CellKind.VISITING:    "[grey50]o[/grey50]",
    CellKind.PATH:        "[yellow]*[/yellow]",
}


def render_grid(grid: Grid, console: Optional[Console] = None) -> None:
    console = console or Console(markup=True)
    for y in range(grid.size):
        row = [GLYPHS[grid.classify((x, y))] for x in range(grid.size)]
        console.print(" ".join(row))


def summary_line(result: Optional[SearchResult], steps: int) -> str:
    if result is None:
        return f"[yellow]stopped[/yellow] after {steps} steps"
    if result.found:
        return f"[green]found[/green] a path of {result.edges} edges in {steps} steps"
    return f"[red]unreachable[/red]: frontier exhausted after {steps} steps"


def run_headless(session: SearchSession, scheduler: StepScheduler,
                 console: Optional[Console] = None) -> Optional[SearchResult]:
    """Drive the search to the end at the scheduler's cadence, then print it."""
    console = console or Console(markup=True)
    last = scheduler.run()
    render_grid(session.grid, console)
    steps = last.metrics.get("steps", 0) if last else 0
    console.print(summary_line(session.result, steps))
    return session.result

"""Rich console summary of a finished analysis."""

from typing import Optional

from rich.console import Console
from rich.table import Table

from nmgraph.graph.builder import BuildResult


def print_summary(result: BuildResult, console: Optional[Console] = None) -> None:
    """Print module, edge and truncation counts for ``result``."""
    console = console or Console()
    stats = result.graph.stats()

    table = Table(title="Dependency analysis", show_header=False, title_justify="left")
    table.add_column("metric", style="bold")
    table.add_column("value", justify="right")
    table.add_row("Root", result.root)
    table.add_row("Dependencies", str(stats["dependencies"]))
    table.add_row("Dev-only modules", str(stats["dev_modules"]))
    table.add_row("Require edges", str(stats["edges"]))
    table.add_row("Elapsed", f"{result.elapsed:.2f}s")
    console.print(table)

    if result.depth_limit_reached:
        console.print(
            f"[yellow]max recursive depth ({result.max_depth}) reached: "
            f"{len(result.truncated)} module(s) were not expanded.[/yellow]"
        )

"""Report commands: CSV export of selected holdings."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ...core import analytics
from ...core.report import write_csv_report
from ..state import get_store, money, pct

app = typer.Typer(help="Export reports")
console = Console()


@app.command("csv")
def csv_report(
    asset_ids: Optional[list[str]] = typer.Option(
        None, "--asset", "-a", help="Asset ID to include (repeatable; default: all)"
    ),
    output: Path = typer.Option(Path("."), "--output", "-o", help="Output directory"),
):
    """Write a CSV report and print a summary of the selection."""
    assets = get_store().assets
    if not assets:
        console.print("[yellow]No assets in your portfolio. Add assets to generate reports.[/yellow]")
        raise typer.Exit(1)

    selected = analytics.filter_assets(assets, asset_ids)
    known = {a.id for a in assets}
    unknown = sorted(set(asset_ids or ()) - known)
    if unknown:
        console.print(f"[yellow]Ignoring unknown asset ID(s): {', '.join(unknown)}[/yellow]")
    if not selected:
        console.print("[red]No assets selected for the report.[/red]")
        raise typer.Exit(1)

    path = write_csv_report(selected, output)
    stats = analytics.performance_stats(selected)

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Label", style="dim")
    table.add_column("Value", justify="right")
    table.add_row("Assets selected", str(len(selected)))
    table.add_row("Total Value", money(analytics.total_value(selected)))
    table.add_row("Of total portfolio", f"{analytics.selection_share(selected, assets):.2f}%")
    table.add_row("Average change", pct(stats.avg_change))
    if stats.best_performer:
        b = stats.best_performer
        table.add_row("Best performer", f"{b.name} ({b.symbol}) {pct(b.change)}")
    if stats.worst_performer:
        w = stats.worst_performer
        table.add_row("Worst performer", f"{w.name} ({w.symbol}) {pct(w.change)}")

    console.print(f"\n[green]Report written to {path}[/green]\n")
    console.print(table)
    console.print()

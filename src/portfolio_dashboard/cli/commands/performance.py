"""Performance commands: value series and summary metrics."""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ...core import analytics
from ...core.exceptions import PortfolioDashboardError
from ..state import get_store, money, pct

app = typer.Typer(help="Performance history")
console = Console()


@app.command("show")
def show(
    asset_id: Optional[str] = typer.Option(None, "--asset", "-a", help="Asset ID (default: entire portfolio)"),
):
    """Show the daily value series with average, high, low and volatility."""
    store = get_store()
    if asset_id is None:
        title = "Portfolio Performance"
        series = store.generate_performance_data()
    else:
        try:
            asset = store.get_asset(asset_id)
        except PortfolioDashboardError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)
        title = f"{asset.name} ({asset.symbol})"
        series = analytics.asset_performance_series(asset)

    if not series:
        console.print("[yellow]No performance data.[/yellow]")
        return

    table = Table(title=f"{title} — {len(series)} days")
    table.add_column("Date")
    table.add_column("Value", justify="right")
    for point in series:
        table.add_row(point.date.isoformat(), money(point.value))
    console.print(table)

    m = analytics.performance_metrics(series)
    summary = Table(show_header=False, box=None, padding=(0, 2))
    summary.add_column("Label", style="dim")
    summary.add_column("Value", justify="right")
    summary.add_row("Change", pct(analytics.overall_change(series)))
    summary.add_row("Average Value", money(m.average))
    summary.add_row("Highest Value", money(m.highest))
    summary.add_row("Lowest Value", money(m.lowest))
    summary.add_row("Volatility", f"{m.volatility:.2f}%")
    console.print(summary)
    console.print()

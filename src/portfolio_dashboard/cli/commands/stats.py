"""Statistics commands."""

import typer
from rich.console import Console
from rich.table import Table

from ...core import analytics
from ..state import get_store, money, pct

app = typer.Typer(help="Portfolio statistics")
console = Console()


@app.command("summary")
def summary():
    """Show total value, overall change, per-type totals and top performers."""
    store = get_store()
    assets = store.assets
    if not assets:
        console.print("[yellow]No holdings.[/yellow]")
        return

    change = analytics.overall_change(store.generate_performance_data())
    console.print(f"\n[bold]Total Portfolio Value: {money(store.total_value)}[/bold]  {pct(change)} overall\n")

    values = analytics.value_by_type(assets)
    counts = analytics.count_by_type(assets)
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Type", style="dim")
    table.add_column("Value", justify="right")
    table.add_column("Holdings", justify="right")
    for t, value in values.items():
        table.add_row(t.label, money(value), f"{counts[t]} holdings")
    console.print(table)

    console.print("\n[bold]Top Performers[/bold]")
    for a in analytics.top_performers(assets):
        console.print(f"  {a.name} ({a.symbol})  {money(a.value)}  {pct(a.change)}")
    console.print()


@app.command("allocation")
def allocation():
    """Show allocation breakdown by asset type."""
    assets = get_store().assets
    alloc = analytics.allocation_by_type(assets)
    if not alloc:
        console.print("[yellow]No holdings.[/yellow]")
        return

    table = Table(title="Allocation by Type")
    table.add_column("Asset Type", style="bold")
    table.add_column("Allocation %", justify="right")
    table.add_column("Value", justify="right")

    for s in analytics.allocation_slices(assets):
        table.add_row(f"[{s.color}]■[/] {s.label}", f"{alloc[s.asset_type]:.2f}%", money(s.value))

    table.add_row("[bold]TOTAL[/bold]", f"[bold]{sum(alloc.values()):.2f}%[/bold]", f"[bold]{money(analytics.total_value(assets))}[/bold]")  # noqa: E501
    console.print(table)

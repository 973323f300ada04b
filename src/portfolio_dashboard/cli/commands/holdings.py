"""Holdings commands: view and edit the session store."""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ...core import analytics
from ...core.exceptions import PortfolioDashboardError
from ...core.models import AssetType
from ...core.validation import asset_type as parse_asset_type
from ..state import get_store, money, pct

app = typer.Typer(help="View and edit holdings")
console = Console()

ASSET_TYPES = [t.value for t in AssetType]


def _fail(e: Exception):
    console.print(f"[red]{e}[/red]")
    raise typer.Exit(1)


def _print_holdings(assets: list, title: str = "Holdings"):
    if not assets:
        console.print("[yellow]No holdings.[/yellow]")
        return

    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Symbol")
    table.add_column("Type")
    table.add_column("Shares", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Value", justify="right")
    table.add_column("Change", justify="right")

    for a in assets:
        table.add_row(
            a.id,
            a.name,
            a.symbol,
            a.asset_type.label,
            f"{a.shares:,}",
            money(a.price),
            money(a.value),
            pct(a.change),
        )

    table.add_row("", "[bold]TOTAL[/bold]", "", "", "", "", f"[bold]{money(analytics.total_value(assets))}[/bold]", "")  # noqa: E501
    console.print(table)


@app.command("list")
def list_holdings(
    asset_type: Optional[str] = typer.Option(
        None, "--type", "-t", help=f"Only show one type: {', '.join(ASSET_TYPES)}"
    ),
):
    """List all holdings with value and recent change."""
    assets = get_store().assets
    if asset_type:
        try:
            wanted = parse_asset_type(asset_type)
        except PortfolioDashboardError as e:
            _fail(e)
        assets = [a for a in assets if a.asset_type == wanted]
    _print_holdings(assets)


@app.command("show")
def show(asset_id: str = typer.Argument(..., help="Asset ID")):
    """Show one holding and its recent price history."""
    try:
        a = get_store().get_asset(asset_id)
    except PortfolioDashboardError as e:
        _fail(e)

    console.print(f"\n[bold]{a.name}[/bold] ({a.symbol})  [dim]{a.asset_type.label}[/dim]")
    console.print(f"  Shares: {a.shares:,}")
    console.print(f"  Price:  {money(a.price)}  {pct(a.change)}")
    console.print(f"  [bold]Value:  {money(a.value)}[/bold]")
    if a.history:
        first, last = a.history[0], a.history[-1]
        console.print(
            f"  History: {first.date} {money(first.value)} → {last.date} {money(last.value)} "
            f"({len(a.history)} days)"
        )
    console.print()


@app.command("add")
def add(
    name: str = typer.Argument(..., help="Asset name (e.g. 'Apple Inc.')"),
    symbol: str = typer.Argument(..., help="Ticker symbol"),
    asset_type: str = typer.Argument(..., help=f"Asset type: {', '.join(ASSET_TYPES)}"),
    shares: str = typer.Argument(..., help="Number of shares"),
    price: str = typer.Argument(..., help="Price per share"),
    change: str = typer.Option("0", "--change", help="Recent change in percent"),
):
    """Add a holding to this session's portfolio."""
    store = get_store()
    try:
        a = store.add_asset(name, symbol, asset_type, shares, price, change=change)
    except PortfolioDashboardError as e:
        _fail(e)
    console.print(f"[green]Added {a.name} ({a.symbol}) with ID {a.id}[/green]")
    _print_holdings(store.assets)


@app.command("update")
def update(
    asset_id: str = typer.Argument(..., help="Asset ID"),
    name: Optional[str] = typer.Option(None, "--name", help="Asset name"),
    symbol: Optional[str] = typer.Option(None, "--symbol", "-s", help="Ticker symbol"),
    asset_type: Optional[str] = typer.Option(None, "--type", "-t", help=f"Asset type: {', '.join(ASSET_TYPES)}"),
    shares: Optional[str] = typer.Option(None, "--shares", help="Number of shares"),
    price: Optional[str] = typer.Option(None, "--price", "-p", help="Price per share"),
    change: Optional[str] = typer.Option(None, "--change", help="Recent change in percent"),
):
    """Edit a holding in this session's portfolio."""
    options = {
        "name": name,
        "symbol": symbol,
        "asset_type": asset_type,
        "shares": shares,
        "price": price,
        "change": change,
    }
    fields = {k: v for k, v in options.items() if v is not None}
    if not fields:
        console.print("[yellow]Nothing to update. Pass at least one option.[/yellow]")
        raise typer.Exit(1)

    store = get_store()
    try:
        a = store.update_asset(asset_id, **fields)
    except PortfolioDashboardError as e:
        _fail(e)
    console.print(f"[green]Updated {a.name} ({a.symbol})[/green]")
    _print_holdings(store.assets)


@app.command("remove")
def remove(asset_id: str = typer.Argument(..., help="Asset ID")):
    """Remove a holding from this session's portfolio."""
    store = get_store()
    if not store.remove_asset(asset_id):
        console.print(f"[red]Asset '{asset_id}' not found[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Removed asset {asset_id}[/green]")
    _print_holdings(store.assets)

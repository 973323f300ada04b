"""Investments management commands (persisted table)."""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ...core.exceptions import PortfolioDashboardError
from ...core.models import Investment, InvestmentType
from ...core.validation import investment_type, to_date
from ...data.repositories.investments_repo import InvestmentsRepository
from ..state import money

app = typer.Typer(help="Manage recorded investments")
console = Console()
repo = InvestmentsRepository()

INVESTMENT_TYPES = [t.value for t in InvestmentType]


def _fail(e: Exception):
    console.print(f"[red]Error: {e}[/red]")
    raise typer.Exit(1)


@app.command("list")
def list_investments():
    """List recorded investments, newest first."""
    try:
        investments = repo.list_all()
    except PortfolioDashboardError as e:
        _fail(e)

    if not investments:
        console.print("[yellow]No investments yet. Add one with: pdash investments add <NAME> <TYPE> <QTY> <PRICE> <DATE>[/yellow]")  # noqa: E501
        return

    table = Table(title="My Investments")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Symbol")
    table.add_column("Type")
    table.add_column("Quantity", justify="right")
    table.add_column("Purchase", justify="right")
    table.add_column("Date")
    table.add_column("Current", justify="right")
    table.add_column("P&L", justify="right")

    for inv in investments:
        if inv.current_price is not None:
            color = "green" if inv.unrealized_pnl >= 0 else "red"
            current_str = money(inv.current_price)
            pnl_str = f"[{color}]{money(inv.unrealized_pnl)}[/{color}]"
        else:
            current_str = "Not set"
            pnl_str = "—"
        table.add_row(
            str(inv.id),
            inv.asset_name,
            inv.symbol or "—",
            inv.asset_type.value.replace("_", " ").upper(),
            f"{inv.quantity:,}",
            money(inv.purchase_price),
            inv.purchase_date.isoformat(),
            current_str,
            pnl_str,
        )
    console.print(table)


@app.command("add")
def add(
    asset_name: str = typer.Argument(..., help="Asset name (e.g. 'Apple Inc.')"),
    asset_type: str = typer.Argument(..., help=f"Asset type: {', '.join(INVESTMENT_TYPES)}"),
    quantity: str = typer.Argument(..., help="Quantity held"),
    purchase_price: str = typer.Argument(..., help="Purchase price per unit"),
    purchase_date: str = typer.Argument(..., help="Purchase date YYYY-MM-DD"),
    symbol: str = typer.Option("", "--symbol", "-s", help="Ticker symbol"),
    current_price: Optional[str] = typer.Option(None, "--current-price", "-c", help="Current price per unit"),
    notes: str = typer.Option("", "--notes", "-n", help="Free-form notes"),
):
    """Record a new investment."""
    try:
        inv = repo.create(Investment(
            asset_name=asset_name,
            asset_type=investment_type(asset_type),
            quantity=quantity,
            purchase_price=purchase_price,
            purchase_date=to_date(purchase_date, "purchase_date"),
            symbol=symbol,
            current_price=current_price,
            notes=notes,
        ))
    except PortfolioDashboardError as e:
        _fail(e)
    console.print(f"[green]Investment added successfully (ID: {inv.id})[/green]")


@app.command("update")
def update(
    investment_id: int = typer.Argument(..., help="Investment ID"),
    asset_name: Optional[str] = typer.Option(None, "--name", help="Asset name"),
    asset_type: Optional[str] = typer.Option(None, "--type", "-t", help=f"Asset type: {', '.join(INVESTMENT_TYPES)}"),
    quantity: Optional[str] = typer.Option(None, "--quantity", "-q", help="Quantity held"),
    purchase_price: Optional[str] = typer.Option(None, "--purchase-price", "-p", help="Purchase price per unit"),
    purchase_date: Optional[str] = typer.Option(None, "--date", "-d", help="Purchase date YYYY-MM-DD"),
    symbol: Optional[str] = typer.Option(None, "--symbol", "-s", help="Ticker symbol"),
    current_price: Optional[str] = typer.Option(None, "--current-price", "-c", help="Current price per unit"),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Free-form notes"),
):
    """Update fields of an existing investment."""
    try:
        inv = repo.find(investment_id)
        if asset_name is not None:
            inv.asset_name = asset_name
        if asset_type is not None:
            inv.asset_type = investment_type(asset_type)
        if quantity is not None:
            inv.quantity = quantity
        if purchase_price is not None:
            inv.purchase_price = purchase_price
        if purchase_date is not None:
            inv.purchase_date = to_date(purchase_date, "purchase_date")
        if symbol is not None:
            inv.symbol = symbol
        if current_price is not None:
            inv.current_price = current_price
        if notes is not None:
            inv.notes = notes
        repo.update(inv)
    except PortfolioDashboardError as e:
        _fail(e)
    console.print(f"[green]Investment {investment_id} updated successfully[/green]")


@app.command("delete")
def delete(
    investment_id: int = typer.Argument(..., help="Investment ID"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
):
    """Delete an investment."""
    try:
        inv = repo.find(investment_id)
    except PortfolioDashboardError as e:
        _fail(e)

    if not force:
        confirm = typer.confirm(f"Delete investment '{inv.asset_name}'?")
        if not confirm:
            console.print("Cancelled.")
            return

    try:
        repo.delete(investment_id)
    except PortfolioDashboardError as e:
        _fail(e)
    console.print(f"[green]Investment '{inv.asset_name}' deleted successfully[/green]")

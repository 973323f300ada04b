"""Portfolio Dashboard CLI — main entry point."""

import logging
from typing import Optional

import typer
from rich.logging import RichHandler

from ..data.database import get_db
from . import state
from .commands import holdings, investments, performance, report, stats

app = typer.Typer(
    name="pdash",
    help="Portfolio dashboard: demo holdings, allocation, performance and reports",
    rich_markup_mode="rich",
    no_args_is_help=True,
)

app.add_typer(holdings.app, name="holdings", help="View and edit holdings")
app.add_typer(stats.app, name="stats", help="Portfolio value & allocation")
app.add_typer(performance.app, name="performance", help="Performance history & metrics")
app.add_typer(report.app, name="report", help="Export reports")
app.add_typer(investments.app, name="investments", help="Manage recorded investments")


@app.callback()
def startup(
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for the demo price history"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Configure logging, the demo store and the database."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )
    state.configure(seed)
    get_db()


if __name__ == "__main__":
    app()

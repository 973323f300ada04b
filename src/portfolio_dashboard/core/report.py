"""CSV report export for a selection of holdings."""

import csv
import io
from datetime import date
from pathlib import Path
from typing import Optional

from .analytics import total_value
from .models import Asset

CSV_HEADER = ["Asset Name", "Symbol", "Type", "Shares", "Price", "Total Value", "Change %"]


def build_csv_report(assets: list[Asset]) -> str:
    """Render one row per asset plus a trailing total-value summary row."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for a in assets:
        writer.writerow([
            a.name,
            a.symbol,
            a.asset_type.value,
            a.shares,
            a.price,
            a.value,
            a.change,
        ])
    writer.writerow([])
    writer.writerow(["Total Portfolio Value", "", "", "", "", total_value(assets), ""])
    return buf.getvalue()


def report_filename(day: date) -> str:
    return f"portfolio-report-{day.isoformat()}.csv"


def write_csv_report(assets: list[Asset], directory: Path, day: Optional[date] = None) -> Path:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / report_filename(day or date.today())
    path.write_text(build_csv_report(assets), encoding="utf-8")
    return path

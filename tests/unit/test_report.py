"""Tests for CSV report export."""

import csv
import io
from datetime import date
from decimal import Decimal

from portfolio_dashboard.core.models import Asset, AssetType
from portfolio_dashboard.core.report import (
    CSV_HEADER,
    build_csv_report,
    report_filename,
    write_csv_report,
)


def _asset(asset_id, name, asset_type, shares, price, change):
    return Asset(
        id=asset_id,
        name=name,
        symbol=asset_id.upper(),
        asset_type=AssetType(asset_type),
        shares=Decimal(shares),
        price=Decimal(price),
        change=Decimal(change),
    )


ASSETS = [
    _asset("aapl", "Apple Inc.", "stock", "10", "175.34", "2.34"),
    _asset("btc", "Bitcoin", "crypto", "0.25", "52341.20", "5.67"),
]


def _rows(text):
    return list(csv.reader(io.StringIO(text)))


class TestBuildCsvReport:
    def test_header_and_rows(self):
        rows = _rows(build_csv_report(ASSETS))
        assert rows[0] == CSV_HEADER
        assert rows[1] == ["Apple Inc.", "AAPL", "stock", "10", "175.34", "1753.40", "2.34"]
        assert rows[2][:3] == ["Bitcoin", "BTC", "crypto"]
        assert Decimal(rows[2][5]) == Decimal("13085.30")

    def test_summary_row(self):
        rows = _rows(build_csv_report(ASSETS))
        assert rows[3] == []
        assert rows[4][0] == "Total Portfolio Value"
        assert Decimal(rows[4][5]) == Decimal("14838.70")
        assert len(rows[4]) == 7

    def test_name_with_comma_is_quoted(self):
        text = build_csv_report([_asset("x", "Berkshire Hathaway, Inc.", "stock", "1", "1", "0")])
        assert '"Berkshire Hathaway, Inc."' in text
        assert _rows(text)[1][0] == "Berkshire Hathaway, Inc."

    def test_empty_selection(self):
        rows = _rows(build_csv_report([]))
        assert rows[0] == CSV_HEADER
        assert rows[-1][0] == "Total Portfolio Value"
        assert Decimal(rows[-1][5]) == Decimal("0")


class TestWriteCsvReport:
    def test_filename(self):
        assert report_filename(date(2024, 3, 15)) == "portfolio-report-2024-03-15.csv"

    def test_writes_file(self, tmp_path):
        path = write_csv_report(ASSETS, tmp_path / "out", day=date(2024, 3, 15))
        assert path == tmp_path / "out" / "portfolio-report-2024-03-15.csv"
        assert path.read_text(encoding="utf-8") == build_csv_report(ASSETS)

#!/usr/bin/env python3
"""
Seed the investments table with a few demo rows.

Mirrors the demo holdings so `pdash investments list` has something to show.
Safe to re-run: exits early if the demo rows already exist.
"""

import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from portfolio_dashboard.core.models import Investment, InvestmentType
from portfolio_dashboard.data.database import get_db
from portfolio_dashboard.data.repositories.investments_repo import InvestmentsRepository

db = get_db()
repo = InvestmentsRepository()

DEMO_NOTE = "Demo investment — not real data."

if any(inv.notes == DEMO_NOTE for inv in repo.list_all()):
    print("Demo investments already exist. Delete them first if you want to recreate.")
    sys.exit(0)

DEMO_ROWS = [
    dict(asset_name="Apple Inc.", symbol="AAPL", asset_type=InvestmentType.STOCK,
         quantity=Decimal("10"), purchase_price=Decimal("150.00"), purchase_date=date(2023, 3, 14),
         current_price=Decimal("175.34")),
    dict(asset_name="Vanguard 500 Index Fund", symbol="VFIAX", asset_type=InvestmentType.MUTUAL_FUND,
         quantity=Decimal("12.5"), purchase_price=Decimal("380.20"), purchase_date=date(2023, 6, 1),
         current_price=Decimal("452.12")),
    dict(asset_name="Bitcoin", symbol="BTC", asset_type=InvestmentType.CRYPTOCURRENCY,
         quantity=Decimal("0.25"), purchase_price=Decimal("28000.00"), purchase_date=date(2023, 9, 20),
         current_price=None),
]

with db.transaction():
    for row in DEMO_ROWS:
        inv = repo.create(Investment(notes=DEMO_NOTE, **row))
        print(f"✓ {inv.asset_name} (ID {inv.id})")

print(f"\nSeeded {len(DEMO_ROWS)} investments into {db.db_path}")

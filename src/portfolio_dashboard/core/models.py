"""Data models for the portfolio dashboard."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class AssetType(str, Enum):
    STOCK = "stock"
    CRYPTO = "crypto"
    FUND = "fund"

    @property
    def label(self) -> str:
        return _TYPE_LABELS[self]

    @property
    def color(self) -> str:
        return _TYPE_COLORS[self]


_TYPE_LABELS = {
    AssetType.STOCK: "Stocks",
    AssetType.CRYPTO: "Crypto",
    AssetType.FUND: "Funds",
}

# Chart palette shared by allocation slices and per-asset series
_TYPE_COLORS = {
    AssetType.STOCK: "#3b82f6",
    AssetType.CRYPTO: "#8b5cf6",
    AssetType.FUND: "#f59e0b",
}


class InvestmentType(str, Enum):
    STOCK = "stock"
    MUTUAL_FUND = "mutual_fund"
    CRYPTOCURRENCY = "cryptocurrency"


@dataclass(frozen=True)
class HistoryPoint:
    date: date
    value: Decimal


@dataclass(frozen=True)
class Asset:
    """A holding tracked by the in-memory portfolio store.

    Frozen: edits go through PortfolioStore.update_asset, which swaps in a
    validated copy.
    """
    id: str
    name: str
    symbol: str
    asset_type: AssetType
    shares: Decimal
    price: Decimal
    change: Decimal = Decimal("0")  # recent price movement, percent
    history: list[HistoryPoint] = field(default_factory=list)

    @property
    def value(self) -> Decimal:
        return self.shares * self.price


@dataclass
class Investment:
    """A manually recorded investment, persisted in the investments table."""
    asset_name: str
    asset_type: InvestmentType
    quantity: Decimal
    purchase_price: Decimal
    purchase_date: date
    symbol: Optional[str] = None
    current_price: Optional[Decimal] = None
    notes: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def cost_basis(self) -> Decimal:
        return self.quantity * self.purchase_price

    @property
    def current_value(self) -> Decimal:
        if self.current_price is None:
            return Decimal("0")
        return self.quantity * self.current_price

    @property
    def unrealized_pnl(self) -> Decimal:
        if self.current_price is None:
            return Decimal("0")
        return self.current_value - self.cost_basis


@dataclass
class AllocationSlice:
    asset_type: AssetType
    label: str
    value: Decimal
    color: str


@dataclass
class PerformanceMetrics:
    """Summary statistics over a value series."""
    average: Decimal = Decimal("0")
    highest: Decimal = Decimal("0")
    lowest: Decimal = Decimal("0")
    volatility: Decimal = Decimal("0")  # std dev as % of average


@dataclass
class PerformanceStats:
    avg_change: Decimal = Decimal("0")
    best_performer: Optional[Asset] = None
    worst_performer: Optional[Asset] = None

"""In-memory portfolio store owning the holdings state."""

import dataclasses
import logging
import random
import uuid
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Optional

from . import analytics, validation
from .exceptions import AssetNotFoundError, ValidationError
from .history import generate_random_history, validate_history, volatility_for
from .models import Asset, AssetType, HistoryPoint

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_DAYS = 30

# (id, name, symbol, type, shares, price, change %, seed price, volatility)
DEMO_ASSETS = [
    ("1", "Apple Inc.", "AAPL", AssetType.STOCK, "10", "175.34", "2.34", "170", "0.01"),
    ("2", "Microsoft Corporation", "MSFT", AssetType.STOCK, "5", "324.76", "1.12", "320", "0.01"),
    ("3", "Bitcoin", "BTC", AssetType.CRYPTO, "0.25", "52341.20", "5.67", "50000", "0.02"),
    ("4", "Ethereum", "ETH", AssetType.CRYPTO, "2", "2812.45", "-2.21", "2900", "0.025"),
    ("5", "Vanguard S&P 500 ETF", "VOO", AssetType.FUND, "8", "452.12", "0.87", "448", "0.007"),
    ("6", "Fidelity 500 Index Fund", "FXAIX", AssetType.FUND, "25", "182.47", "0.65", "180", "0.006"),
]


def _new_id() -> str:
    return uuid.uuid4().hex


class PortfolioStore:
    """Holds the asset collection and exposes its read/write contract.

    The store is an ordinary object: create one per session (or per test)
    and pass it to whatever needs it. Randomness, the clock and id
    generation are injectable so history generation is reproducible.
    """

    def __init__(
        self,
        assets: Optional[Iterable[Asset]] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], date] = date.today,
        history_days: int = DEFAULT_HISTORY_DAYS,
        id_factory: Callable[[], str] = _new_id,
    ):
        if history_days < 0:
            raise ValidationError(f"history_days must be >= 0, got {history_days}")
        self._rng = rng or random.Random()
        self._clock = clock
        self._history_days = history_days
        self._id_factory = id_factory
        self._assets: list[Asset] = []
        for asset in assets or ():
            self._insert(asset)

    @classmethod
    def with_demo_assets(
        cls,
        rng: Optional[random.Random] = None,
        clock: Callable[[], date] = date.today,
        history_days: int = DEFAULT_HISTORY_DAYS,
        id_factory: Callable[[], str] = _new_id,
    ) -> "PortfolioStore":
        """Store seeded with the fixed six-asset demo portfolio."""
        rng = rng or random.Random()
        today = clock()
        assets = [
            Asset(
                id=asset_id,
                name=name,
                symbol=symbol,
                asset_type=asset_type,
                shares=Decimal(shares),
                price=Decimal(price),
                change=Decimal(change),
                history=generate_random_history(
                    history_days, Decimal(seed), Decimal(vol), rng=rng, today=today,
                ),
            )
            for asset_id, name, symbol, asset_type, shares, price, change, seed, vol in DEMO_ASSETS
        ]
        return cls(assets, rng=rng, clock=clock, history_days=history_days, id_factory=id_factory)

    def _insert(self, asset: Asset) -> None:
        if any(a.id == asset.id for a in self._assets):
            raise ValidationError(f"Duplicate asset id {asset.id!r}")
        validation.asset_fields({
            "name": asset.name,
            "symbol": asset.symbol,
            "asset_type": asset.asset_type,
            "shares": asset.shares,
            "price": asset.price,
            "change": asset.change,
        })
        validate_history(asset.history)
        self._assets.append(asset)

    # ── Reads ────────────────────────────────────────────────────────────────

    @property
    def assets(self) -> list[Asset]:
        return list(self._assets)

    @property
    def total_value(self) -> Decimal:
        return analytics.total_value(self._assets)

    def __len__(self) -> int:
        return len(self._assets)

    def get_asset(self, asset_id: str) -> Asset:
        for asset in self._assets:
            if asset.id == asset_id:
                return asset
        raise AssetNotFoundError(asset_id)

    def value_by_type(self) -> dict[AssetType, Decimal]:
        return analytics.value_by_type(self._assets)

    def generate_performance_data(self) -> list[HistoryPoint]:
        return analytics.performance_series(self._assets)

    # ── Writes ───────────────────────────────────────────────────────────────

    def add_asset(
        self,
        name: str,
        symbol: str,
        asset_type,
        shares,
        price,
        change=Decimal("0"),
    ) -> Asset:
        """Create an asset with a fresh id and a newly generated history."""
        fields = validation.asset_fields({
            "name": name,
            "symbol": symbol,
            "asset_type": asset_type,
            "shares": shares,
            "price": price,
            "change": change,
        })
        asset_id = self._id_factory()
        while any(a.id == asset_id for a in self._assets):
            asset_id = self._id_factory()
        asset = Asset(
            id=asset_id,
            history=generate_random_history(
                self._history_days,
                fields["price"],
                volatility_for(fields["asset_type"]),
                rng=self._rng,
                today=self._clock(),
            ),
            **fields,
        )
        self._assets.append(asset)
        logger.debug("Added asset %s (%s) value=%s", asset.id, asset.symbol, asset.value)
        return asset

    def update_asset(self, asset_id: str, **fields) -> Asset:
        """Merge editable fields into an existing asset.

        All fields are validated before anything is applied, so a rejected
        update leaves the asset as it was. ``value`` follows shares and price.
        Returns the replacement asset; earlier references keep the old values.
        """
        current = self.get_asset(asset_id)
        asset = dataclasses.replace(current, **validation.asset_fields(fields))
        self._assets[self._assets.index(current)] = asset
        logger.debug("Updated asset %s fields=%s value=%s", asset_id, sorted(fields), asset.value)
        return asset

    def remove_asset(self, asset_id: str) -> bool:
        """Delete an asset by id. Returns False (and changes nothing) if absent."""
        for i, asset in enumerate(self._assets):
            if asset.id == asset_id:
                del self._assets[i]
                logger.debug("Removed asset %s (%s)", asset_id, asset.symbol)
                return True
        logger.debug("Remove of unknown asset %s ignored", asset_id)
        return False

"""Synthetic price history: seedable random walk.

Used to seed the demo holdings and every asset added to the store. The
walk is deterministic for a given random.Random instance and end date.
"""

import random
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional

from .exceptions import ValidationError
from .models import AssetType, HistoryPoint
from .validation import positive_decimal, to_decimal

PRICE_FLOOR = Decimal("0.1")
CRYPTO_VOLATILITY = Decimal("0.02")
DEFAULT_VOLATILITY = Decimal("0.01")


def volatility_for(asset_type: AssetType) -> Decimal:
    if asset_type == AssetType.CRYPTO:
        return CRYPTO_VOLATILITY
    return DEFAULT_VOLATILITY


def generate_random_history(
    days: int,
    start_price,
    volatility,
    rng: Optional[random.Random] = None,
    today: Optional[date] = None,
) -> list[HistoryPoint]:
    """Walk a price forward from ``today - days`` to ``today`` (inclusive).

    Each step moves the price by ``(u - 0.5) * volatility * price`` with
    ``u`` uniform in [0, 1), clamps it at PRICE_FLOOR and records it rounded
    to cents. The walk itself continues from the unrounded price.

    Returns days + 1 points with contiguous ascending dates.
    """
    if days < 0:
        raise ValidationError(f"days must be >= 0, got {days}")
    price = positive_decimal(start_price, "start_price")
    vol = to_decimal(volatility, "volatility")
    if vol < 0:
        raise ValidationError(f"volatility must be >= 0, got {vol}")

    rng = rng or random.Random()
    end = today or date.today()

    history: list[HistoryPoint] = []
    for i in range(days, -1, -1):
        step = Decimal(str(rng.random() - 0.5)) * vol * price
        price = max(PRICE_FLOOR, price + step)
        history.append(HistoryPoint(
            date=end - timedelta(days=i),
            value=price.quantize(Decimal("0.01")),
        ))
    return history


def validate_history(points: list[HistoryPoint]) -> None:
    """Raise ValidationError unless dates are contiguous, ascending and values positive."""
    previous: Optional[date] = None
    for point in points:
        if not isinstance(point.date, date) or isinstance(point.date, datetime):
            raise ValidationError(f"Malformed history date: {point.date!r}")
        if point.value <= 0:
            raise ValidationError(f"History value must be positive on {point.date}: {point.value}")
        if previous is not None and point.date != previous + timedelta(days=1):
            raise ValidationError(
                f"History dates must be contiguous and ascending: {previous} followed by {point.date}"
            )
        previous = point.date

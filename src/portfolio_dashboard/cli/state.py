"""Per-invocation CLI state: the demo store and display helpers.

The holdings store lives in memory only, so each CLI run starts from the
demo portfolio. ``--seed`` (or ``random_seed`` in config.json) pins the
generated history.
"""

import random
from decimal import Decimal
from typing import Optional

from ..core.config import get_config
from ..core.store import PortfolioStore

_CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£"}

_seed: Optional[int] = None
_store: Optional[PortfolioStore] = None


def configure(seed: Optional[int]) -> None:
    global _seed, _store
    _seed = seed
    _store = None


def get_store() -> PortfolioStore:
    global _store
    if _store is None:
        cfg = get_config()
        seed = _seed if _seed is not None else cfg.random_seed
        _store = PortfolioStore.with_demo_assets(
            rng=random.Random(seed),
            history_days=cfg.history_days,
        )
    return _store


def money(amount: Decimal) -> str:
    currency = get_config().currency
    symbol = _CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def pct(value: Decimal) -> str:
    color = "green" if value >= 0 else "red"
    return f"[{color}]{value:+.2f}%[/{color}]"

"""Portfolio aggregation and performance calculations.

All functions are pure. They accept Asset objects (or value series) and
return Decimal-based results. No I/O, no side effects. Derived figures are
always recomputed from the assets passed in; nothing here is cached.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ..models import (
    AllocationSlice,
    Asset,
    AssetType,
    HistoryPoint,
    PerformanceMetrics,
    PerformanceStats,
)

CENT = Decimal("0.01")


def total_value(assets: Iterable[Asset]) -> Decimal:
    """Sum the market value (shares × price) of all assets."""
    return sum((a.value for a in assets), Decimal("0"))


def value_by_type(assets: Iterable[Asset]) -> dict[AssetType, Decimal]:
    """Sum asset values per type. Every AssetType is present, zero if unheld."""
    result = {t: Decimal("0") for t in AssetType}
    for a in assets:
        result[a.asset_type] += a.value
    return result


def count_by_type(assets: Iterable[Asset]) -> dict[AssetType, int]:
    result = {t: 0 for t in AssetType}
    for a in assets:
        result[a.asset_type] += 1
    return result


def allocation_by_type(assets: list[Asset]) -> dict[AssetType, Decimal]:
    """Calculate allocation percentages grouped by asset type.

    The percentages sum to approximately 100% (subject to rounding).

    Returns:
        Dict mapping every AssetType to its share of total value, e.g.
        {AssetType.STOCK: Decimal("42.50"), ...}. Empty dict if the
        portfolio has no value.
    """
    port_value = total_value(assets)
    if port_value == 0:
        return {}
    return {
        t: (v / port_value * 100).quantize(CENT)
        for t, v in value_by_type(assets).items()
    }


def allocation_slices(assets: list[Asset]) -> list[AllocationSlice]:
    """One chart slice per asset type, in AssetType order."""
    return [
        AllocationSlice(asset_type=t, label=t.label, value=v, color=t.color)
        for t, v in value_by_type(assets).items()
    ]


def top_performers(assets: Iterable[Asset], limit: int = 3) -> list[Asset]:
    return sorted(assets, key=lambda a: a.change, reverse=True)[:limit]


def performance_series(assets: Iterable[Asset]) -> list[HistoryPoint]:
    """Whole-portfolio value per calendar day.

    Histories are aligned by date, not by position: the axis is the sorted
    union of every asset's history dates, and each asset contributes
    ``point.value × shares`` on the days it has a point (zero otherwise).

    Returns an empty list when there are no assets or no history at all.
    """
    totals: dict[date, Decimal] = defaultdict(lambda: Decimal("0"))
    for a in assets:
        for point in a.history:
            totals[point.date] += point.value * a.shares
    return [
        HistoryPoint(date=d, value=totals[d].quantize(CENT))
        for d in sorted(totals)
    ]


def asset_performance_series(asset: Asset) -> list[HistoryPoint]:
    """Position value (history price × current shares) per day for one asset."""
    return [
        HistoryPoint(date=p.date, value=(p.value * asset.shares).quantize(CENT))
        for p in asset.history
    ]


def overall_change(series: list[HistoryPoint]) -> Decimal:
    """Percent change from the first to the last point of a series."""
    if not series:
        return Decimal("0")
    first = series[0].value
    last = series[-1].value
    if first == 0:
        return Decimal("0")
    return ((last - first) / first * 100).quantize(CENT)


def performance_metrics(series: list[HistoryPoint]) -> PerformanceMetrics:
    """Average, high, low and volatility of a value series.

    Volatility is the population standard deviation expressed as a
    percentage of the average.
    """
    if not series:
        return PerformanceMetrics()
    values = [p.value for p in series]
    average = sum(values, Decimal("0")) / len(values)
    variance = sum(((v - average) ** 2 for v in values), Decimal("0")) / len(values)
    volatility = Decimal("0")
    if average != 0:
        volatility = (variance.sqrt() / average * 100).quantize(CENT)
    return PerformanceMetrics(
        average=average.quantize(CENT),
        highest=max(values),
        lowest=min(values),
        volatility=volatility,
    )


def performance_stats(assets: list[Asset]) -> PerformanceStats:
    """Mean recent change plus the best and worst performer by change."""
    if not assets:
        return PerformanceStats()
    avg_change = sum((a.change for a in assets), Decimal("0")) / len(assets)
    ranked = sorted(assets, key=lambda a: a.change)
    return PerformanceStats(
        avg_change=avg_change.quantize(CENT),
        best_performer=ranked[-1],
        worst_performer=ranked[0],
    )


def filter_assets(assets: list[Asset], selected_ids: Optional[Iterable[str]]) -> list[Asset]:
    """Assets whose id is selected. An empty selection means all assets."""
    selected = set(selected_ids or ())
    if not selected:
        return list(assets)
    return [a for a in assets if a.id in selected]


def selection_share(selected: list[Asset], assets: list[Asset]) -> Decimal:
    """Value of the selected assets as a percentage of the whole portfolio."""
    port_value = total_value(assets)
    if port_value == 0:
        return Decimal("0")
    return (total_value(selected) / port_value * 100).quantize(CENT)

"""Tests for core.analytics.aggregation."""

from datetime import date, timedelta
from decimal import Decimal

from portfolio_dashboard.core.analytics import (
    allocation_by_type,
    allocation_slices,
    asset_performance_series,
    count_by_type,
    filter_assets,
    overall_change,
    performance_metrics,
    performance_series,
    performance_stats,
    selection_share,
    top_performers,
    total_value,
    value_by_type,
)
from portfolio_dashboard.core.models import Asset, AssetType, HistoryPoint

D0 = date(2024, 1, 1)


def _history(start_offset, *prices):
    return [
        HistoryPoint(date=D0 + timedelta(days=start_offset + i), value=Decimal(str(p)))
        for i, p in enumerate(prices)
    ]


def _asset(asset_id, asset_type, shares, price, change="0", history=None):
    return Asset(
        id=asset_id,
        name=f"Asset {asset_id}",
        symbol=asset_id.upper(),
        asset_type=AssetType(asset_type),
        shares=Decimal(str(shares)),
        price=Decimal(str(price)),
        change=Decimal(change),
        history=history or [],
    )


def _series(*values):
    return [HistoryPoint(date=D0 + timedelta(days=i), value=Decimal(str(v))) for i, v in enumerate(values)]


class TestTotals:
    def test_total_value(self):
        assets = [
            _asset("a", "stock", 10, 200),   # 2000
            _asset("b", "fund", 5, 500),     # 2500
        ]
        assert total_value(assets) == Decimal("4500")

    def test_total_value_empty(self):
        assert total_value([]) == Decimal("0")

    def test_value_by_type_has_every_type(self):
        result = value_by_type([_asset("a", "crypto", 2, 10)])
        assert result == {
            AssetType.STOCK: Decimal("0"),
            AssetType.CRYPTO: Decimal("20"),
            AssetType.FUND: Decimal("0"),
        }

    def test_count_by_type(self):
        assets = [_asset("a", "stock", 1, 1), _asset("b", "stock", 1, 1), _asset("c", "fund", 1, 1)]
        assert count_by_type(assets) == {AssetType.STOCK: 2, AssetType.CRYPTO: 0, AssetType.FUND: 1}


class TestAllocation:
    def test_by_type(self):
        assets = [_asset("a", "stock", 10, 100), _asset("b", "crypto", 1, 1000)]
        alloc = allocation_by_type(assets)
        assert alloc[AssetType.STOCK] == Decimal("50.00")
        assert alloc[AssetType.CRYPTO] == Decimal("50.00")
        assert alloc[AssetType.FUND] == Decimal("0.00")

    def test_empty_portfolio(self):
        assert allocation_by_type([]) == {}

    def test_slices_labels_and_colors(self):
        slices = allocation_slices([_asset("a", "fund", 2, 50)])
        assert [s.label for s in slices] == ["Stocks", "Crypto", "Funds"]
        assert [s.color for s in slices] == ["#3b82f6", "#8b5cf6", "#f59e0b"]
        assert slices[2].value == Decimal("100")
        assert slices[0].value == Decimal("0")


class TestTopPerformers:
    def test_sorted_by_change_desc(self):
        assets = [
            _asset("a", "stock", 1, 1, change="1.5"),
            _asset("b", "stock", 1, 1, change="-3"),
            _asset("c", "crypto", 1, 1, change="5.67"),
            _asset("d", "fund", 1, 1, change="0.2"),
        ]
        assert [a.id for a in top_performers(assets)] == ["c", "a", "d"]

    def test_fewer_than_limit(self):
        assert len(top_performers([_asset("a", "stock", 1, 1)])) == 1


class TestPerformanceSeries:
    def test_empty(self):
        assert performance_series([]) == []

    def test_sums_value_times_shares(self):
        assets = [
            _asset("a", "stock", 2, 12, history=_history(0, 10, 11, 12)),
            _asset("b", "fund", 1, 7, history=_history(0, 5, 6, 7)),
        ]
        assert [p.value for p in performance_series(assets)] == [
            Decimal("25.00"), Decimal("28.00"), Decimal("31.00"),
        ]

    def test_aligned_by_date_not_index(self):
        # b starts a day later; by index it would be attributed to the wrong days
        assets = [
            _asset("a", "stock", 1, 12, history=_history(0, 10, 11, 12)),
            _asset("b", "fund", 10, 3, history=_history(1, 2, 3)),
        ]
        series = performance_series(assets)
        assert [p.date for p in series] == [D0, D0 + timedelta(days=1), D0 + timedelta(days=2)]
        assert [p.value for p in series] == [Decimal("10.00"), Decimal("31.00"), Decimal("42.00")]

    def test_union_of_dates(self):
        assets = [
            _asset("a", "stock", 1, 1, history=_history(0, 1)),
            _asset("b", "stock", 1, 1, history=_history(3, 2)),
        ]
        assert [p.date for p in performance_series(assets)] == [D0, D0 + timedelta(days=3)]

    def test_rounded_to_cents(self):
        assets = [_asset("a", "crypto", "0.333", 1, history=_history(0, "10.01"))]
        assert performance_series(assets)[0].value == Decimal("3.33")

    def test_single_asset_series(self):
        a = _asset("a", "crypto", "0.25", 1, history=_history(0, 100, 200))
        assert [p.value for p in asset_performance_series(a)] == [Decimal("25.00"), Decimal("50.00")]


class TestOverallChange:
    def test_gain(self):
        assert overall_change(_series(100, 105, 110)) == Decimal("10.00")

    def test_loss(self):
        assert overall_change(_series(200, 150)) == Decimal("-25.00")

    def test_empty(self):
        assert overall_change([]) == Decimal("0")

    def test_zero_start(self):
        assert overall_change(_series(0, 10)) == Decimal("0")


class TestPerformanceMetrics:
    def test_basic(self):
        m = performance_metrics(_series(10, 20, 30))
        assert m.average == Decimal("20.00")
        assert m.highest == Decimal("30")
        assert m.lowest == Decimal("10")
        # population std dev sqrt(200/3) = 8.1650 → 40.82% of the mean
        assert m.volatility == Decimal("40.82")

    def test_flat_series_zero_volatility(self):
        assert performance_metrics(_series(5, 5, 5)).volatility == Decimal("0.00")

    def test_empty(self):
        m = performance_metrics([])
        assert (m.average, m.highest, m.lowest, m.volatility) == (0, 0, 0, 0)

    def test_zero_average(self):
        assert performance_metrics(_series(0, 0)).volatility == Decimal("0")


class TestPerformanceStats:
    def test_avg_best_worst(self):
        assets = [
            _asset("a", "stock", 1, 1, change="2"),
            _asset("b", "stock", 1, 1, change="-4"),
            _asset("c", "crypto", 1, 1, change="5"),
        ]
        stats = performance_stats(assets)
        assert stats.avg_change == Decimal("1.00")
        assert stats.best_performer.id == "c"
        assert stats.worst_performer.id == "b"

    def test_empty(self):
        stats = performance_stats([])
        assert stats.avg_change == Decimal("0")
        assert stats.best_performer is None
        assert stats.worst_performer is None


class TestSelection:
    def test_empty_selection_means_all(self):
        assets = [_asset("a", "stock", 1, 1), _asset("b", "fund", 1, 1)]
        assert filter_assets(assets, []) == assets
        assert filter_assets(assets, None) == assets

    def test_filters_by_id(self):
        assets = [_asset("a", "stock", 1, 1), _asset("b", "fund", 1, 1)]
        assert [a.id for a in filter_assets(assets, ["b", "zzz"])] == ["b"]

    def test_selection_share(self):
        assets = [_asset("a", "stock", 1, 250), _asset("b", "fund", 1, 750)]
        assert selection_share(assets[:1], assets) == Decimal("25.00")

    def test_selection_share_empty_portfolio(self):
        assert selection_share([], []) == Decimal("0")

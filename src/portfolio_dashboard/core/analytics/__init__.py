"""Portfolio analytics.

Pure functions for totals, allocation and performance series.
No I/O.

Usage:
    from portfolio_dashboard.core.analytics import total_value, performance_series
"""

from .aggregation import (
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

__all__ = [
    "total_value",
    "value_by_type",
    "count_by_type",
    "allocation_by_type",
    "allocation_slices",
    "top_performers",
    "performance_series",
    "asset_performance_series",
    "overall_change",
    "performance_metrics",
    "performance_stats",
    "filter_assets",
    "selection_share",
]

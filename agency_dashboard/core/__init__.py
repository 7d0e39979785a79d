"""
Metrics Engine Module
"""
from .aggregation import aggregate, aggregate_by_shop, compare_periods, daily_series, percentage_change
from .agency_profit import compute_agency_profit
from .time_windows import previous_period, resolve_time_window

__all__ = [
    "aggregate",
    "aggregate_by_shop",
    "compare_periods",
    "daily_series",
    "percentage_change",
    "compute_agency_profit",
    "previous_period",
    "resolve_time_window",
]

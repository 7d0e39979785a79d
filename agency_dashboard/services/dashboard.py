"""
Dashboard Service

Request-scoped reporting over the metric store: KPI overview with
previous-period comparison, per-shop performance, chart series and the
agency profit breakdown. Everything is computed on demand from the current
store contents.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, List, Optional, Union

import structlog

from agency_dashboard.config import get_settings
from agency_dashboard.core.aggregation import (
    aggregate,
    aggregate_by_shop,
    compare_periods,
    daily_series,
)
from agency_dashboard.core.agency_profit import compute_agency_profit
from agency_dashboard.core.models import (
    AgencyProfitSummary,
    AggregatedMetrics,
    DailyMetrics,
    MetricChanges,
    Shop,
    TimeFilter,
    TimeWindow,
)
from agency_dashboard.core.time_windows import previous_period, resolve_time_window
from agency_dashboard.storage.store import MetricStore

logger = structlog.get_logger(__name__)

FilterToken = Optional[Union[str, TimeFilter]]


@dataclass(frozen=True)
class MetricsOverview:
    """Current window KPIs against the preceding window"""
    window: TimeWindow
    previous_window: TimeWindow
    current: AggregatedMetrics
    previous: AggregatedMetrics
    changes: MetricChanges


@dataclass(frozen=True)
class ShopPerformance:
    """One shop's rollups and recent daily series"""
    shop: Shop
    window: TimeWindow
    selected: AggregatedMetrics
    today: AggregatedMetrics
    last_seven_days: AggregatedMetrics
    last_thirty_days: AggregatedMetrics
    daily: List[DailyMetrics]


class DashboardService:
    """Reporting facade over a ``MetricStore``"""

    def __init__(
        self,
        store: MetricStore,
        today_provider: Callable[[], date] = date.today,
    ):
        self.store = store
        self.today_provider = today_provider
        self.defaults = get_settings().dashboard

    def resolve_window(
        self,
        time_filter: FilterToken = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> TimeWindow:
        return resolve_time_window(time_filter, start=start, end=end, today=self.today_provider())

    def get_aggregated_metrics(
        self,
        shop_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> AggregatedMetrics:
        """Totals for an optional shop over optional inclusive bounds"""
        if shop_id is not None:
            self.store.get_shop(shop_id)
        window = self.resolve_window(start=start, end=end) if start and end else None
        records = self.store.list_records(shop_id=shop_id, start=start, end=end)
        return aggregate(records, shop_id=shop_id, window=window)

    def get_metrics_overview(
        self,
        time_filter: FilterToken = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        shop_id: Optional[int] = None,
    ) -> MetricsOverview:
        if time_filter is None and start is None and end is None:
            time_filter = self.defaults.metrics_default_filter

        window = self.resolve_window(time_filter, start, end)
        prior = previous_period(window)

        current = self.get_aggregated_metrics(shop_id, window.start, window.end)
        previous = self.get_aggregated_metrics(shop_id, prior.start, prior.end)

        logger.info(
            "Metrics overview computed",
            start=window.start.isoformat(),
            end=window.end.isoformat(),
            shop_id=shop_id,
            records=current.record_count,
        )
        return MetricsOverview(
            window=window,
            previous_window=prior,
            current=current,
            previous=previous,
            changes=compare_periods(current, previous),
        )

    def get_shop_performance(
        self,
        shop_id: int,
        time_filter: FilterToken = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> ShopPerformance:
        shop = self.store.get_shop(shop_id)
        today = self.today_provider()

        if time_filter is None and start is None and end is None:
            time_filter = self.defaults.metrics_default_filter
        window = self.resolve_window(time_filter, start, end)

        records = self.store.list_records(shop_id=shop_id)
        last_seven = TimeWindow(start=today - timedelta(days=7), end=today)
        last_thirty = TimeWindow(start=today - timedelta(days=30), end=today)

        return ShopPerformance(
            shop=shop,
            window=window,
            selected=aggregate(records, window=window),
            today=aggregate(records, window=TimeWindow(start=today, end=today)),
            last_seven_days=aggregate(records, window=last_seven),
            last_thirty_days=aggregate(records, window=last_thirty),
            daily=daily_series(
                [r for r in records if last_seven.contains(r.date)],
                newest_first=True,
            ),
        )

    def get_chart_data(
        self,
        time_filter: FilterToken = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[DailyMetrics]:
        """Per-day totals across all shops, oldest first"""
        if time_filter is None and start is None and end is None:
            time_filter = self.defaults.chart_default_filter
        window = self.resolve_window(time_filter, start, end)
        return daily_series(self.store.list_records(start=window.start, end=window.end))

    def get_agency_profit_breakdown(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> AgencyProfitSummary:
        """Agency share per shop over the window, month-to-date by default"""
        if start is None and end is None:
            window = self.resolve_window(self.defaults.agency_default_filter)
        else:
            window = self.resolve_window(start=start, end=end)

        shops = self.store.list_shops()
        records = self.store.list_records(start=window.start, end=window.end)
        summary = compute_agency_profit(shops, aggregate_by_shop(records, window=window))

        logger.info(
            "Agency profit computed",
            start=window.start.isoformat(),
            end=window.end.isoformat(),
            shops=summary.total_stores,
        )
        return summary

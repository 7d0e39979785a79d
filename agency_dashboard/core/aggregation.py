"""
Metrics Aggregation

Reduces metric records to totals. ROI is always recomputed from the summed
profit and cost, whether the records belong to one shop or many.
"""

from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional

from agency_dashboard.core.models import (
    AggregatedMetrics,
    DailyMetrics,
    MetricChanges,
    MetricRecord,
    TimeWindow,
)


def roi_percentage(profit: float, cost: float) -> float:
    """Profit as a percentage of cost, 0 when there is no cost"""
    if not cost:
        return 0.0
    return (profit / cost) * 100


def percentage_change(current: float, previous: float) -> float:
    """
    Relative change from ``previous`` to ``current`` in percent.

    A zero previous value has no defined relative change and yields 0.
    """
    if not previous:
        return 0.0
    return ((current - previous) / previous) * 100


def filter_records(
    records: Iterable[MetricRecord],
    shop_id: Optional[int] = None,
    window: Optional[TimeWindow] = None,
) -> List[MetricRecord]:
    """Records matching ``shop_id`` and falling inside ``window`` when given"""
    return [
        record
        for record in records
        if (shop_id is None or record.shop_id == shop_id)
        and (window is None or window.contains(record.date))
    ]


def aggregate(
    records: Iterable[MetricRecord],
    shop_id: Optional[int] = None,
    window: Optional[TimeWindow] = None,
) -> AggregatedMetrics:
    """
    Sum revenue, orders, cost and profit across the matching records.

    Duplicate records for the same shop and day are summed, not merged. An
    empty selection yields all-zero metrics.
    """
    matched = filter_records(records, shop_id=shop_id, window=window)
    if not matched:
        return AggregatedMetrics()

    revenue = sum(r.revenue for r in matched)
    orders = sum(r.orders for r in matched)
    cost = sum(r.cost for r in matched)
    profit = sum(r.profit for r in matched)

    return AggregatedMetrics(
        revenue=revenue,
        orders=orders,
        cost=cost,
        profit=profit,
        roi=roi_percentage(profit, cost),
        record_count=len(matched),
    )


def aggregate_by_shop(
    records: Iterable[MetricRecord],
    window: Optional[TimeWindow] = None,
) -> Dict[int, AggregatedMetrics]:
    """Per-shop aggregates keyed by shop id"""
    grouped: Dict[int, List[MetricRecord]] = defaultdict(list)
    for record in filter_records(records, window=window):
        grouped[record.shop_id].append(record)
    return {shop_id: aggregate(rows) for shop_id, rows in grouped.items()}


def daily_series(
    records: Iterable[MetricRecord],
    newest_first: bool = False,
) -> List[DailyMetrics]:
    """Per-day totals across the given records, ordered by date"""
    grouped: Dict[date, List[MetricRecord]] = defaultdict(list)
    for record in records:
        grouped[record.date].append(record)

    series = []
    for day in sorted(grouped, reverse=newest_first):
        totals = aggregate(grouped[day])
        series.append(
            DailyMetrics(
                date=day,
                revenue=totals.revenue,
                orders=totals.orders,
                cost=totals.cost,
                profit=totals.profit,
                roi=totals.roi,
            )
        )
    return series


def compare_periods(current: AggregatedMetrics, previous: AggregatedMetrics) -> MetricChanges:
    """Percentage change of every KPI from ``previous`` to ``current``"""
    return MetricChanges(
        revenue=percentage_change(current.revenue, previous.revenue),
        orders=percentage_change(current.orders, previous.orders),
        cost=percentage_change(current.cost, previous.cost),
        profit=percentage_change(current.profit, previous.profit),
        roi=percentage_change(current.roi, previous.roi),
    )

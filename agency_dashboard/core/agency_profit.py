"""
Agency Profit Calculation

Applies each shop's current profit-share percentage to its net profit over a
window. Shares are read from the shops as they are now; there is no dated
share history, so a share change applies to every past window as well.
"""

from typing import Iterable, Mapping, Sequence

import structlog

from agency_dashboard.core.models import (
    AgencyProfitEntry,
    AgencyProfitSummary,
    AggregatedMetrics,
    Shop,
)

logger = structlog.get_logger(__name__)


def agency_share(net_profit: float, profit_share_percentage: float) -> float:
    """Agency cut of ``net_profit``; negative when the shop lost money"""
    return (net_profit * profit_share_percentage) / 100


def average_profit_share(shops: Sequence[Shop]) -> float:
    """Unweighted mean of the shops' share percentages, 0 for no shops"""
    if not shops:
        return 0.0
    return sum(shop.profit_share_percentage for shop in shops) / len(shops)


def build_entry(shop: Shop, metrics: AggregatedMetrics) -> AgencyProfitEntry:
    net_profit = metrics.revenue - metrics.cost
    return AgencyProfitEntry(
        shop_id=shop.id,
        name=shop.name,
        revenue=metrics.revenue,
        costs=metrics.cost,
        net_profit=net_profit,
        profit_share_percentage=shop.profit_share_percentage,
        agency_profit=agency_share(net_profit, shop.profit_share_percentage),
    )


def compute_agency_profit(
    shops: Iterable[Shop],
    metrics_by_shop: Mapping[int, AggregatedMetrics],
) -> AgencyProfitSummary:
    """
    Build the per-shop breakdown and cross-shop rollups.

    Shops without metrics in the window contribute zero revenue and zero
    agency profit but still count towards ``total_stores`` and the average
    share. Losses are not clamped.

    Args:
        shops: Every active shop
        metrics_by_shop: Window aggregates keyed by shop id

    Returns:
        AgencyProfitSummary
    """
    shop_list = list(shops)
    empty = AggregatedMetrics()

    breakdown = [
        build_entry(shop, metrics_by_shop.get(shop.id, empty))
        for shop in shop_list
    ]

    summary = AgencyProfitSummary(
        total=sum(entry.agency_profit for entry in breakdown),
        total_stores=len(shop_list),
        total_revenue=sum(entry.revenue for entry in breakdown),
        avg_profit_share=average_profit_share(shop_list),
        breakdown=breakdown,
    )

    logger.debug(
        "Agency profit computed",
        shops=summary.total_stores,
        total=round(summary.total, 2),
    )
    return summary

"""
Sample Data Seeding

Loads the demo shops and a couple of days of metrics into an empty store so
a fresh dashboard has something to show.
"""

from datetime import date, timedelta
from typing import Optional

import structlog

from agency_dashboard.core.models import MetricRecordCreate, ShopCreate
from agency_dashboard.storage.store import MetricStore

logger = structlog.get_logger(__name__)

SAMPLE_SHOPS = [
    {"name": "Home Expo", "platform": "TikTok", "region": "USA", "profit_share_percentage": 40},
    {"name": "Deal Hoper", "platform": "Instagram", "region": "Canada", "profit_share_percentage": 50},
    {"name": "Randawoo TTS", "platform": "Facebook", "region": "UK", "profit_share_percentage": 50},
    {"name": "Marvikarts - TTS", "platform": "TikTok", "region": "Australia", "profit_share_percentage": 50},
]

# (shop index, days ago, revenue, orders, cost, profit, roi)
SAMPLE_METRICS = [
    (0, 0, 344.13, 16, 206.48, 137.65, 66.67),
    (0, 1, 385.02, 16, 231.01, 154.01, 66.67),
    (1, 0, 289.45, 12, 173.67, 115.78, 66.67),
    (2, 0, 425.65, 18, 255.39, 170.26, 66.67),
    (3, 0, 265.22, 10, 159.13, 106.09, 66.67),
]


def seed_sample_data(store: MetricStore, today: Optional[date] = None) -> int:
    """
    Seed demo shops and metrics relative to ``today``.

    Does nothing if the store already has shops.

    Returns:
        Number of metric records created
    """
    if store.list_shops():
        logger.info("Store already populated, skipping seed")
        return 0

    today = today or date.today()
    shops = [store.create_shop(ShopCreate(**spec)) for spec in SAMPLE_SHOPS]

    records = store.add_records(
        MetricRecordCreate(
            shop_id=shops[index].id,
            date=today - timedelta(days=days_ago),
            revenue=revenue,
            orders=orders,
            cost=cost,
            profit=profit,
            roi=roi,
        )
        for index, days_ago, revenue, orders, cost, profit, roi in SAMPLE_METRICS
    )

    logger.info("Sample data seeded", shops=len(shops), records=len(records))
    return len(records)

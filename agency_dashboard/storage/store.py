"""
In-Memory Metric Store

Holds shops and their daily metric records. Ids come from monotonic
counters and are never reused, even after deletion. Records are frozen once
stored; shops are replaced as whole objects.
"""

import math
import threading
from collections import defaultdict
from dataclasses import replace
from datetime import date
from typing import Dict, Iterable, List, Optional

import structlog

from agency_dashboard.core.exceptions import InvalidRange, NotFoundError, ValidationError
from agency_dashboard.core.models import (
    DEFAULT_PROFIT_SHARE,
    PROFIT_SHARE_MAX,
    PROFIT_SHARE_MIN,
    MetricRecord,
    MetricRecordCreate,
    Shop,
    ShopCreate,
)

logger = structlog.get_logger(__name__)


def validate_profit_share(value: float) -> float:
    """Return ``value`` as float or raise ``ValidationError`` outside [0, 100]"""
    try:
        pct = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Profit share must be a number, got {value!r}") from None
    if pct != pct or not PROFIT_SHARE_MIN <= pct <= PROFIT_SHARE_MAX:
        raise ValidationError(
            "Profit share percentage must be between 0 and 100",
            details={"profit_share_percentage": value},
        )
    return pct


def validate_record(data: MetricRecordCreate) -> None:
    """Raise ``ValidationError`` for non-finite amounts or negative revenue, cost or orders"""
    for name in ("revenue", "cost", "profit", "roi"):
        value = getattr(data, name)
        if not math.isfinite(value):
            raise ValidationError(
                f"Metric {name} must be a finite number",
                details={"field": name, "date": data.date.isoformat()},
            )
    if data.revenue < 0 or data.cost < 0 or data.orders < 0:
        raise ValidationError(
            "Revenue, cost and orders must not be negative",
            details={"date": data.date.isoformat()},
        )


class MetricStore:
    """
    Arena-style store for shops and metric records.

    Example:
        store = MetricStore()
        shop = store.create_shop(ShopCreate(name="Home Expo", platform="TikTok", region="USA"))
        store.add_record(MetricRecordCreate(shop_id=shop.id, date=date.today(), revenue=100))
    """

    def __init__(
        self,
        cascade_delete: bool = True,
        default_profit_share: float = DEFAULT_PROFIT_SHARE,
    ):
        self.cascade_delete = cascade_delete
        self.default_profit_share = validate_profit_share(default_profit_share)
        self._shops: Dict[int, Shop] = {}
        self._records: Dict[int, MetricRecord] = {}
        self._next_shop_id = 1
        self._next_record_id = 1
        self._lock = threading.RLock()
        self._shop_locks: Dict[int, threading.Lock] = defaultdict(threading.Lock)

    # -------------------------------------------------------------------------
    # Shops
    # -------------------------------------------------------------------------

    def list_shops(self) -> List[Shop]:
        with self._lock:
            return list(self._shops.values())

    def get_shop(self, shop_id: int) -> Shop:
        """Get a shop by id, raising ``NotFoundError`` when absent"""
        with self._lock:
            shop = self._shops.get(shop_id)
        if shop is None:
            raise NotFoundError(f"Shop {shop_id} not found", details={"shop_id": shop_id})
        return shop

    def create_shop(self, data: ShopCreate) -> Shop:
        """Store a new shop, defaulting the profit share when unspecified"""
        if not data.name or not data.name.strip():
            raise ValidationError("Shop name is required")

        share = (
            self.default_profit_share
            if data.profit_share_percentage is None
            else validate_profit_share(data.profit_share_percentage)
        )

        with self._lock:
            shop = Shop(
                id=self._next_shop_id,
                name=data.name.strip(),
                platform=data.platform,
                region=data.region,
                profit_share_percentage=share,
                sheet_id=data.sheet_id,
                sheet_name=data.sheet_name,
            )
            self._next_shop_id += 1
            self._shops[shop.id] = shop

        logger.info("Shop created", shop_id=shop.id, name=shop.name, profit_share=share)
        return shop

    def update_profit_share(self, shop_id: int, profit_share_percentage: float) -> Shop:
        """Replace a shop's profit-share percentage"""
        pct = validate_profit_share(profit_share_percentage)

        with self._shop_locks[shop_id]:
            updated = replace(self.get_shop(shop_id), profit_share_percentage=pct)
            with self._lock:
                if shop_id not in self._shops:
                    raise NotFoundError(f"Shop {shop_id} not found", details={"shop_id": shop_id})
                self._shops[shop_id] = updated

        logger.info("Profit share updated", shop_id=shop_id, profit_share=pct)
        return updated

    def update_sheet_source(
        self,
        shop_id: int,
        sheet_id: Optional[str],
        sheet_name: Optional[str] = None,
    ) -> Shop:
        """Bind a shop to a spreadsheet and tab"""
        with self._shop_locks[shop_id]:
            updated = replace(self.get_shop(shop_id), sheet_id=sheet_id, sheet_name=sheet_name)
            with self._lock:
                if shop_id not in self._shops:
                    raise NotFoundError(f"Shop {shop_id} not found", details={"shop_id": shop_id})
                self._shops[shop_id] = updated

        logger.info("Sheet source updated", shop_id=shop_id, sheet_id=sheet_id, sheet_name=sheet_name)
        return updated

    def delete_shop(self, shop_id: int) -> int:
        """
        Remove a shop.

        With cascading deletes the shop's records go too, so reports never
        contain rows for a shop that no longer exists.

        Returns:
            Number of metric records removed
        """
        with self._lock:
            if shop_id not in self._shops:
                raise NotFoundError(f"Shop {shop_id} not found", details={"shop_id": shop_id})
            del self._shops[shop_id]

            removed = 0
            if self.cascade_delete:
                stale = [rid for rid, r in self._records.items() if r.shop_id == shop_id]
                for record_id in stale:
                    del self._records[record_id]
                removed = len(stale)

        self._shop_locks.pop(shop_id, None)
        logger.info("Shop deleted", shop_id=shop_id, records_removed=removed)
        return removed

    # -------------------------------------------------------------------------
    # Metric records
    # -------------------------------------------------------------------------

    def add_record(self, data: MetricRecordCreate) -> MetricRecord:
        """Store one record for an existing shop"""
        validate_record(data)
        self.get_shop(data.shop_id)

        with self._lock:
            record = MetricRecord(
                id=self._next_record_id,
                shop_id=data.shop_id,
                date=data.date,
                revenue=data.revenue,
                orders=data.orders,
                cost=data.cost,
                profit=data.profit,
                roi=data.roi,
            )
            self._next_record_id += 1
            self._records[record.id] = record

        return record

    def add_records(self, items: Iterable[MetricRecordCreate]) -> List[MetricRecord]:
        """Store a batch; nothing is stored if any item is invalid"""
        batch = list(items)
        for item in batch:
            validate_record(item)
            self.get_shop(item.shop_id)
        records = [self.add_record(item) for item in batch]
        logger.debug("Metric records added", count=len(records))
        return records

    def list_records(
        self,
        shop_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[MetricRecord]:
        """
        Snapshot of records filtered by shop and inclusive date bounds.

        Records of shops that no longer exist are excluded.
        """
        if start is not None and end is not None and end < start:
            raise InvalidRange("End date precedes start date")

        with self._lock:
            snapshot = list(self._records.values())
            live_shops = set(self._shops)

        return [
            record
            for record in snapshot
            if record.shop_id in live_shops
            and (shop_id is None or record.shop_id == shop_id)
            and (start is None or record.date >= start)
            and (end is None or record.date <= end)
        ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

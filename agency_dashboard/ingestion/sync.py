"""
Sheet Synchronisation

Pulls a shop's rows from its spreadsheet, normalises them and appends the
resulting records to the store. An unreachable sheet is reported, not
raised: the shop simply gains no records.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import structlog

from agency_dashboard.core.exceptions import UpstreamUnavailable
from agency_dashboard.core.models import TimeWindow
from agency_dashboard.ingestion.normalizer import normalize_rows
from agency_dashboard.ingestion.sheets_client import GoogleSheetsClient
from agency_dashboard.storage.store import MetricStore

logger = structlog.get_logger(__name__)


class SyncStatus(str, Enum):
    """Outcome of a sheet sync"""
    SYNCED = "synced"
    UNAVAILABLE = "unavailable"


@dataclass
class SyncResult:
    """Summary of one shop sync"""
    shop_id: int
    status: SyncStatus
    records_added: int = 0
    records_skipped: int = 0
    rows_dropped: int = 0
    message: Optional[str] = None


class SheetSyncService:
    """
    Loads shop metrics from Google Sheets into the store.

    A shop bound to its own spreadsheet owns every row in it. Shops without
    their own sheet read the configured default spreadsheet, which must carry
    a shop id column. Days already loaded for a shop are skipped so repeated
    syncs do not double count.
    """

    def __init__(self, store: MetricStore, client: GoogleSheetsClient):
        self.store = store
        self.client = client

    async def sync_shop(self, shop_id: int, window: Optional[TimeWindow] = None) -> SyncResult:
        shop = self.store.get_shop(shop_id)
        defaults = self.client.settings

        spreadsheet_id = shop.sheet_id or defaults.spreadsheet_id
        sheet_name = shop.sheet_name or defaults.sheet_name

        try:
            rows = await self.client.fetch_rows(spreadsheet_id, sheet_name)
        except UpstreamUnavailable as e:
            logger.warning("Sheet unavailable, no records loaded", shop_id=shop_id, reason=e.message)
            return SyncResult(shop_id=shop_id, status=SyncStatus.UNAVAILABLE, message=e.message)

        result = normalize_rows(rows, shop_id=shop.id if shop.sheet_id else None)

        loaded_days = {record.date for record in self.store.list_records(shop_id=shop_id)}
        fresh = []
        skipped = 0
        for record in result.records:
            if record.shop_id != shop_id:
                continue
            if window is not None and not window.contains(record.date):
                continue
            if record.date in loaded_days:
                skipped += 1
                continue
            fresh.append(record)

        added = self.store.add_records(fresh)

        logger.info(
            "Shop synced from sheet",
            shop_id=shop_id,
            records_added=len(added),
            records_skipped=skipped,
            rows_dropped=result.dropped_rows,
        )
        return SyncResult(
            shop_id=shop_id,
            status=SyncStatus.SYNCED,
            records_added=len(added),
            records_skipped=skipped,
            rows_dropped=result.dropped_rows,
        )

"""
Shops API Endpoints

Shop lifecycle, profit-share settings, per-shop performance and metric
ingestion (direct or from the shop's spreadsheet).
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
import structlog

from agency_dashboard.core.models import MetricRecordCreate, ShopCreate
from agency_dashboard.core.time_windows import resolve_time_window
from agency_dashboard.core.aggregation import roi_percentage
from agency_dashboard.ingestion.sync import SheetSyncService, SyncStatus
from agency_dashboard.serving.api.dependencies import (
    get_dashboard_service,
    get_store,
    get_sync_service,
)
from agency_dashboard.serving.api.schemas import (
    AggregatedMetricsResponse,
    DailyMetricsResponse,
    ShopResponse,
    TimeWindowResponse,
)
from agency_dashboard.services.dashboard import DashboardService
from agency_dashboard.storage.store import MetricStore

router = APIRouter()
logger = structlog.get_logger(__name__)


# =============================================================================
# REQUEST/RESPONSE MODELS
# =============================================================================

class ShopCreateRequest(BaseModel):
    """New shop; share defaults to 50 when omitted"""
    name: str = Field(..., min_length=1)
    platform: str
    region: str
    profit_share_percentage: Optional[float] = None
    sheet_id: Optional[str] = None
    sheet_name: Optional[str] = None


class ProfitShareUpdate(BaseModel):
    """New profit-share percentage in [0, 100]"""
    profit_share_percentage: float


class SheetSourceUpdate(BaseModel):
    """Spreadsheet binding for a shop"""
    sheet_id: Optional[str] = None
    sheet_name: Optional[str] = None


class MetricRecordRequest(BaseModel):
    """One day of metrics; profit and ROI are derived when omitted"""
    date: date
    revenue: float = Field(0, ge=0, allow_inf_nan=False)
    orders: int = Field(0, ge=0)
    cost: float = Field(0, ge=0, allow_inf_nan=False)
    profit: Optional[float] = Field(None, allow_inf_nan=False)
    roi: Optional[float] = Field(None, allow_inf_nan=False)


class MetricRecordResponse(BaseModel):
    """Stored metric record"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    shop_id: int
    date: date
    revenue: float
    orders: int
    cost: float
    profit: float
    roi: float


class ShopDeleteResponse(BaseModel):
    """Deletion outcome"""
    success: bool
    message: str
    records_removed: int


class ShopPerformanceResponse(BaseModel):
    """Rollups for one shop"""
    model_config = ConfigDict(from_attributes=True)

    shop: ShopResponse
    window: TimeWindowResponse
    selected: AggregatedMetricsResponse
    today: AggregatedMetricsResponse
    last_seven_days: AggregatedMetricsResponse
    last_thirty_days: AggregatedMetricsResponse
    daily: List[DailyMetricsResponse]


class SyncResponse(BaseModel):
    """Outcome of a sheet pull"""
    model_config = ConfigDict(from_attributes=True)

    shop_id: int
    status: SyncStatus
    records_added: int
    records_skipped: int
    rows_dropped: int
    message: Optional[str] = None


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get("", response_model=List[ShopResponse])
async def list_shops(store: MetricStore = Depends(get_store)) -> List[ShopResponse]:
    """List all shops."""
    return [ShopResponse.model_validate(shop) for shop in store.list_shops()]


@router.post("", response_model=ShopResponse, status_code=201)
async def create_shop(
    payload: ShopCreateRequest,
    store: MetricStore = Depends(get_store),
) -> ShopResponse:
    """Add a shop."""
    shop = store.create_shop(ShopCreate(**payload.model_dump()))
    return ShopResponse.model_validate(shop)


@router.get("/{shop_id}", response_model=ShopResponse)
async def get_shop(shop_id: int, store: MetricStore = Depends(get_store)) -> ShopResponse:
    """Get a shop by id."""
    return ShopResponse.model_validate(store.get_shop(shop_id))


@router.delete("/{shop_id}", response_model=ShopDeleteResponse)
async def delete_shop(shop_id: int, store: MetricStore = Depends(get_store)) -> ShopDeleteResponse:
    """Remove a shop (and, with cascading deletes, its metric records)."""
    removed = store.delete_shop(shop_id)
    return ShopDeleteResponse(
        success=True,
        message="Shop successfully deleted",
        records_removed=removed,
    )


@router.patch("/{shop_id}/profit-share", response_model=ShopResponse)
async def update_profit_share(
    shop_id: int,
    payload: ProfitShareUpdate,
    store: MetricStore = Depends(get_store),
) -> ShopResponse:
    """
    Change a shop's profit-share percentage.

    Agency profit is always computed from the current percentage, so the
    change is visible in every reporting window immediately.
    """
    shop = store.update_profit_share(shop_id, payload.profit_share_percentage)
    return ShopResponse.model_validate(shop)


@router.patch("/{shop_id}/sheet", response_model=ShopResponse)
async def update_sheet_source(
    shop_id: int,
    payload: SheetSourceUpdate,
    store: MetricStore = Depends(get_store),
) -> ShopResponse:
    """Bind a shop to a spreadsheet tab."""
    shop = store.update_sheet_source(shop_id, payload.sheet_id, payload.sheet_name)
    return ShopResponse.model_validate(shop)


@router.get("/{shop_id}/performance", response_model=ShopPerformanceResponse)
async def get_shop_performance(
    shop_id: int,
    time_filter: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    service: DashboardService = Depends(get_dashboard_service),
) -> ShopPerformanceResponse:
    """Get today / 7 day / 30 day rollups and the recent daily series."""
    performance = service.get_shop_performance(shop_id, time_filter, start_date, end_date)
    return ShopPerformanceResponse.model_validate(performance)


@router.post("/{shop_id}/metrics", response_model=List[MetricRecordResponse], status_code=201)
async def add_metrics(
    shop_id: int,
    payload: List[MetricRecordRequest],
    store: MetricStore = Depends(get_store),
) -> List[MetricRecordResponse]:
    """Record daily metrics for a shop."""
    store.get_shop(shop_id)

    items = []
    for entry in payload:
        profit = entry.revenue - entry.cost if entry.profit is None else entry.profit
        roi = roi_percentage(profit, entry.cost) if entry.roi is None else entry.roi
        items.append(
            MetricRecordCreate(
                shop_id=shop_id,
                date=entry.date,
                revenue=entry.revenue,
                orders=entry.orders,
                cost=entry.cost,
                profit=profit,
                roi=roi,
            )
        )

    records = store.add_records(items)
    logger.info("Metrics ingested", shop_id=shop_id, records=len(records))
    return [MetricRecordResponse.model_validate(record) for record in records]


@router.post("/{shop_id}/sync", response_model=SyncResponse)
async def sync_shop(
    shop_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    sync_service: SheetSyncService = Depends(get_sync_service),
) -> SyncResponse:
    """Pull the shop's rows from its spreadsheet."""
    window = None
    if start_date is not None or end_date is not None:
        window = resolve_time_window(start=start_date, end=end_date)
    result = await sync_service.sync_shop(shop_id, window=window)
    return SyncResponse.model_validate(result)

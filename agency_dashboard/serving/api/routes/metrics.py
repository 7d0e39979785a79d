"""
Metrics API Endpoints

KPI overview with previous-period comparison, raw aggregates, window
resolution and chart series.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict
import structlog

from agency_dashboard.core.time_windows import previous_period
from agency_dashboard.serving.api.dependencies import get_dashboard_service
from agency_dashboard.serving.api.schemas import (
    AggregatedMetricsResponse,
    DailyMetricsResponse,
    TimeWindowResponse,
)
from agency_dashboard.services.dashboard import DashboardService

router = APIRouter()
logger = structlog.get_logger(__name__)


class MetricChangesResponse(BaseModel):
    """Percentage change per KPI; 0 when the previous value was 0"""
    model_config = ConfigDict(from_attributes=True)

    revenue: float
    orders: float
    cost: float
    profit: float
    roi: float


class MetricsOverviewResponse(BaseModel):
    """Current vs previous period"""
    model_config = ConfigDict(from_attributes=True)

    window: TimeWindowResponse
    previous_window: TimeWindowResponse
    current: AggregatedMetricsResponse
    previous: AggregatedMetricsResponse
    changes: MetricChangesResponse


class ResolvedWindowResponse(BaseModel):
    """A resolved window and its comparison window"""
    window: TimeWindowResponse
    previous_window: TimeWindowResponse


@router.get("/metrics", response_model=MetricsOverviewResponse)
async def get_metrics_overview(
    time_filter: Optional[str] = Query(None, description="today, yesterday, 7d, 30d, mtd, ytd or custom"),
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    shop_id: Optional[int] = None,
    service: DashboardService = Depends(get_dashboard_service),
) -> MetricsOverviewResponse:
    """
    Get KPI totals for a window compared with the preceding window.
    """
    overview = service.get_metrics_overview(time_filter, start_date, end_date, shop_id=shop_id)
    return MetricsOverviewResponse.model_validate(overview)


@router.get("/metrics/aggregate", response_model=AggregatedMetricsResponse)
async def get_aggregated_metrics(
    shop_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    service: DashboardService = Depends(get_dashboard_service),
) -> AggregatedMetricsResponse:
    """Get totals for an optional shop and optional date bounds."""
    metrics = service.get_aggregated_metrics(shop_id, start_date, end_date)
    return AggregatedMetricsResponse.model_validate(metrics)


@router.get("/metrics/time-window", response_model=ResolvedWindowResponse)
async def get_time_window(
    time_filter: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    service: DashboardService = Depends(get_dashboard_service),
) -> ResolvedWindowResponse:
    """Resolve a filter or explicit range to concrete dates."""
    window = service.resolve_window(time_filter, start_date, end_date)
    return ResolvedWindowResponse(
        window=TimeWindowResponse.model_validate(window),
        previous_window=TimeWindowResponse.model_validate(previous_period(window)),
    )


@router.get("/chart-data", response_model=List[DailyMetricsResponse])
async def get_chart_data(
    time_filter: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    service: DashboardService = Depends(get_dashboard_service),
) -> List[DailyMetricsResponse]:
    """Get per-day totals across all shops, oldest first."""
    series = service.get_chart_data(time_filter, start_date, end_date)
    logger.debug("Chart data computed", points=len(series))
    return [DailyMetricsResponse.model_validate(point) for point in series]

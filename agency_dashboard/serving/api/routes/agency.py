"""
Agency Profit API Endpoints
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict

from agency_dashboard.serving.api.dependencies import get_dashboard_service
from agency_dashboard.services.dashboard import DashboardService

router = APIRouter()


class AgencyProfitEntryResponse(BaseModel):
    """Agency cut of one shop's net profit"""
    model_config = ConfigDict(from_attributes=True)

    shop_id: int
    name: str
    revenue: float
    costs: float
    net_profit: float
    profit_share_percentage: float
    agency_profit: float


class AgencyProfitResponse(BaseModel):
    """Agency profit totals and per-shop breakdown"""
    model_config = ConfigDict(from_attributes=True)

    total: float
    total_stores: int
    total_revenue: float
    avg_profit_share: float
    breakdown: List[AgencyProfitEntryResponse]


@router.get("/agency-profit", response_model=AgencyProfitResponse)
async def get_agency_profit(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    service: DashboardService = Depends(get_dashboard_service),
) -> AgencyProfitResponse:
    """
    Get the agency's share of each shop's net profit.

    Defaults to month-to-date. Shops that lost money reduce the total.
    """
    summary = service.get_agency_profit_breakdown(start_date, end_date)
    return AgencyProfitResponse.model_validate(summary)

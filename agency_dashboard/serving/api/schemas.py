"""
Shared API Response Models
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class TimeWindowResponse(BaseModel):
    """Inclusive date window"""
    model_config = ConfigDict(from_attributes=True)

    start: date
    end: date
    days: int


class AggregatedMetricsResponse(BaseModel):
    """Summed metrics over a window; ROI in percent"""
    model_config = ConfigDict(from_attributes=True)

    revenue: float
    orders: int
    cost: float
    profit: float
    roi: float
    record_count: int


class DailyMetricsResponse(BaseModel):
    """Totals for one day"""
    model_config = ConfigDict(from_attributes=True)

    date: date
    revenue: float
    orders: int
    cost: float
    profit: float
    roi: float


class ShopResponse(BaseModel):
    """Shop as stored"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    platform: str
    region: str
    profit_share_percentage: float
    sheet_id: Optional[str] = None
    sheet_name: Optional[str] = None
    created_at: datetime

"""
Domain Models

Shops, daily metric records and the derived, request-scoped values the
metrics engine produces. Stored entities are frozen: records never change
after creation and shops are mutated by whole-object replacement.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import List, Optional


PROFIT_SHARE_MIN = 0.0
PROFIT_SHARE_MAX = 100.0
DEFAULT_PROFIT_SHARE = 50.0


class TimeFilter(str, Enum):
    """Named time filters"""
    TODAY = "today"
    YESTERDAY = "yesterday"
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    MONTH_TO_DATE = "mtd"
    YEAR_TO_DATE = "ytd"
    CUSTOM = "custom"


# =============================================================================
# STORED ENTITIES
# =============================================================================

@dataclass(frozen=True)
class Shop:
    """A tracked storefront with its agency profit-share rate"""
    id: int
    name: str
    platform: str
    region: str
    profit_share_percentage: float = DEFAULT_PROFIT_SHARE
    sheet_id: Optional[str] = None
    sheet_name: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class ShopCreate:
    """Attributes supplied when adding a shop"""
    name: str
    platform: str
    region: str
    profit_share_percentage: Optional[float] = None
    sheet_id: Optional[str] = None
    sheet_name: Optional[str] = None


@dataclass(frozen=True)
class MetricRecord:
    """One day of performance numbers for one shop"""
    id: int
    shop_id: int
    date: date
    revenue: float = 0.0
    orders: int = 0
    cost: float = 0.0
    profit: float = 0.0
    roi: float = 0.0


@dataclass(frozen=True)
class MetricRecordCreate:
    """Normalised record awaiting an id"""
    shop_id: int
    date: date
    revenue: float = 0.0
    orders: int = 0
    cost: float = 0.0
    profit: float = 0.0
    roi: float = 0.0


# =============================================================================
# DERIVED VALUES
# =============================================================================

@dataclass(frozen=True)
class TimeWindow:
    """Inclusive day-granularity interval"""
    start: date
    end: date

    @property
    def days(self) -> int:
        """Number of calendar days covered, both ends included"""
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class AggregatedMetrics:
    """Totals over a set of metric records"""
    revenue: float = 0.0
    orders: int = 0
    cost: float = 0.0
    profit: float = 0.0
    roi: float = 0.0
    record_count: int = 0


@dataclass(frozen=True)
class DailyMetrics:
    """Totals for a single calendar day"""
    date: date
    revenue: float = 0.0
    orders: int = 0
    cost: float = 0.0
    profit: float = 0.0
    roi: float = 0.0


@dataclass(frozen=True)
class MetricChanges:
    """Percentage change of each KPI against the previous period"""
    revenue: float = 0.0
    orders: float = 0.0
    cost: float = 0.0
    profit: float = 0.0
    roi: float = 0.0


@dataclass(frozen=True)
class AgencyProfitEntry:
    """Agency share of one shop's net profit"""
    shop_id: int
    name: str
    revenue: float
    costs: float
    net_profit: float
    profit_share_percentage: float
    agency_profit: float


@dataclass(frozen=True)
class AgencyProfitSummary:
    """Cross-shop agency profit rollup"""
    total: float
    total_stores: int
    total_revenue: float
    avg_profit_share: float
    breakdown: List[AgencyProfitEntry] = field(default_factory=list)

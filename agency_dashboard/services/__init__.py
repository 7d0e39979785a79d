"""
Reporting Services Module
"""
from .dashboard import DashboardService, MetricsOverview, ShopPerformance

__all__ = [
    "DashboardService",
    "MetricsOverview",
    "ShopPerformance",
]

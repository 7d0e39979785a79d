"""
API Routes Module
"""
from .health import router as health_router
from .metrics import router as metrics_router
from .shops import router as shops_router
from .agency import router as agency_router
from .sheets import router as sheets_router

__all__ = [
    "health_router",
    "metrics_router",
    "shops_router",
    "agency_router",
    "sheets_router",
]

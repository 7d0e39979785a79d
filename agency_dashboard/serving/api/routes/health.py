"""
Health Check Endpoints

Provides health and readiness checks for orchestration systems.
"""

from datetime import datetime, timezone
from typing import Dict, Any

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from agency_dashboard.config import get_settings
from agency_dashboard.ingestion.sheets_client import GoogleSheetsClient
from agency_dashboard.serving.api.dependencies import get_sheets_client, get_store
from agency_dashboard.storage.store import MetricStore

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    version: str
    environment: str
    timestamp: datetime
    checks: Dict[str, Any]


@router.get("/health", response_model=HealthResponse)
async def health_check(
    store: MetricStore = Depends(get_store),
    sheets: GoogleSheetsClient = Depends(get_sheets_client),
) -> HealthResponse:
    """
    Comprehensive health check endpoint.

    Checks:
    - Metric store contents
    - Spreadsheet source configuration (not required for health)
    """
    settings = get_settings()
    checks = {
        "store": {
            "status": "healthy",
            "shops": len(store.list_shops()),
            "records": len(store),
        },
        "sheets": {"status": "configured" if sheets.is_configured else "not_configured"},
    }

    return HealthResponse(
        status="healthy",
        version=settings.version,
        environment=settings.app_env,
        timestamp=datetime.now(timezone.utc),
        checks=checks,
    )


@router.get("/health/live")
async def liveness_check() -> Dict[str, str]:
    """
    Liveness probe endpoint.

    Returns 200 if the application is running.
    """
    return {"status": "alive"}


@router.get("/health/ready")
async def readiness_check(
    response: Response,
    store: MetricStore = Depends(get_store),
) -> Dict[str, str]:
    """
    Readiness probe endpoint.

    Ready once the metric store is attached to the application.
    """
    if store is None:
        response.status_code = 503
        return {"status": "not_ready", "reason": "store_unavailable"}
    return {"status": "ready"}

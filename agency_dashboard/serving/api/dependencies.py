"""
FastAPI Dependencies

The store, sheets client and clock live on ``app.state`` so each app
instance (and each test) works against its own store.
"""

from fastapi import Depends, Request

from agency_dashboard.ingestion.sheets_client import GoogleSheetsClient
from agency_dashboard.ingestion.sync import SheetSyncService
from agency_dashboard.services.dashboard import DashboardService
from agency_dashboard.storage.store import MetricStore


def get_store(request: Request) -> MetricStore:
    return request.app.state.store


def get_sheets_client(request: Request) -> GoogleSheetsClient:
    return request.app.state.sheets_client


def get_dashboard_service(
    request: Request,
    store: MetricStore = Depends(get_store),
) -> DashboardService:
    return DashboardService(store, today_provider=request.app.state.today_provider)


def get_sync_service(
    store: MetricStore = Depends(get_store),
    client: GoogleSheetsClient = Depends(get_sheets_client),
) -> SheetSyncService:
    return SheetSyncService(store, client)

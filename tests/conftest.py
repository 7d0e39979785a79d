"""
Test Suite Configuration
"""
import os
from datetime import date
from typing import Generator

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("SEED_SAMPLE_DATA", "false")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from fastapi.testclient import TestClient

from agency_dashboard.core.models import MetricRecordCreate, ShopCreate
from agency_dashboard.ingestion.sheets_client import GoogleSheetsClient
from agency_dashboard.config.settings import SheetsSettings
from agency_dashboard.main import create_app
from agency_dashboard.storage import MetricStore


TODAY = date(2024, 3, 10)


@pytest.fixture
def today() -> date:
    """Fixed reference day"""
    return TODAY


@pytest.fixture
def store() -> MetricStore:
    """Fresh, empty store per test"""
    return MetricStore()


@pytest.fixture
def two_shop_store(store: MetricStore) -> MetricStore:
    """
    Shop A (share 40%) and shop B (share 50%) with March 2024 metrics.

    A: revenue 1000, cost 600 over two days. B: revenue 500, cost 500.
    """
    shop_a = store.create_shop(
        ShopCreate(name="Shop A", platform="TikTok", region="USA", profit_share_percentage=40)
    )
    shop_b = store.create_shop(
        ShopCreate(name="Shop B", platform="Instagram", region="Canada", profit_share_percentage=50)
    )
    store.add_records([
        MetricRecordCreate(shop_id=shop_a.id, date=date(2024, 3, 9), revenue=400, orders=8,
                           cost=250, profit=150, roi=60),
        MetricRecordCreate(shop_id=shop_a.id, date=date(2024, 3, 10), revenue=600, orders=12,
                           cost=350, profit=250, roi=71.43),
        MetricRecordCreate(shop_id=shop_b.id, date=date(2024, 3, 10), revenue=500, orders=10,
                           cost=500, profit=0, roi=0),
    ])
    return store


@pytest.fixture
def sheets_client() -> GoogleSheetsClient:
    """Sheets client without credentials"""
    return GoogleSheetsClient(SheetsSettings(api_key=None, spreadsheet_id=None))


@pytest.fixture
def client(two_shop_store: MetricStore, sheets_client: GoogleSheetsClient) -> Generator[TestClient, None, None]:
    """API client over the two-shop store with the clock pinned to TODAY"""
    app = create_app(store=two_shop_store, sheets_client=sheets_client, today_provider=lambda: TODAY)
    with TestClient(app) as test_client:
        yield test_client

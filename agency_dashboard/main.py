"""
FastAPI Application

Main entry point for the Agency Analytics Dashboard API.
"""

from contextlib import asynccontextmanager
from datetime import date
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
import structlog

from agency_dashboard.config import get_settings
from agency_dashboard.config.logging import configure_logging
from agency_dashboard.ingestion.sheets_client import GoogleSheetsClient
from agency_dashboard.serving.api import (
    RateLimitMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    register_exception_handlers,
)
from agency_dashboard.serving.api.routes import (
    agency_router,
    health_router,
    metrics_router,
    sheets_router,
    shops_router,
)
from agency_dashboard.storage import MetricStore, seed_sample_data

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    configure_logging()
    store: MetricStore = app.state.store
    logger.info(
        "Starting Agency Analytics Dashboard API",
        shops=len(store.list_shops()),
        records=len(store),
    )
    yield
    logger.info("Shutting down...")


def create_app(
    store: Optional[MetricStore] = None,
    sheets_client: Optional[GoogleSheetsClient] = None,
    today_provider: Callable[[], date] = date.today,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Metric store to serve; a new one (seeded when enabled) by default
        sheets_client: Spreadsheet client; built from settings by default
        today_provider: Clock used to resolve named time filters

    Returns:
        Configured FastAPI app instance
    """
    settings = get_settings()

    if store is None:
        store = MetricStore(
            cascade_delete=settings.cascade_shop_delete,
            default_profit_share=settings.dashboard.default_profit_share,
        )
        if settings.seed_sample_data:
            seed_sample_data(store, today=today_provider())

    app = FastAPI(
        title="Agency Analytics Dashboard API",
        description="Per-shop revenue, order, profit and ROI metrics with agency profit-share reporting",
        version=settings.version,
        debug=settings.debug,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.store = store
    app.state.sheets_client = sheets_client or GoogleSheetsClient(settings.sheets)
    app.state.today_provider = today_provider

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=settings.security.rate_limit_requests,
        window_seconds=settings.security.rate_limit_window_seconds,
    )

    register_exception_handlers(app)

    app.include_router(health_router, prefix="/api/v1", tags=["Health"])
    app.include_router(metrics_router, prefix="/api/v1", tags=["Metrics"])
    app.include_router(shops_router, prefix="/api/v1/shops", tags=["Shops"])
    app.include_router(agency_router, prefix="/api/v1", tags=["Agency Profit"])
    app.include_router(sheets_router, prefix="/api/v1/sheets", tags=["Google Sheets"])

    @app.get("/api/v1/info")
    async def api_info():
        """API information endpoint."""
        return {
            "name": "Agency Analytics Dashboard API",
            "version": settings.version,
            "environment": settings.app_env,
            "documentation": None if settings.is_production else "/docs",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

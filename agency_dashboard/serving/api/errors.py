"""
Exception Handlers

Translate dashboard errors into JSON responses carrying the error kind.
Malformed requests are reported as ``validation_error`` with status 400.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

from agency_dashboard.core.exceptions import DashboardError, ValidationError

logger = structlog.get_logger(__name__)


async def dashboard_error_handler(request: Request, exc: DashboardError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Request failed",
        path=request.url.path,
        error=exc.kind,
        message=exc.message,
        status_code=exc.status_code,
    )
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reshape FastAPI's 422 payload into a 400 ``validation_error``"""
    errors = [
        {"loc": [str(part) for part in error.get("loc", ())], "message": error.get("msg", "")}
        for error in exc.errors()
    ]
    return await dashboard_error_handler(
        request,
        ValidationError("Malformed request", details={"errors": errors}),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DashboardError, dashboard_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

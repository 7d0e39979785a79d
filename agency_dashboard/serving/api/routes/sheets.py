"""
Google Sheets Integration Endpoints
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, SecretStr

from agency_dashboard.core.exceptions import ValidationError
from agency_dashboard.ingestion.sheets_client import GoogleSheetsClient, validate_api_key
from agency_dashboard.serving.api.dependencies import get_sheets_client

router = APIRouter()


class SheetsConnectRequest(BaseModel):
    """API key used for every subsequent sheet pull"""
    api_key: SecretStr


class SheetsConnectResponse(BaseModel):
    success: bool
    message: str


class SheetsStatusResponse(BaseModel):
    configured: bool


@router.post("/connect", response_model=SheetsConnectResponse)
async def connect_sheets(
    payload: SheetsConnectRequest,
    client: GoogleSheetsClient = Depends(get_sheets_client),
) -> SheetsConnectResponse:
    """Store a Google Sheets API key after checking its format."""
    api_key = payload.api_key.get_secret_value()
    if not validate_api_key(api_key):
        raise ValidationError("Invalid API key format. Please check your Google Sheets API key.")

    client.set_api_key(api_key)
    return SheetsConnectResponse(success=True, message="API key saved successfully")


@router.get("/status", response_model=SheetsStatusResponse)
async def sheets_status(
    client: GoogleSheetsClient = Depends(get_sheets_client),
) -> SheetsStatusResponse:
    """Report whether an API key is configured."""
    return SheetsStatusResponse(configured=client.is_configured)

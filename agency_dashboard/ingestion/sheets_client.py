"""
Google Sheets Client

Reads a sheet tab through the Sheets API v4 ``values`` endpoint using an API
key. A single request per call; failures surface as ``UpstreamUnavailable``
and are never retried here.
"""

import re
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
import structlog

from agency_dashboard.config import get_settings
from agency_dashboard.config.settings import SheetsSettings
from agency_dashboard.core.exceptions import UpstreamUnavailable

logger = structlog.get_logger(__name__)

API_KEY_PATTERN = re.compile(r"^AIza[0-9A-Za-z_\-]{35}$")


def validate_api_key(api_key: Optional[str]) -> bool:
    """Check the shape of a Google API key (``AIza`` prefix, 39 characters)"""
    return bool(api_key) and API_KEY_PATTERN.match(api_key.strip()) is not None


def rows_to_dicts(values: List[List[Any]]) -> List[Dict[str, Any]]:
    """Turn a header-first value grid into row mappings; short rows are padded"""
    if not values:
        return []

    header = [str(cell).strip() for cell in values[0]]
    rows = []
    for raw in values[1:]:
        if not any(str(cell).strip() for cell in raw):
            continue
        padded = list(raw) + [None] * (len(header) - len(raw))
        rows.append(dict(zip(header, padded)))
    return rows


class GoogleSheetsClient:
    """
    Async Sheets API client.

    Example:
        client = GoogleSheetsClient()
        rows = await client.fetch_rows("1AbC...", "Sales Data")
    """

    def __init__(
        self,
        settings: Optional[SheetsSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings().sheets
        self.api_key: Optional[str] = (
            self.settings.api_key.get_secret_value() if self.settings.api_key else None
        )
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def set_api_key(self, api_key: str) -> None:
        self.api_key = api_key.strip()
        logger.info("Google Sheets API key updated")

    async def fetch_values(self, spreadsheet_id: str, sheet_name: str) -> List[List[Any]]:
        """
        Fetch the raw value grid of a sheet tab.

        Raises:
            UpstreamUnavailable: Missing credentials, transport or HTTP error
        """
        if not self.api_key or not spreadsheet_id:
            raise UpstreamUnavailable("Google Sheets API key or spreadsheet ID is missing")

        path = f"/spreadsheets/{quote(spreadsheet_id, safe='')}/values/{quote(sheet_name, safe='')}"

        try:
            async with httpx.AsyncClient(
                base_url=self.settings.base_url,
                timeout=self.settings.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.get(path, params={"key": self.api_key})
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Sheets API returned an error",
                spreadsheet_id=spreadsheet_id,
                status_code=e.response.status_code,
            )
            raise UpstreamUnavailable(
                "Failed to fetch data from Google Sheets",
                details={"status_code": e.response.status_code},
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(
                "Sheets API request failed",
                spreadsheet_id=spreadsheet_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise UpstreamUnavailable("Failed to fetch data from Google Sheets") from e

        values = payload.get("values", []) if isinstance(payload, dict) else []
        logger.info(
            "Sheet fetched",
            spreadsheet_id=spreadsheet_id,
            sheet_name=sheet_name,
            rows=max(len(values) - 1, 0),
        )
        return values

    async def fetch_rows(self, spreadsheet_id: str, sheet_name: str) -> List[Dict[str, Any]]:
        """Fetch a sheet tab as header-keyed row mappings"""
        return rows_to_dicts(await self.fetch_values(spreadsheet_id, sheet_name))

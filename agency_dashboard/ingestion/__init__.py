"""
Data Ingestion Module
"""
from .normalizer import normalize_rows, NormalizationResult
from .sheets_client import GoogleSheetsClient, rows_to_dicts, validate_api_key
from .sync import SheetSyncService, SyncResult, SyncStatus

__all__ = [
    "normalize_rows",
    "NormalizationResult",
    "GoogleSheetsClient",
    "rows_to_dicts",
    "validate_api_key",
    "SheetSyncService",
    "SyncResult",
    "SyncStatus",
]

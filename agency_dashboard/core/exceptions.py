"""
Dashboard Error Taxonomy

Every error raised by the core carries a machine-readable ``kind`` and the
HTTP status the API layer should answer with.
"""

from typing import Any, Dict, Optional


class DashboardError(Exception):
    """Base class for all dashboard errors"""

    kind = "dashboard_error"
    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.kind, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(DashboardError):
    """Input failed validation (profit share out of range, malformed range)"""

    kind = "validation_error"
    status_code = 400


class InvalidRange(ValidationError):
    """Date range whose end precedes its start"""

    kind = "invalid_range"


class UnknownFilter(DashboardError):
    """Unrecognised time filter token"""

    kind = "unknown_filter"
    status_code = 400


class NotFoundError(DashboardError):
    """Referenced shop does not exist"""

    kind = "not_found"
    status_code = 404


class UpstreamUnavailable(DashboardError):
    """External metrics source could not be reached or read"""

    kind = "upstream_unavailable"
    status_code = 502

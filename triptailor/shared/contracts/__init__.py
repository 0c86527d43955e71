"""Data contracts shared by the pipeline stages."""

from triptailor.shared.contracts.travel_details import (
    NOT_SPECIFIED,
    TravelDetails,
    parse_travel_details,
)
from triptailor.shared.contracts.tool_results import (
    CAPABILITIES,
    FALLBACK_SOURCE,
    LIVE_SOURCE,
    SearchResult,
    error_marker,
    is_error_marker,
    is_fallback,
    tools_used,
)

__all__ = [
    "NOT_SPECIFIED",
    "TravelDetails",
    "parse_travel_details",
    "CAPABILITIES",
    "FALLBACK_SOURCE",
    "LIVE_SOURCE",
    "SearchResult",
    "error_marker",
    "is_error_marker",
    "is_fallback",
    "tools_used",
]

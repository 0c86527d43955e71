"""
Tool results contract.

ToolResults is a plain dict keyed by capability. A key is present only when
its precondition held; its value is either a SearchResult payload (live or
fallback) or an error marker {"error": reason}. An optional top-level
"error" signals that gathering failed wholesale.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


LIVE_SOURCE = "SerpAPI"
FALLBACK_SOURCE = "Fallback recommendations"

CAPABILITIES = ("weather", "flights", "hotels", "attractions", "restaurants")


class SearchResult(BaseModel):
    """Normalized output of one capability adapter."""

    location: str = Field(description="Location the search was run for")
    search_type: str = Field(description="Human readable capability label")
    results: List[Dict[str, Any]] = Field(
        default_factory=list, description="Items in provider rank order"
    )
    total_found: int = Field(default=0, ge=0)
    data_source: str = Field(
        default=LIVE_SOURCE, description="Live provider or fallback marker"
    )
    note: Optional[str] = Field(default=None)
    error: Optional[str] = Field(
        default=None, description="Provider failure reason (fallback only)"
    )


def error_marker(reason: str) -> Dict[str, str]:
    return {"error": reason}


def is_error_marker(result: Any) -> bool:
    """True for {"error": ...} with no payload (attempted but failed)."""
    return isinstance(result, dict) and set(result) == {"error"}


def is_fallback(result: Any) -> bool:
    return isinstance(result, dict) and result.get("data_source") == FALLBACK_SOURCE


def tools_used(tool_results: Dict[str, Any]) -> List[str]:
    """Capability keys actually populated, in canonical order."""
    return [key for key in CAPABILITIES if key in tool_results]

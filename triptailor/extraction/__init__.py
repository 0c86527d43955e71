"""
Detail extraction for free-text travel requests.

Structured LLM extraction with a regex heuristic fallback.
"""

from triptailor.extraction.extractor import DetailExtractor
from triptailor.extraction.heuristics import extract_basic_travel_info
from triptailor.extraction.response_parser import (
    extract_json_from_response,
    parse_extraction_response,
)

__all__ = [
    "DetailExtractor",
    "extract_basic_travel_info",
    "extract_json_from_response",
    "parse_extraction_response",
]

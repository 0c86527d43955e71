"""
Response parser for travel detail extraction.

Locates the JSON object inside a raw completion (which may be wrapped in
prose or code fences) and validates it into TravelDetails.
"""

import json
import logging

from triptailor.shared.contracts.travel_details import TravelDetails, parse_travel_details
from triptailor.shared.errors import ParseError


logger = logging.getLogger(__name__)


def extract_json_from_response(raw_response: str) -> str:
    """
    Slice from the first '{' to the last '}'.

    Args:
        raw_response: Raw LLM response string

    Returns:
        Candidate JSON object text

    Raises:
        ParseError: If no object boundaries are found
    """
    content = raw_response.strip()
    first_brace = content.find("{")
    last_brace = content.rfind("}")

    if first_brace == -1 or last_brace <= first_brace:
        raise ParseError("No JSON object boundaries found", raw=raw_response)

    return content[first_brace : last_brace + 1]


def parse_extraction_response(raw_response: str) -> TravelDetails:
    """
    Parse a raw extraction completion into TravelDetails.

    Raises:
        ParseError: On missing boundaries, invalid JSON or failed validation
    """
    json_str = extract_json_from_response(raw_response)

    try:
        payload = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ParseError(f"Failed to parse travel details JSON: {e}", raw=json_str)

    return parse_travel_details(payload)

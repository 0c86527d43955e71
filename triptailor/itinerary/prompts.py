"""Prompt templates for itinerary synthesis."""

import json
from typing import Any, Dict

from triptailor.shared.contracts.tool_results import CAPABILITIES
from triptailor.shared.contracts.travel_details import TravelDetails


SYSTEM_PROMPT = """You are TripTailor, an intelligent travel planning assistant. Create detailed, helpful travel itineraries using the available data.

When tools return fallback data or errors, acknowledge this gracefully and provide helpful alternative suggestions.

Always create comprehensive itineraries with:
- Day-by-day schedules with specific times
- Practical travel advice
- Budget considerations
- Alternative options
- Local insights and tips

Format responses in clear, readable markdown suitable for travelers to follow."""


ITINERARY_PROMPT_TEMPLATE = """Create a detailed travel itinerary based on: "{message}"

Travel Details:
{details}

Available Data:
{data}

Create a comprehensive itinerary with:
- A day-by-day (or time-blocked) schedule with times
- Specific recommendations from the data, using exact names and links where present
- Practical travel advice
- Budget considerations
- Alternative options

Any result whose data_source is "Fallback recommendations", or that carries an "error", is not live data: say so plainly and point the traveler to where they can check directly.

Format as clear markdown for easy reading."""


def format_tool_results(tool_results: Dict[str, Any]) -> str:
    """Pretty-printed results per capability, {} for capabilities not run."""
    sections = {key: tool_results.get(key, {}) for key in CAPABILITIES}
    if "error" in tool_results:
        sections["error"] = tool_results["error"]
    return json.dumps(sections, indent=2, ensure_ascii=False, default=str)


def build_itinerary_prompt(
    message: str,
    details: TravelDetails,
    tool_results: Dict[str, Any],
) -> str:
    return ITINERARY_PROMPT_TEMPLATE.format(
        message=message,
        details=json.dumps(details.to_api(), indent=2, ensure_ascii=False),
        data=format_tool_results(tool_results),
    )

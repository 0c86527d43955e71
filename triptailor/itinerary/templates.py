"""
Templated itinerary used when no model is available.

Assembled directly from whichever TravelDetails and ToolResults fields are
present; deterministic and never empty.
"""

from typing import Any, Dict, List

from triptailor.shared.contracts.tool_results import CAPABILITIES, is_error_marker, is_fallback
from triptailor.shared.contracts.travel_details import TravelDetails


BOOKING_SITES = {
    "flights": "Google Flights, Kayak, Expedia or Skyscanner",
    "hotels": "Booking.com, Hotels.com or Expedia",
    "attractions": "TripAdvisor or the local tourism website",
    "restaurants": "Google Maps, TripAdvisor or Yelp",
    "weather": "Weather.com or AccuWeather",
}

TRAVEL_TIPS = [
    "Book accommodations in advance for better rates",
    "Check local weather before packing",
    "Research local customs and etiquette",
    "Consider purchasing travel insurance",
    "Keep digital and physical copies of important documents",
]


def _items(result: Any) -> List[Dict[str, Any]]:
    if not isinstance(result, dict) or is_error_marker(result):
        return []
    return [item for item in result.get("results") or [] if isinstance(item, dict)]


def _item_line(item: Dict[str, Any], *extra_keys: str) -> str:
    line = f"**{item.get('name', 'Option')}**"
    extras = [str(item[key]) for key in extra_keys if item.get(key) not in (None, "", "N/A")]
    if extras:
        line += " - " + ", ".join(extras)
    if item.get("link"):
        line += f" ([link]({item['link']}))"
    return f"- {line}"


def _section(
    title: str,
    key: str,
    tool_results: Dict[str, Any],
    limit: int,
    extra_keys: tuple,
    empty_hint: str,
) -> List[str]:
    lines = [f"### {title}"]
    items = _items(tool_results.get(key))[:limit]
    if items:
        lines.extend(_item_line(item, *extra_keys) for item in items)
    else:
        lines.append(f"- {empty_hint}")
    lines.append("")
    return lines


def build_fallback_itinerary(
    message: str,
    details: TravelDetails,
    tool_results: Dict[str, Any],
) -> str:
    """
    Markdown itinerary without a model call.

    Args:
        message: The original request
        details: Extracted travel details
        tool_results: Gathered results (may be empty or partial)

    Returns:
        Non-empty markdown
    """
    destination = details.to_location if details.is_specified("to_location") else "your destination"
    duration = details.duration if details.is_specified("duration") else "your trip"

    lines = [
        f"# Travel Itinerary for {destination}",
        "",
        f'Thank you for choosing TripTailor! Based on your request: "{message}"',
        "",
        "## Trip Overview",
        f"- **Destination**: {destination}",
    ]
    if details.is_specified("from_location"):
        lines.append(f"- **Departing from**: {details.from_location}")
    if details.is_specified("departure_date"):
        dates = details.departure_date
        if details.is_specified("return_date"):
            dates += f" to {details.return_date}"
        lines.append(f"- **Dates**: {dates}")
    lines.append(f"- **Duration**: {duration}")
    lines.append(f"- **Travelers**: {details.travelers} person(s)")
    if details.is_specified("budget"):
        budget = details.budget if details.budget.startswith("$") else f"${details.budget}"
        lines.append(f"- **Budget**: {budget}")
    if details.is_specified("special_requirements"):
        lines.append(f"- **Trip style**: {details.special_requirements}")
    if details.preferences:
        lines.append(f"- **Interests**: {', '.join(details.preferences)}")
    lines.extend(["", "## Recommendations", ""])

    if "flights" in tool_results:
        lines.extend(
            _section(
                "Flights", "flights", tool_results, 3, ("airline", "price", "duration"),
                f"Compare fares on {BOOKING_SITES['flights']}",
            )
        )
    lines.extend(
        _section(
            "Accommodations", "hotels", tool_results, 2, ("rating", "price"),
            "Check popular booking sites for hotels in the area",
        )
    )
    lines.extend(
        _section(
            "Attractions", "attractions", tool_results, 3, ("rating",),
            "Research popular tourist attractions in the destination",
        )
    )
    lines.extend(
        _section(
            "Dining", "restaurants", tool_results, 3, ("cuisine", "price"),
            "Look for highly-rated local restaurants",
        )
    )

    weather = _items(tool_results.get("weather"))
    if weather:
        forecast = weather[0]
        lines.extend(
            [
                "### Weather",
                f"- {forecast.get('condition', 'Variable')}, {forecast.get('temperature', 'check local forecast')}",
                "",
            ]
        )

    degraded = [
        key
        for key in CAPABILITIES
        if key in tool_results
        and (is_fallback(tool_results[key]) or is_error_marker(tool_results[key]))
    ]
    if degraded or "error" in tool_results:
        lines.append("## Check These Directly")
        if "error" in tool_results:
            lines.append(f"- {tool_results['error']}")
        for key in degraded:
            lines.append(
                f"- Live {key} data was unavailable; check {BOOKING_SITES[key]} for current details"
            )
        lines.append("")

    lines.append("## Travel Tips")
    lines.extend(f"- {tip}" for tip in TRAVEL_TIPS)
    lines.extend(
        [
            "",
            "*This itinerary was created with available data. For the most current "
            "information, please verify details directly with service providers.*",
        ]
    )
    return "\n".join(lines)

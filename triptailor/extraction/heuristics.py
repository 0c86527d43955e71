"""
Regex-based travel detail extraction.

Used when the model is unavailable or its output cannot be validated.
Pure function of the message text: the same message always yields the
same TravelDetails. Per field, the first match in source order wins and
unmatched fields keep their sentinel.
"""

import re
from typing import Dict, List, Tuple

from triptailor.shared.contracts.travel_details import TravelDetails


# Words that end a location phrase ("Tokyo next month", "Paris for July")
_MONTHS = (
    "january|february|march|april|may|june|july|august|september|october|"
    "november|december|jan|feb|mar|apr|jun|jul|aug|sep|sept|oct|nov|dec"
)
_STOP_WORDS = (
    r"next|this|on|in|for|with|during|from|to|and|or|around|between|by|"
    r"at|under|over|within|departing|leaving|returning|starting|looking|"
    r"need|needing|traveling|travelling|i|we|my|our|please|"
    + _MONTHS
)
_WORD = rf"(?!(?:{_STOP_WORDS})\b)[A-Za-z][\w'-]*"
_LOCATION = rf"{_WORD}(?:[ \t]+{_WORD})*"

FROM_TO_PATTERN = re.compile(
    rf"\bfrom\s+(?P<origin>{_LOCATION})\s+to\s+(?P<destination>{_LOCATION})",
    re.IGNORECASE,
)
DESTINATION_PATTERN = re.compile(
    rf"\b(?:going to|visit|traveling to|trip to)\s+(?P<destination>{_LOCATION})",
    re.IGNORECASE,
)
TRAVELERS_PATTERN = re.compile(r"(\d+)\s+(?:people|travelers|adults|persons)", re.IGNORECASE)
BUDGET_PATTERN = re.compile(r"\$(\d+(?:,\d+)*)")
DURATION_PATTERN = re.compile(r"(\d+)\s+days?\b", re.IGNORECASE)
ISO_DATE_PATTERN = re.compile(r"\b(\d{4}-\d{2}-\d{2})\b")
REQUIREMENT_PATTERN = re.compile(r"\b(romantic|family|kids|business)\b", re.IGNORECASE)

SPECIAL_REQUIREMENTS: Dict[str, str] = {
    "romantic": "romantic trip",
    "family": "family trip",
    "kids": "family trip",
    "business": "business trip",
}

# keyword -> preference tag
PREFERENCE_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    (r"food|foodie|cuisine|restaurants?", "food"),
    (r"museums?|history|historic|culture|cultural", "culture"),
    (r"beach(?:es)?", "beach"),
    (r"hiking|nature|outdoors?", "nature"),
    (r"nightlife|bars|clubs", "nightlife"),
    (r"shopping", "shopping"),
    (r"luxury", "luxury"),
    (r"adventure", "adventure"),
)


def _clean_location(value: str) -> str:
    return re.sub(r"\s+", " ", value).strip(" '-")


def _match_preferences(message: str) -> List[str]:
    found = []
    for pattern, tag in PREFERENCE_KEYWORDS:
        match = re.search(rf"\b(?:{pattern})\b", message, re.IGNORECASE)
        if match:
            found.append((match.start(), tag))
    return [tag for _, tag in sorted(found)]


def extract_basic_travel_info(message: str) -> TravelDetails:
    """
    Heuristic extraction from free text.

    Args:
        message: The user's travel request

    Returns:
        Fully populated TravelDetails (sentinels where nothing matched)
    """
    fields: Dict[str, object] = {}
    message = message or ""

    from_to = FROM_TO_PATTERN.search(message)
    if from_to:
        fields["from_location"] = _clean_location(from_to.group("origin"))
        fields["to_location"] = _clean_location(from_to.group("destination"))

    # Destination-only phrasing is skipped once a destination is set
    if "to_location" not in fields:
        destination = DESTINATION_PATTERN.search(message)
        if destination:
            fields["to_location"] = _clean_location(destination.group("destination"))

    dates = ISO_DATE_PATTERN.findall(message)
    if dates:
        fields["departure_date"] = dates[0]
        if len(dates) > 1:
            fields["return_date"] = dates[1]

    travelers = TRAVELERS_PATTERN.search(message)
    if travelers:
        fields["travelers"] = int(travelers.group(1))

    budget = BUDGET_PATTERN.search(message)
    if budget:
        fields["budget"] = budget.group(1)

    duration = DURATION_PATTERN.search(message)
    if duration:
        days = int(duration.group(1))
        fields["duration"] = f"{days} day" if days == 1 else f"{days} days"

    requirement = REQUIREMENT_PATTERN.search(message)
    if requirement:
        fields["special_requirements"] = SPECIAL_REQUIREMENTS[requirement.group(1).lower()]

    preferences = _match_preferences(message)
    if preferences:
        fields["preferences"] = preferences

    return TravelDetails(**fields)

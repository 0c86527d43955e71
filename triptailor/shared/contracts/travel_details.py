"""
Travel details contract.

Structured extraction of a user's trip request. Every field always holds a
value: absent information is the "not specified" sentinel, because prompt
templates interpolate these fields directly.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from triptailor.shared.errors import ParseError


NOT_SPECIFIED = "not specified"

# camelCase keys the extraction prompt asks the model to return
REQUIRED_KEYS = (
    "fromLocation",
    "toLocation",
    "departureDate",
    "returnDate",
    "travelers",
    "budget",
    "preferences",
    "duration",
    "specialRequirements",
)


class TravelDetails(BaseModel):
    """Trip parameters extracted from one user message."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    from_location: str = Field(
        default=NOT_SPECIFIED, alias="fromLocation", description="Departure city"
    )
    to_location: str = Field(
        default=NOT_SPECIFIED, alias="toLocation", description="Destination city"
    )
    departure_date: str = Field(
        default=NOT_SPECIFIED, alias="departureDate", description="YYYY-MM-DD"
    )
    return_date: str = Field(
        default=NOT_SPECIFIED, alias="returnDate", description="YYYY-MM-DD"
    )
    travelers: int = Field(default=1, description="Number of travelers (>= 1)")
    budget: str = Field(default=NOT_SPECIFIED, description="Free-form amount")
    preferences: List[str] = Field(
        default_factory=list, description="Free-form tags, de-duplicated"
    )
    duration: str = Field(default=NOT_SPECIFIED, description="e.g. '5 days'")
    special_requirements: str = Field(
        default=NOT_SPECIFIED, alias="specialRequirements"
    )

    @field_validator(
        "from_location",
        "to_location",
        "departure_date",
        "return_date",
        "budget",
        "duration",
        "special_requirements",
        mode="before",
    )
    @classmethod
    def _sentinel_for_missing(cls, value: Any) -> Any:
        if value is None:
            return NOT_SPECIFIED
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, str):
            value = value.strip()
            if not value or value.lower() in ("null", "none", "n/a", NOT_SPECIFIED):
                return NOT_SPECIFIED
        return value

    @field_validator("travelers", mode="before")
    @classmethod
    def _at_least_one_traveler(cls, value: Any) -> Any:
        if value is None or value == "" or value == NOT_SPECIFIED:
            return 1
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value.strip())
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return max(int(value), 1)
        return value

    @field_validator("preferences", mode="before")
    @classmethod
    def _unique_tags(cls, value: Any) -> Any:
        if value is None or value == NOT_SPECIFIED:
            return []
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, (list, tuple, set)):
            seen = []
            for tag in value:
                tag = str(tag).strip()
                if tag and tag not in seen:
                    seen.append(tag)
            return seen
        return value

    @classmethod
    def defaults(cls) -> "TravelDetails":
        """All-sentinel record."""
        return cls()

    def is_specified(self, field_name: str) -> bool:
        return getattr(self, field_name) != NOT_SPECIFIED

    def to_api(self) -> Dict[str, Any]:
        """camelCase dict for prompts and HTTP responses."""
        return self.model_dump(by_alias=True)


def parse_travel_details(payload: Any) -> TravelDetails:
    """
    Validate a decoded model response into TravelDetails.

    All nine keys must be present; values are repaired against the
    sentinel rules. Unknown keys are dropped.

    Raises:
        ParseError: If the payload is not an object, misses keys, or has
            values of the wrong type.
    """
    if not isinstance(payload, dict):
        raise ParseError(f"Expected a JSON object, got {type(payload).__name__}")

    missing = [key for key in REQUIRED_KEYS if key not in payload]
    if missing:
        raise ParseError(f"Travel details missing required keys: {missing}")

    try:
        return TravelDetails.model_validate({k: payload[k] for k in REQUIRED_KEYS})
    except ValidationError as e:
        raise ParseError(f"Travel details failed validation: {e}")

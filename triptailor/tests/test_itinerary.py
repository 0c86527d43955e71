"""
Tests for itinerary synthesis and the templated fallback.
"""

import asyncio

import pytest

from triptailor.itinerary.prompts import SYSTEM_PROMPT, build_itinerary_prompt
from triptailor.itinerary.synthesizer import ItinerarySynthesizer
from triptailor.itinerary.templates import build_fallback_itinerary
from triptailor.shared.contracts.travel_details import TravelDetails
from triptailor.shared.errors import ModelUnavailable
from triptailor.tools.mock_data import fallback_hotels, fallback_result


MESSAGE = "Family trip to Orlando for Disney World"


class FakeLLM:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def complete(self, system_prompts, user_message):
        self.calls.append((list(system_prompts), user_message))
        if self.error is not None:
            raise self.error
        return self.response


def _live(name):
    return {
        "location": "Orlando",
        "search_type": "Test",
        "results": [{"name": name, "rating": 4.5}],
        "total_found": 1,
        "data_source": "SerpAPI",
    }


# ============================================================================
# TestFallbackItinerary
# ============================================================================


class TestFallbackItinerary:
    """Tests for the templated itinerary."""

    def test_mentions_destination(self):
        details = TravelDetails(to_location="Orlando", special_requirements="family trip")
        itinerary = build_fallback_itinerary(MESSAGE, details, {})

        assert itinerary.startswith("# Travel Itinerary for Orlando")
        assert "family trip" in itinerary
        assert "## Travel Tips" in itinerary

    def test_unknown_destination(self):
        itinerary = build_fallback_itinerary("hello", TravelDetails.defaults(), {})
        assert "your destination" in itinerary
        assert itinerary.strip()

    def test_live_results_listed(self):
        details = TravelDetails(to_location="Orlando")
        results = {"attractions": _live("Epcot"), "hotels": _live("Grand Floridian")}

        itinerary = build_fallback_itinerary(MESSAGE, details, results)

        assert "**Epcot**" in itinerary
        assert "**Grand Floridian**" in itinerary
        assert "Check These Directly" not in itinerary

    def test_flights_section_only_when_attempted(self):
        details = TravelDetails(to_location="Orlando")
        assert "### Flights" not in build_fallback_itinerary(MESSAGE, details, {})
        itinerary = build_fallback_itinerary(MESSAGE, details, {"flights": {"error": "down"}})
        assert "### Flights" in itinerary

    def test_degraded_results_called_out(self):
        details = TravelDetails(to_location="Orlando")
        results = {
            "hotels": fallback_result(
                "Orlando", "Hotels", fallback_hotels("Orlando"), "note", "HTTP 500"
            ),
            "weather": {"error": "weather search timed out"},
        }

        itinerary = build_fallback_itinerary(MESSAGE, details, results)

        assert "## Check These Directly" in itinerary
        assert "Live hotels data was unavailable" in itinerary
        assert "Live weather data was unavailable" in itinerary

    def test_top_level_error_surfaced(self):
        details = TravelDetails(to_location="Orlando")
        itinerary = build_fallback_itinerary(MESSAGE, details, {"error": "gathering failed"})
        assert "- gathering failed" in itinerary

    def test_deterministic(self):
        details = TravelDetails(to_location="Orlando", budget="1500")
        first = build_fallback_itinerary(MESSAGE, details, {})
        assert first == build_fallback_itinerary(MESSAGE, details, {})
        assert "$1500" in first


# ============================================================================
# TestItinerarySynthesizer
# ============================================================================


class TestItinerarySynthesizer:
    """Tests for model-first synthesis with templated fallback."""

    def test_no_model_uses_template(self):
        details = TravelDetails(to_location="Orlando")
        itinerary = asyncio.run(ItinerarySynthesizer(None).synthesize(MESSAGE, details, {}))
        assert "Orlando" in itinerary

    def test_model_response_returned(self):
        llm = FakeLLM(response="# Your Orlando Adventure")
        details = TravelDetails(to_location="Orlando")

        itinerary = asyncio.run(ItinerarySynthesizer(llm).synthesize(MESSAGE, details, {}))

        assert itinerary == "# Your Orlando Adventure"
        system_prompts, user_message = llm.calls[0]
        assert system_prompts[0] == SYSTEM_PROMPT
        assert "Orlando" in system_prompts[1]
        assert user_message == MESSAGE

    @pytest.mark.parametrize("error", [ModelUnavailable("down"), ValueError("bad")])
    def test_model_failure_uses_template(self, error):
        details = TravelDetails(to_location="Orlando")
        itinerary = asyncio.run(
            ItinerarySynthesizer(FakeLLM(error=error)).synthesize(MESSAGE, details, {})
        )
        assert itinerary.startswith("# Travel Itinerary for Orlando")


class TestItineraryPrompt:
    def test_absent_capabilities_rendered_empty(self):
        details = TravelDetails(to_location="Orlando")
        prompt = build_itinerary_prompt(MESSAGE, details, {"hotels": _live("Grand Floridian")})

        assert MESSAGE in prompt
        assert "Grand Floridian" in prompt
        assert '"toLocation": "Orlando"' in prompt

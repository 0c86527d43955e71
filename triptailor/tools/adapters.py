"""
Capability adapter variants.

Each variant only supplies its query builder, payload normalizer and
fallback items; the fallback-on-failure contract lives in CapabilityAdapter.
"""

from typing import Any, Dict, List, Optional

from triptailor.shared.errors import ProviderUnavailable
from triptailor.tools.base import CapabilityAdapter, is_valid_date, format_location
from triptailor.tools import mock_data


class PlacesSearch(CapabilityAdapter):
    """Tourist attractions and landmarks (google_maps local results)."""

    capability = "attractions"
    search_type = "Tourist Attractions & Places"
    timeout = 10.0
    max_results = 8

    def build_params(self, location: str, query: str = "tourist attractions landmarks", **_: Any):
        return {"engine": "google_maps", "q": f"{query} in {location}", "hl": "en"}

    def normalize(self, data: Dict[str, Any], location: str, **_: Any) -> List[Dict[str, Any]]:
        return [
            {
                "name": place.get("title") or "Unknown",
                "rating": place.get("rating", "N/A"),
                "address": place.get("address") or "Address not available",
                "link": place.get("website"),
                "phone": place.get("phone"),
                "type": place.get("type") or "Attraction",
                "description": place.get("description")
                or place.get("snippet")
                or "No description available",
                "rank": index + 1,
            }
            for index, place in enumerate(data.get("local_results") or [])
        ]

    def fallback_items(self, location: str, **_: Any) -> List[Dict[str, Any]]:
        return mock_data.fallback_places(location)

    def fallback_note(self, location: str) -> str:
        return "API temporarily unavailable - showing popular recommendations"


class HotelsSearch(CapabilityAdapter):
    """Hotel properties (google_hotels)."""

    capability = "hotels"
    search_type = "Hotels & Accommodation"
    timeout = 15.0
    max_results = 6

    def build_params(
        self,
        location: str,
        check_in: Optional[str] = None,
        check_out: Optional[str] = None,
        adults: Optional[int] = None,
        **_: Any,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "engine": "google_hotels",
            "q": location,
            "hl": "en",
            "gl": "us",
            "currency": "USD",
        }
        # Invalid or missing dates are dropped rather than sent
        if is_valid_date(check_in):
            params["check_in_date"] = check_in
        if is_valid_date(check_out):
            params["check_out_date"] = check_out
        if adults and 0 < adults <= 10:
            params["adults"] = adults
        return params

    def normalize(self, data: Dict[str, Any], location: str, **_: Any) -> List[Dict[str, Any]]:
        hotels = []
        for hotel in data.get("properties") or []:
            rate = hotel.get("rate_per_night") or {}
            price = rate.get("lowest") if isinstance(rate, dict) else rate
            hotels.append(
                {
                    "name": hotel.get("name") or "Hotel",
                    "rating": hotel.get("overall_rating", "N/A"),
                    "price": price or "Check availability",
                    "link": hotel.get("link"),
                    "amenities": hotel.get("amenities") or [],
                    "description": hotel.get("description") or "Hotel accommodation",
                }
            )
        return hotels

    def fallback_items(self, location: str, **_: Any) -> List[Dict[str, Any]]:
        return mock_data.fallback_hotels(location)

    def fallback_note(self, location: str) -> str:
        return "API temporarily unavailable - check Booking.com, Hotels.com or Expedia"


class RestaurantsSearch(CapabilityAdapter):
    """Restaurants (google_maps local results)."""

    capability = "restaurants"
    search_type = "Restaurants & Dining"
    timeout = 10.0
    max_results = 8

    def build_params(
        self,
        location: str,
        cuisine: Optional[str] = None,
        price_range: Optional[str] = None,
        **_: Any,
    ) -> Dict[str, Any]:
        query = f"{cuisine} restaurants in {location}" if cuisine else f"restaurants in {location}"
        if price_range:
            query += f" {price_range}"
        return {"engine": "google_maps", "q": query, "hl": "en"}

    def normalize(
        self,
        data: Dict[str, Any],
        location: str,
        cuisine: Optional[str] = None,
        price_range: Optional[str] = None,
        **_: Any,
    ) -> List[Dict[str, Any]]:
        return [
            {
                "name": restaurant.get("title") or "Restaurant",
                "rating": restaurant.get("rating", "N/A"),
                "address": restaurant.get("address") or location,
                "link": restaurant.get("website"),
                "phone": restaurant.get("phone"),
                "cuisine": restaurant.get("type") or cuisine or "Various",
                "price": restaurant.get("price") or price_range or "N/A",
                "description": restaurant.get("description")
                or restaurant.get("snippet")
                or "Local dining option",
            }
            for restaurant in data.get("local_results") or []
        ]

    def fallback_items(
        self,
        location: str,
        cuisine: Optional[str] = None,
        price_range: Optional[str] = None,
        **_: Any,
    ) -> List[Dict[str, Any]]:
        return mock_data.fallback_restaurants(location, cuisine, price_range)

    def fallback_note(self, location: str) -> str:
        return "API temporarily unavailable - search TripAdvisor, Yelp or Google for reviews"


class FlightsSearch(CapabilityAdapter):
    """Flights between two cities (google_flights)."""

    capability = "flights"
    search_type = "Flights"
    timeout = 15.0
    max_results = 5

    def build_params(
        self,
        location: str,
        origin: str = "",
        departure_date: Optional[str] = None,
        return_date: Optional[str] = None,
        adults: Optional[int] = None,
        **_: Any,
    ) -> Dict[str, Any]:
        if not is_valid_date(departure_date):
            raise ProviderUnavailable(
                self.capability, "Invalid departure date format. Use YYYY-MM-DD"
            )
        if return_date and not is_valid_date(return_date):
            raise ProviderUnavailable(
                self.capability, "Invalid return date format. Use YYYY-MM-DD"
            )

        params: Dict[str, Any] = {
            "engine": "google_flights",
            "departure_id": format_location(origin),
            "arrival_id": location,
            "outbound_date": departure_date,
            "hl": "en",
            "gl": "us",
            "currency": "USD",
            # google_flights: 1 = round trip, 2 = one way
            "type": 1 if return_date else 2,
        }
        if return_date:
            params["return_date"] = return_date
        if adults and 0 < adults <= 9:
            params["adults"] = adults
        return params

    def normalize(
        self,
        data: Dict[str, Any],
        location: str,
        origin: str = "",
        **_: Any,
    ) -> List[Dict[str, Any]]:
        options = data.get("best_flights") or data.get("other_flights") or []
        flights = []
        for option in options:
            legs = option.get("flights") or [{}]
            first, last = legs[0], legs[-1]
            flights.append(
                {
                    "name": f"{origin} to {location}",
                    "airline": first.get("airline") or "Various Airlines",
                    "price": option.get("price") or "Check availability",
                    "duration": option.get("total_duration") or "N/A",
                    "departure": (first.get("departure_airport") or {}).get("name") or origin,
                    "arrival": (last.get("arrival_airport") or {}).get("name") or location,
                    "departure_time": (first.get("departure_airport") or {}).get("time", "N/A"),
                    "arrival_time": (last.get("arrival_airport") or {}).get("time", "N/A"),
                    "stops": max(len(legs) - 1, 0),
                    "booking_token": option.get("booking_token"),
                }
            )
        return flights

    def fallback_items(
        self,
        location: str,
        origin: str = "",
        departure_date: Optional[str] = None,
        return_date: Optional[str] = None,
        **_: Any,
    ) -> List[Dict[str, Any]]:
        return mock_data.fallback_flights(origin, location, departure_date, return_date)

    def fallback_note(self, location: str) -> str:
        return "API temporarily unavailable - use major booking sites directly"


class WeatherSearch(CapabilityAdapter):
    """Weather summary (google answer box)."""

    capability = "weather"
    search_type = "Weather"
    timeout = 10.0
    max_results = 1

    def build_params(self, location: str, travel_date: Optional[str] = None, **_: Any):
        query = f"weather in {location}"
        if travel_date:
            query += f" {travel_date}"
        return {"engine": "google", "q": query, "hl": "en"}

    def normalize(
        self,
        data: Dict[str, Any],
        location: str,
        travel_date: Optional[str] = None,
        **_: Any,
    ) -> List[Dict[str, Any]]:
        answer = data.get("answer_box") or {}
        if not answer.get("temperature") and not answer.get("weather"):
            return []
        return [
            {
                "name": f"Weather in {location}",
                "date": travel_date or "Current",
                "temperature": answer.get("temperature"),
                "unit": answer.get("unit"),
                "condition": answer.get("weather") or "Variable",
                "precipitation": answer.get("precipitation"),
                "humidity": answer.get("humidity"),
                "wind": answer.get("wind"),
                "forecast": answer.get("forecast") or [],
            }
        ]

    def fallback_items(self, location: str, travel_date: Optional[str] = None, **_: Any):
        return mock_data.fallback_weather(location, travel_date)

    def fallback_note(self, location: str) -> str:
        return "Weather data unavailable - check local weather services"


def create_default_adapters(client) -> Dict[str, CapabilityAdapter]:
    """One adapter per capability key, sharing a single provider client."""
    adapters = [
        WeatherSearch(client),
        FlightsSearch(client),
        HotelsSearch(client),
        PlacesSearch(client),
        RestaurantsSearch(client),
    ]
    return {adapter.capability: adapter for adapter in adapters}

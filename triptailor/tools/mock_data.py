"""
Fallback payloads for the capability adapters.

Generic, clearly labeled placeholder entries substituted when a provider
is unavailable. Every payload carries data_source="Fallback recommendations"
so consumers and end users can tell degraded data from live data.
"""

from typing import Any, Dict, List, Optional

from triptailor.shared.contracts.tool_results import FALLBACK_SOURCE, SearchResult


def fallback_result(
    location: str,
    search_type: str,
    items: List[Dict[str, Any]],
    note: str,
    reason: str,
) -> Dict[str, Any]:
    return SearchResult(
        location=location,
        search_type=search_type,
        results=items,
        total_found=len(items),
        data_source=FALLBACK_SOURCE,
        note=note,
        error=reason,
    ).model_dump(exclude_none=True)


def fallback_places(location: str) -> List[Dict[str, Any]]:
    return [
        {
            "name": f"Popular Attraction in {location}",
            "description": f"A must-visit destination in {location} featuring local culture and history",
            "link": "https://tripadvisor.com",
            "rating": "Check TripAdvisor for ratings",
            "address": f"Central {location}",
            "rank": 1,
        },
        {
            "name": f"{location} Historic Center",
            "description": "Historic district with traditional architecture and local attractions",
            "link": "https://google.com/maps",
            "rating": "Highly rated on travel sites",
            "address": f"Downtown {location}",
            "rank": 2,
        },
    ]


def fallback_hotels(location: str) -> List[Dict[str, Any]]:
    return [
        {
            "name": f"{location} Central Hotel",
            "description": f"Well-located hotel in central {location} with modern amenities",
            "link": "https://booking.com",
            "rating": "Check Booking.com for current ratings",
            "price": "Mid-range to luxury options available",
            "amenities": ["Standard hotel amenities expected"],
        },
        {
            "name": f"{location} Business Hotel",
            "description": f"Business-friendly accommodation near {location} city center",
            "link": "https://hotels.com",
            "rating": "See Hotels.com for reviews",
            "price": "Competitive business rates",
            "amenities": ["Business center", "WiFi", "Fitness"],
        },
    ]


def fallback_restaurants(
    location: str,
    cuisine: Optional[str] = None,
    price_range: Optional[str] = None,
) -> List[Dict[str, Any]]:
    price = price_range or "mid-range"
    return [
        {
            "name": f"{location} Local Cuisine Restaurant",
            "description": f"Authentic local dining experience featuring traditional {location} cuisine",
            "link": "https://tripadvisor.com",
            "cuisine": cuisine or "Local",
            "rating": "Check TripAdvisor for reviews",
            "price": price,
        },
        {
            "name": f"Popular {(cuisine or 'International').title()} Restaurant in {location}",
            "description": f"Well-reviewed {cuisine or 'international'} restaurant popular with locals and tourists",
            "link": "https://yelp.com",
            "cuisine": cuisine or "International",
            "rating": "See Yelp for ratings and reviews",
            "price": price,
        },
    ]


def fallback_flights(
    origin: str,
    location: str,
    departure_date: Optional[str] = None,
    return_date: Optional[str] = None,
) -> List[Dict[str, Any]]:
    return [
        {
            "name": f"{origin} to {location}",
            "airline": "Various Airlines",
            "price": "Check airline websites",
            "duration": "Varies",
            "departure": origin,
            "arrival": location,
            "departure_date": departure_date or "Flexible",
            "flight_type": "Round trip" if return_date else "One way",
            "link": "https://www.google.com/travel/flights",
            "description": "Compare Google Flights, Kayak, Expedia and Skyscanner; consider flexible dates",
        }
    ]


def fallback_weather(location: str, travel_date: Optional[str] = None) -> List[Dict[str, Any]]:
    return [
        {
            "name": f"Weather in {location}",
            "date": travel_date or "Current",
            "temperature": "Check weather.com",
            "condition": "Variable",
            "forecast": "See weather services for current forecast",
            "link": "https://weather.com",
            "description": f"Visit Weather.com or AccuWeather for {location} weather details",
        }
    ]

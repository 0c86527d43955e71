"""
External capability adapters.

One adapter per capability (places, hotels, restaurants, flights, weather)
sharing a fallback-on-failure contract over a single search provider client.
"""

from triptailor.tools.base import CapabilityAdapter, SerpAPIClient, is_valid_date
from triptailor.tools.adapters import (
    FlightsSearch,
    HotelsSearch,
    PlacesSearch,
    RestaurantsSearch,
    WeatherSearch,
    create_default_adapters,
)

__all__ = [
    "CapabilityAdapter",
    "SerpAPIClient",
    "is_valid_date",
    "FlightsSearch",
    "HotelsSearch",
    "PlacesSearch",
    "RestaurantsSearch",
    "WeatherSearch",
    "create_default_adapters",
]

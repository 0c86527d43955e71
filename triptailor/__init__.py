"""
TripTailor: AI travel agent for free-text trip requests.

This package contains:
- shared/: Common infrastructure (LLM client, logging, contracts, errors, settings)
- extraction/: Detail extractor (LLM JSON extraction with heuristic fallback)
- tools/: External capability adapters (places, hotels, restaurants, flights, weather)
- gathering/: Data gathering coordinator (concurrent, failure-isolated tool calls)
- itinerary/: Itinerary synthesizer (LLM markdown with templated fallback)
- graph/: Orchestrator state machine (analyze -> gather -> itinerary) and HTTP API
- storage/: Conversation store abstraction
"""

from triptailor.graph.build import create_travel_agent_graph
from triptailor.graph.orchestrator import TravelAgent

__all__ = ["create_travel_agent_graph", "TravelAgent"]

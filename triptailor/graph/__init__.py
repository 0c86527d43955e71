"""
Travel agent graph.

Composes the pipeline stages into a sequential state machine:
    analyzing -> gathering_data -> creating_itinerary -> complete
"""

from triptailor.graph.build import create_travel_agent_graph
from triptailor.graph.orchestrator import TravelAgent
from triptailor.graph.state import AgentState, STEP_ORDER, create_initial_state

__all__ = [
    "create_travel_agent_graph",
    "TravelAgent",
    "AgentState",
    "STEP_ORDER",
    "create_initial_state",
]

"""
Travel agent graph construction.

Builds the graph that sequences analyze -> gather_data -> create_itinerary.
Transitions are unconditional: every node recovers from its own failures,
so the graph has no branching, retry or loop.
"""

from langgraph.graph import StateGraph, END

from triptailor.extraction.extractor import DetailExtractor
from triptailor.gathering.coordinator import DataGatheringCoordinator
from triptailor.itinerary.synthesizer import ItinerarySynthesizer
from triptailor.graph.state import AgentState
from triptailor.graph.nodes import (
    make_analyze_node,
    make_gather_node,
    make_itinerary_node,
)


def create_travel_agent_graph(
    extractor: DetailExtractor,
    coordinator: DataGatheringCoordinator,
    synthesizer: ItinerarySynthesizer,
):
    """
    Create and compile the travel agent graph.

    The graph structure is:
        Entry -> analyze -> gather_data -> create_itinerary -> END

    Args:
        extractor: Detail extractor for the analyze stage
        coordinator: Data gathering coordinator for the gather stage
        synthesizer: Itinerary synthesizer for the final stage

    Returns:
        Compiled LangGraph application ready for execution.
    """
    graph = StateGraph(AgentState)

    # Add nodes
    graph.add_node("analyze", make_analyze_node(extractor))
    graph.add_node("gather_data", make_gather_node(coordinator))
    graph.add_node("create_itinerary", make_itinerary_node(synthesizer))

    # Set entry point and edges
    graph.set_entry_point("analyze")
    graph.add_edge("analyze", "gather_data")
    graph.add_edge("gather_data", "create_itinerary")
    graph.add_edge("create_itinerary", END)

    return graph.compile()

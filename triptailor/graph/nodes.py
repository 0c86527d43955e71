"""
Node definitions for the travel agent graph.

Each node wraps one pipeline stage, always succeeds in producing its
partial update, and advances current_step to the next value.
"""

import logging
from typing import Any, Callable, Dict

from triptailor.extraction.extractor import DetailExtractor
from triptailor.gathering.coordinator import DataGatheringCoordinator
from triptailor.itinerary.synthesizer import ItinerarySynthesizer
from triptailor.shared.contracts.travel_details import TravelDetails
from triptailor.graph.state import (
    AgentState,
    COMPLETE,
    CREATING_ITINERARY,
    GATHERING_DATA,
    latest_user_message,
)


logger = logging.getLogger(__name__)

Node = Callable[[AgentState], Any]


def _log_prefix(state: AgentState, node: str) -> str:
    conversation_id = state.get("conversation_id") or "unknown"
    return f"[conversation={conversation_id}] [graph=travel_agent] [node={node}] "


def _details_from_state(state: AgentState) -> TravelDetails:
    return TravelDetails.model_validate(state.get("travel_details") or {})


def make_analyze_node(extractor: DetailExtractor) -> Node:
    async def analyze_node(state: AgentState) -> Dict[str, Any]:
        """Extract TravelDetails from the latest user message."""
        _log = _log_prefix(state, "analyze")
        message = latest_user_message(state)
        logger.info(f"{_log}Entering node | message_chars={len(message)}")

        details = await extractor.extract(message, _log=_log)

        logger.info(
            f"{_log}Node finished | from={details.from_location}, "
            f"to={details.to_location}, departure={details.departure_date}, "
            f"travelers={details.travelers}, budget={details.budget}"
        )
        return {
            "travel_details": details.model_dump(),
            "current_step": GATHERING_DATA,
            "step_history": [GATHERING_DATA],
        }

    return analyze_node


def make_gather_node(coordinator: DataGatheringCoordinator) -> Node:
    async def gather_node(state: AgentState) -> Dict[str, Any]:
        """Run the applicable capability adapters."""
        _log = _log_prefix(state, "gather_data")
        details = _details_from_state(state)
        logger.info(f"{_log}Entering node | destination={details.to_location}")

        tool_results = await coordinator.gather(details, _log=_log)

        logger.info(f"{_log}Node finished | keys={sorted(tool_results)}")
        return {
            "tool_results": tool_results,
            "current_step": CREATING_ITINERARY,
            "step_history": [CREATING_ITINERARY],
        }

    return gather_node


def make_itinerary_node(synthesizer: ItinerarySynthesizer) -> Node:
    async def itinerary_node(state: AgentState) -> Dict[str, Any]:
        """Synthesize the final markdown response."""
        _log = _log_prefix(state, "create_itinerary")
        message = latest_user_message(state)
        details = _details_from_state(state)
        tool_results = state.get("tool_results") or {}
        logger.info(
            f"{_log}Entering node | tools={sorted(tool_results)}, "
            f"destination={details.to_location}"
        )

        final_response = await synthesizer.synthesize(
            message, details, tool_results, _log=_log
        )

        logger.info(f"{_log}Node finished | response_chars={len(final_response)} -> END")
        return {
            "final_response": final_response,
            "messages": [{"role": "assistant", "content": final_response}],
            "current_step": COMPLETE,
            "step_history": [COMPLETE],
        }

    return itinerary_node

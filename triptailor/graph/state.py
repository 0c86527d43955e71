"""
Agent state schema.

Defines the state threaded through the travel agent graph for one
conversation turn, with per-field reducers:
- messages, step_history: concatenation
- travel_details, tool_results: shallow merge (later keys overwrite)
- current_step, final_response, conversation_id: replace (last write wins)
"""

from typing import Any, Dict, List, Optional, TypedDict, Annotated
import operator


ANALYZING = "analyzing"
GATHERING_DATA = "gathering_data"
CREATING_ITINERARY = "creating_itinerary"
COMPLETE = "complete"

# currentStep only moves forward through this order within a run
STEP_ORDER = (ANALYZING, GATHERING_DATA, CREATING_ITINERARY, COMPLETE)


def merge_records(
    existing: Optional[Dict[str, Any]],
    update: Optional[Dict[str, Any]],
) -> Dict[str, Any]:
    """Shallow merge: keys in update overwrite, other keys are retained."""
    merged = dict(existing or {})
    merged.update(update or {})
    return merged


class AgentState(TypedDict):
    """
    State schema for the travel agent graph.

    One instance per conversation turn. Each node receives the current
    state and returns a partial update merged with the reducers above.
    """

    # Conversation turn (role/content dicts)
    messages: Annotated[List[Dict[str, str]], operator.add]

    # Stage outputs
    travel_details: Annotated[Dict[str, Any], merge_records]
    tool_results: Annotated[Dict[str, Any], merge_records]

    # Progress tracking
    current_step: str
    step_history: Annotated[List[str], operator.add]

    # Final markdown itinerary (empty until synthesis completes)
    final_response: str

    # Log correlation
    conversation_id: Optional[str]


def create_initial_state(message: str, conversation_id: Optional[str] = None) -> AgentState:
    """Initial 'analyzing' state for a turn."""
    return {
        "messages": [{"role": "user", "content": message}],
        "travel_details": {},
        "tool_results": {},
        "current_step": ANALYZING,
        "step_history": [ANALYZING],
        "final_response": "",
        "conversation_id": conversation_id,
    }


def latest_user_message(state: AgentState) -> str:
    for message in reversed(state.get("messages") or []):
        if message.get("role") == "user":
            return message.get("content") or ""
    return ""

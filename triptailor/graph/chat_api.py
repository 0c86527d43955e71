"""
FastAPI endpoints for the travel agent.

Provides the chat invocation surface, conversation lookups and a live
provider health probe.
"""

import asyncio
import logging
import uuid
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from triptailor.graph.orchestrator import TravelAgent
from triptailor.graph.state import AgentState, STEP_ORDER
from triptailor.shared.contracts.tool_results import tools_used
from triptailor.shared.contracts.travel_details import TravelDetails
from triptailor.shared.errors import InvalidInput
from triptailor.storage.conversation_store import (
    ConversationStore,
    InMemoryConversationStore,
    trim_history,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["travel-agent"])

INTERNAL_FAILURE_MESSAGE = (
    "Sorry, I encountered an error while planning your trip. Please try again!"
)

STEPS_COMPLETED = ["analyze", "gather_data", "create_itinerary"]


# ============================================================================
# Shared instances (replace stores with a database in production)
# ============================================================================

_agent: Optional[TravelAgent] = None
_conversations: ConversationStore = InMemoryConversationStore()
_agent_states: ConversationStore = InMemoryConversationStore()


def get_agent() -> TravelAgent:
    """Get or create the shared agent instance."""
    global _agent
    if _agent is None:
        _agent = TravelAgent.from_settings()
    return _agent


def get_conversation_store() -> ConversationStore:
    return _conversations


def get_agent_state_store() -> ConversationStore:
    return _agent_states


# ============================================================================
# Request/Response Models
# ============================================================================


class ChatRequest(BaseModel):
    """A user turn."""

    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = Field(default=None, description="Free-text travel request")
    conversation_id: Optional[str] = Field(
        default=None, alias="conversationId", description="Conversation identifier"
    )


class AgentWorkflow(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    steps_completed: List[str] = Field(alias="stepsCompleted")
    data_gathered: Dict[str, Any] = Field(alias="dataGathered")


class ChatResponse(BaseModel):
    """Result of a completed turn."""

    model_config = ConfigDict(populate_by_name=True)

    response: str = Field(description="Markdown itinerary")
    conversation_id: str = Field(alias="conversationId")
    travel_details: Dict[str, Any] = Field(alias="travelDetails")
    tools_used: List[str] = Field(alias="toolsUsed")
    agent_workflow: AgentWorkflow = Field(alias="agentWorkflow")


def serialize_state(state: AgentState) -> Dict[str, Any]:
    """camelCase view of an agent state for HTTP responses."""
    details = TravelDetails.model_validate(state.get("travel_details") or {})
    return {
        "messages": state.get("messages", []),
        "travelDetails": details.to_api(),
        "toolResults": state.get("tool_results", {}),
        "currentStep": state.get("current_step", STEP_ORDER[0]),
        "stepHistory": state.get("step_history", []),
        "finalResponse": state.get("final_response", ""),
    }


# ============================================================================
# Endpoints
# ============================================================================


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    agent: TravelAgent = Depends(get_agent),
    conversations: ConversationStore = Depends(get_conversation_store),
    agent_states: ConversationStore = Depends(get_agent_state_store),
):
    """
    Run one travel agent turn.

    Empty messages are rejected with 400; unexpected failures return 500
    with an apology and the error text for diagnosis.
    """
    if not request.message or not request.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")

    conversation_id = request.conversation_id or str(uuid.uuid4())
    _log = f"[conversation={conversation_id}] [graph=travel_agent] [api=chat] "
    logger.info(f"{_log}New chat message | preview={request.message[:100]!r}")

    try:
        final_state = await agent.run(request.message, conversation_id=conversation_id)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except asyncio.TimeoutError:
        logger.error(f"{_log}Turn timed out")
        raise HTTPException(
            status_code=504,
            detail={
                "error": INTERNAL_FAILURE_MESSAGE,
                "details": "Trip planning timed out",
            },
        )
    except Exception as e:
        logger.exception(f"{_log}Chat failed: {e}")
        raise HTTPException(
            status_code=500,
            detail={"error": INTERNAL_FAILURE_MESSAGE, "details": str(e)},
        )

    history = list(conversations.get(conversation_id) or [])
    history.append({"role": "user", "content": request.message})
    history.append({"role": "assistant", "content": final_state["final_response"]})
    conversations.set(conversation_id, trim_history(history, agent.config.history_cap))
    agent_states.set(conversation_id, final_state)

    tool_results = final_state.get("tool_results", {})
    logger.info(
        f"{_log}Turn complete | tools={tools_used(tool_results)}, "
        f"history={len(conversations.get(conversation_id))}"
    )

    return ChatResponse(
        response=final_state["final_response"],
        conversation_id=conversation_id,
        travel_details=serialize_state(final_state)["travelDetails"],
        tools_used=tools_used(tool_results),
        agent_workflow=AgentWorkflow(
            steps_completed=STEPS_COMPLETED,
            data_gathered=tool_results,
        ),
    )


@router.post("/new-conversation")
async def new_conversation():
    """Allocate a fresh conversation identifier."""
    conversation_id = str(uuid.uuid4())
    logger.info(f"[conversation={conversation_id}] New conversation created")
    return {"conversationId": conversation_id}


@router.get("/conversation/{conversation_id}")
async def get_conversation(
    conversation_id: str,
    conversations: ConversationStore = Depends(get_conversation_store),
):
    conversation = conversations.get(conversation_id)
    if conversation is None:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return {"conversation": conversation, "conversationId": conversation_id}


@router.get("/agent-state/{conversation_id}")
async def get_agent_state(
    conversation_id: str,
    agent_states: ConversationStore = Depends(get_agent_state_store),
):
    """Last completed agent state for a conversation."""
    state = agent_states.get(conversation_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Agent state not found")
    return serialize_state(state)


@router.get("/health/providers")
async def provider_health(agent: TravelAgent = Depends(get_agent)):
    """Live validation probe for each external provider."""
    providers = await agent.validate_providers()
    live = all(p["valid"] for p in providers.values())
    return {
        "mode": "live" if live else "degraded",
        "providers": providers,
    }

"""
Tests for the HTTP surface.

Runs the FastAPI app through TestClient with the agent and stores
overridden, so no provider credentials or network access are needed.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from triptailor.extraction.extractor import DetailExtractor
from triptailor.gathering.coordinator import DataGatheringCoordinator
from triptailor.graph.chat_api import (
    INTERNAL_FAILURE_MESSAGE,
    get_agent,
    get_agent_state_store,
    get_conversation_store,
)
from triptailor.graph.config import AgentGraphConfig
from triptailor.graph.orchestrator import TravelAgent
from triptailor.itinerary.synthesizer import ItinerarySynthesizer
from triptailor.main import app
from triptailor.storage.conversation_store import InMemoryConversationStore
from triptailor.tools.adapters import create_default_adapters
from triptailor.tools.base import SerpAPIClient


# ============================================================================
# Test Fixtures
# ============================================================================


class HangingLLM:
    async def complete(self, system_prompts, user_message):
        await asyncio.sleep(10)
        return "too late"


class FailingAgent:
    def __init__(self, error):
        self.error = error

    async def run(self, message, conversation_id=None):
        raise self.error


def _fallback_agent(config=None):
    """Real pipeline with no credentials: every stage uses its fallback."""
    return TravelAgent(
        extractor=DetailExtractor(None),
        coordinator=DataGatheringCoordinator(create_default_adapters(SerpAPIClient(None))),
        synthesizer=ItinerarySynthesizer(None),
        config=config,
    )


@pytest.fixture
def stores():
    return InMemoryConversationStore(), InMemoryConversationStore()


@pytest.fixture
def client_factory(stores):
    conversations, agent_states = stores

    def make(agent):
        app.dependency_overrides[get_agent] = lambda: agent
        app.dependency_overrides[get_conversation_store] = lambda: conversations
        app.dependency_overrides[get_agent_state_store] = lambda: agent_states
        return TestClient(app)

    yield make
    app.dependency_overrides.clear()


# ============================================================================
# TestChat
# ============================================================================


class TestChat:
    """Tests for POST /api/chat."""

    def test_happy_path(self, client_factory):
        client = client_factory(_fallback_agent())

        response = client.post(
            "/api/chat",
            json={"message": "Family trip to Orlando for Disney World, traveling with 2 kids"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["response"].startswith("# Travel Itinerary for Orlando")
        assert body["conversationId"]
        assert body["travelDetails"]["toLocation"] == "Orlando"
        assert body["travelDetails"]["fromLocation"] == "not specified"
        assert body["toolsUsed"] == ["weather", "hotels", "attractions", "restaurants"]
        assert body["agentWorkflow"]["stepsCompleted"] == [
            "analyze",
            "gather_data",
            "create_itinerary",
        ]
        assert set(body["agentWorkflow"]["dataGathered"]) == set(body["toolsUsed"])

    @pytest.mark.parametrize("payload", [{}, {"message": ""}, {"message": "   "}])
    def test_empty_message_rejected(self, client_factory, payload):
        client = client_factory(_fallback_agent())

        response = client.post("/api/chat", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"] == "Message is required"

    def test_history_recorded_and_conversation_id_reused(self, client_factory, stores):
        conversations, agent_states = stores
        client = client_factory(_fallback_agent())

        first = client.post("/api/chat", json={"message": "trip to Rome"}).json()
        conversation_id = first["conversationId"]
        client.post(
            "/api/chat", json={"message": "trip to Paris", "conversationId": conversation_id}
        )

        history = conversations.get(conversation_id)
        assert [m["role"] for m in history] == ["user", "assistant", "user", "assistant"]
        assert history[2]["content"] == "trip to Paris"
        assert agent_states.get(conversation_id)["travel_details"]["to_location"] == "Paris"

    def test_history_trimmed(self, client_factory, stores):
        conversations, _ = stores
        client = client_factory(_fallback_agent(AgentGraphConfig(history_cap=4)))
        conversations.set("conv-1", [{"role": "user", "content": str(i)} for i in range(10)])

        client.post("/api/chat", json={"message": "trip to Rome", "conversationId": "conv-1"})

        history = conversations.get("conv-1")
        assert len(history) == 4
        assert history[-2]["content"] == "trip to Rome"

    def test_internal_failure(self, client_factory, stores):
        conversations, agent_states = stores
        client = client_factory(FailingAgent(RuntimeError("boom")))

        response = client.post("/api/chat", json={"message": "trip to Rome", "conversationId": "c"})

        assert response.status_code == 500
        assert response.json()["detail"] == {"error": INTERNAL_FAILURE_MESSAGE, "details": "boom"}
        assert conversations.get("c") is None
        assert agent_states.get("c") is None

    def test_hanging_model_returns_templated_itinerary(self, client_factory):
        config = AgentGraphConfig(
            extraction_timeout=0.05,
            tool_call_timeout=1.0,
            synthesis_timeout=0.05,
            turn_timeout=2.0,
        )
        llm = HangingLLM()
        agent = TravelAgent(
            extractor=DetailExtractor(llm, timeout=config.extraction_timeout),
            coordinator=DataGatheringCoordinator(
                create_default_adapters(SerpAPIClient(None)),
                call_timeout=config.tool_call_timeout,
            ),
            synthesizer=ItinerarySynthesizer(llm, timeout=config.synthesis_timeout),
            config=config,
        )
        client = client_factory(agent)

        response = client.post("/api/chat", json={"message": "Family trip to Orlando for 5 days"})

        assert response.status_code == 200
        body = response.json()
        assert body["response"].startswith("# Travel Itinerary for Orlando")
        assert body["travelDetails"]["duration"] == "5 days"

    def test_turn_timeout_maps_to_504(self, client_factory):
        client = client_factory(FailingAgent(asyncio.TimeoutError()))

        response = client.post("/api/chat", json={"message": "trip to Rome"})

        assert response.status_code == 504


# ============================================================================
# TestConversationEndpoints
# ============================================================================


class TestConversationEndpoints:
    def test_new_conversation(self, client_factory):
        client = client_factory(_fallback_agent())
        first = client.post("/api/new-conversation").json()["conversationId"]
        second = client.post("/api/new-conversation").json()["conversationId"]
        assert first and second and first != second

    def test_unknown_conversation_404(self, client_factory):
        client = client_factory(_fallback_agent())
        assert client.get("/api/conversation/missing").status_code == 404
        assert client.get("/api/agent-state/missing").status_code == 404

    def test_conversation_and_agent_state_after_chat(self, client_factory):
        client = client_factory(_fallback_agent())
        conversation_id = client.post(
            "/api/chat", json={"message": "trip to Lisbon for 3 days"}
        ).json()["conversationId"]

        conversation = client.get(f"/api/conversation/{conversation_id}").json()
        assert conversation["conversationId"] == conversation_id
        assert len(conversation["conversation"]) == 2

        state = client.get(f"/api/agent-state/{conversation_id}").json()
        assert state["currentStep"] == "complete"
        assert state["travelDetails"]["toLocation"] == "Lisbon"
        assert state["travelDetails"]["duration"] == "3 days"
        assert state["finalResponse"]


# ============================================================================
# TestHealth
# ============================================================================


class TestHealth:
    def test_health(self, client_factory):
        client = client_factory(_fallback_agent())

        body = client.get("/health").json()

        assert body["status"] == "OK"
        assert body["version"] == "0.1.0"
        assert set(body["providers"]) == {"llm", "serpapi"}
        assert isinstance(body["conversations"], int)

    def test_provider_health_degraded(self, client_factory):
        client = client_factory(_fallback_agent())

        body = client.get("/api/health/providers").json()

        assert body["mode"] == "degraded"
        assert body["providers"]["serpapi"] == {"configured": False, "valid": False}

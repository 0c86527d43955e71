"""
Tests for the travel agent pipeline.

Tests the compiled graph end to end with fake stages and with every
provider unavailable, plus the state reducers.
"""

import asyncio

import pytest

from triptailor.extraction.extractor import DetailExtractor
from triptailor.gathering.coordinator import DataGatheringCoordinator
from triptailor.graph.config import AgentGraphConfig
from triptailor.graph.orchestrator import TravelAgent
from triptailor.graph.state import (
    COMPLETE,
    STEP_ORDER,
    create_initial_state,
    latest_user_message,
    merge_records,
)
from triptailor.itinerary.synthesizer import ItinerarySynthesizer
from triptailor.shared.contracts.tool_results import is_fallback
from triptailor.shared.contracts.travel_details import NOT_SPECIFIED
from triptailor.shared.errors import InvalidInput, ModelUnavailable
from triptailor.shared.settings import Settings


HAPPY_PATH = "I want to go from New York to Tokyo next month for 5 days with a $4000 budget"
DESTINATION_ONLY = "Family trip to Orlando for Disney World, traveling with 2 kids in August"


# ============================================================================
# Test Fixtures
# ============================================================================


class FakeAdapter:
    def __init__(self, capability, delay=0.0):
        self.capability = capability
        self.delay = delay

    async def search(self, location, **params):
        if self.delay:
            await asyncio.sleep(self.delay)
        return {
            "location": location,
            "search_type": self.capability,
            "results": [{"name": f"Best {self.capability} in {location}"}],
            "total_found": 1,
            "data_source": "SerpAPI",
        }


def _make_agent(config=None, delay=0.0):
    adapters = {
        key: FakeAdapter(key, delay=delay)
        for key in ("weather", "flights", "hotels", "attractions", "restaurants")
    }
    return TravelAgent(
        extractor=DetailExtractor(None),
        coordinator=DataGatheringCoordinator(adapters),
        synthesizer=ItinerarySynthesizer(None),
        config=config,
    )


# ============================================================================
# TestTravelAgentPipeline
# ============================================================================


class TestTravelAgentPipeline:
    """Tests for the full pipeline."""

    def test_pipeline_completes(self):
        result = asyncio.run(_make_agent().run(HAPPY_PATH, conversation_id="test-001"))

        assert result["current_step"] == COMPLETE
        assert result["final_response"].strip()
        assert result["conversation_id"] == "test-001"

    def test_steps_advance_in_order(self):
        result = asyncio.run(_make_agent().run(HAPPY_PATH))
        assert result["step_history"] == list(STEP_ORDER)

    def test_travel_details_extracted(self):
        result = asyncio.run(_make_agent().run(HAPPY_PATH))

        details = result["travel_details"]
        assert details["from_location"] == "New York"
        assert details["to_location"] == "Tokyo"
        assert "4000" in details["budget"]
        assert "5 days" in details["duration"]

    def test_flights_need_departure_date(self):
        # "next month" is not a concrete date, so flights are skipped
        result = asyncio.run(_make_agent().run(HAPPY_PATH))
        assert set(result["tool_results"]) == {"weather", "hotels", "attractions", "restaurants"}

    def test_flights_with_concrete_date(self):
        message = "from New York to Tokyo 2025-06-01 for 5 days"
        result = asyncio.run(_make_agent().run(message))
        assert "flights" in result["tool_results"]

    def test_destination_only(self):
        result = asyncio.run(_make_agent().run(DESTINATION_ONLY))

        details = result["travel_details"]
        assert details["to_location"] == "Orlando"
        assert details["from_location"] == NOT_SPECIFIED
        assert details["special_requirements"] == "family trip"
        assert details["travelers"] == 1
        assert "flights" not in result["tool_results"]
        assert {"weather", "hotels", "attractions", "restaurants"} <= set(result["tool_results"])

    def test_messages_tracking(self):
        result = asyncio.run(_make_agent().run(HAPPY_PATH))

        roles = [m["role"] for m in result["messages"]]
        assert roles == ["user", "assistant"]
        assert result["messages"][-1]["content"] == result["final_response"]

    @pytest.mark.parametrize("message", ["", "   ", None])
    def test_empty_message_rejected(self, message):
        with pytest.raises(InvalidInput):
            asyncio.run(_make_agent().run(message))

    def test_turn_timeout(self):
        # Coordinator built with its own 20s call bound, ignoring the config
        config = AgentGraphConfig(
            extraction_timeout=0.01,
            tool_call_timeout=0.01,
            synthesis_timeout=0.01,
            turn_timeout=0.05,
        )
        agent = _make_agent(config=config, delay=1.0)
        with pytest.raises(asyncio.TimeoutError):
            asyncio.run(agent.run(DESTINATION_ONLY))


class HangingLLM:
    """Never answers within any reasonable deadline."""

    def __init__(self):
        self.calls = 0

    async def complete(self, system_prompts, user_message):
        self.calls += 1
        await asyncio.sleep(10)
        return "too late"


class FailingLLM:
    async def complete(self, system_prompts, user_message):
        raise ModelUnavailable("connection refused")


def _make_agent_with_llm(llm, config):
    adapters = {
        key: FakeAdapter(key)
        for key in ("weather", "flights", "hotels", "attractions", "restaurants")
    }
    return TravelAgent(
        extractor=DetailExtractor(llm, timeout=config.extraction_timeout),
        coordinator=DataGatheringCoordinator(adapters, call_timeout=config.tool_call_timeout),
        synthesizer=ItinerarySynthesizer(llm, timeout=config.synthesis_timeout),
        config=config,
        llm=llm,
    )


class TestModelDegradation:
    """A hanging or failing model degrades to heuristics and the template."""

    CONFIG = AgentGraphConfig(
        extraction_timeout=0.05,
        tool_call_timeout=0.5,
        synthesis_timeout=0.05,
        turn_timeout=2.0,
    )

    def test_hanging_model_still_completes(self):
        llm = HangingLLM()
        agent = _make_agent_with_llm(llm, self.CONFIG)

        result = asyncio.run(agent.run(DESTINATION_ONLY))

        assert result["current_step"] == COMPLETE
        assert result["step_history"] == list(STEP_ORDER)
        assert result["travel_details"]["to_location"] == "Orlando"
        assert result["final_response"].startswith("# Travel Itinerary for Orlando")
        assert llm.calls == 2

    def test_failing_model_still_completes(self):
        agent = _make_agent_with_llm(FailingLLM(), self.CONFIG)

        result = asyncio.run(agent.run(HAPPY_PATH))

        assert result["current_step"] == COMPLETE
        assert result["travel_details"]["from_location"] == "New York"
        assert result["final_response"].startswith("# Travel Itinerary for Tokyo")

    def test_from_settings_applies_stage_deadlines(self):
        agent = TravelAgent.from_settings(Settings(), config=self.CONFIG)
        assert agent.extractor.timeout == self.CONFIG.extraction_timeout
        assert agent.synthesizer.timeout == self.CONFIG.synthesis_timeout
        assert agent.coordinator.call_timeout == self.CONFIG.tool_call_timeout


class TestAgentGraphConfig:
    def test_default_stage_budget_fits_turn(self):
        config = AgentGraphConfig()
        assert config.stage_budget < config.turn_timeout

    def test_stage_budget_over_turn_rejected(self):
        with pytest.raises(ValueError):
            AgentGraphConfig(synthesis_timeout=100.0, turn_timeout=120.0)

    def test_unbounded_turn_accepts_any_budget(self):
        assert AgentGraphConfig(synthesis_timeout=500.0, turn_timeout=None)


class TestAllProvidersDown:
    """No credentials at all: the pipeline still completes on fallbacks."""

    def _agent(self):
        return TravelAgent.from_settings(Settings())

    def test_completes_with_template(self):
        result = asyncio.run(self._agent().run(HAPPY_PATH))

        assert result["current_step"] == COMPLETE
        assert "Tokyo" in result["final_response"]
        assert result["final_response"].startswith("# Travel Itinerary for Tokyo")

    def test_tool_results_are_fallback_only(self):
        result = asyncio.run(self._agent().run(DESTINATION_ONLY))

        assert result["tool_results"]
        assert all(is_fallback(value) for value in result["tool_results"].values())
        assert "Check These Directly" in result["final_response"]

    def test_validate_providers_reports_unconfigured(self):
        status = asyncio.run(self._agent().validate_providers())
        assert status == {
            "serpapi": {"configured": False, "valid": False},
            "llm": {"configured": False, "valid": False},
        }


# ============================================================================
# TestState
# ============================================================================


class TestState:
    """Tests for the state helpers and reducers."""

    def test_initial_state(self):
        state = create_initial_state("hi", "conv-1")
        assert state["current_step"] == STEP_ORDER[0]
        assert state["step_history"] == [STEP_ORDER[0]]
        assert latest_user_message(state) == "hi"

    def test_merge_records_overwrites_and_retains(self):
        merged = merge_records({"a": 1, "b": 2}, {"b": 3, "c": 4})
        assert merged == {"a": 1, "b": 3, "c": 4}

    def test_merge_records_handles_none(self):
        assert merge_records(None, {"a": 1}) == {"a": 1}
        assert merge_records({"a": 1}, None) == {"a": 1}

    def test_latest_user_message_skips_assistant(self):
        state = create_initial_state("first")
        state["messages"] = state["messages"] + [
            {"role": "assistant", "content": "reply"},
        ]
        assert latest_user_message(state) == "first"

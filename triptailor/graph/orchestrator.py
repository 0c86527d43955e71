"""
Travel agent orchestrator.

Owns the three pipeline stages and the compiled graph, and exposes a single
run(message) entry point that returns the completed AgentState.
"""

import asyncio
import logging
from typing import Dict, Optional

import httpx

from triptailor.extraction.extractor import DetailExtractor
from triptailor.gathering.coordinator import DataGatheringCoordinator
from triptailor.graph.build import create_travel_agent_graph
from triptailor.graph.config import AgentGraphConfig, DEFAULT_CONFIG
from triptailor.graph.state import AgentState, create_initial_state
from triptailor.itinerary.synthesizer import ItinerarySynthesizer
from triptailor.shared.errors import InvalidInput
from triptailor.shared.llm.client import TextCompletionClient, create_text_completion_client
from triptailor.shared.logging.config import log_state_transition
from triptailor.shared.settings import Settings, get_settings
from triptailor.tools.adapters import create_default_adapters
from triptailor.tools.base import SerpAPIClient


logger = logging.getLogger(__name__)


class TravelAgent:
    """
    Sequences extraction, gathering and synthesis for one turn at a time.

    Holds no per-turn state: every run builds a fresh AgentState.
    """

    def __init__(
        self,
        extractor: DetailExtractor,
        coordinator: DataGatheringCoordinator,
        synthesizer: ItinerarySynthesizer,
        config: Optional[AgentGraphConfig] = None,
        llm: Optional[TextCompletionClient] = None,
        search_client: Optional[SerpAPIClient] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.extractor = extractor
        self.coordinator = coordinator
        self.synthesizer = synthesizer
        self.llm = llm
        self.search_client = search_client
        self.graph = create_travel_agent_graph(extractor, coordinator, synthesizer)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        config: Optional[AgentGraphConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "TravelAgent":
        """Wire real provider clients from settings; missing keys mean fallback mode."""
        settings = settings or get_settings()
        config = config or DEFAULT_CONFIG

        llm = create_text_completion_client(settings, max_retries=config.max_retries)
        search_client = SerpAPIClient(
            settings.serpapi_api_key, settings.serpapi_url, http_client=http_client
        )
        logger.info(
            f"Travel agent configured | llm={'on' if llm else 'off'}, "
            f"serpapi={'on' if search_client.enabled else 'off'}"
        )

        return cls(
            extractor=DetailExtractor(
                llm,
                max_message_chars=config.max_message_chars,
                timeout=config.extraction_timeout,
            ),
            coordinator=DataGatheringCoordinator(
                create_default_adapters(search_client),
                call_timeout=config.tool_call_timeout,
            ),
            synthesizer=ItinerarySynthesizer(llm, timeout=config.synthesis_timeout),
            config=config,
            llm=llm,
            search_client=search_client,
        )

    async def run(self, message: str, conversation_id: Optional[str] = None) -> AgentState:
        """
        Run one conversation turn.

        Args:
            message: The user's travel request
            conversation_id: Identifier used for log correlation

        Returns:
            The final AgentState (current_step == "complete")

        Raises:
            InvalidInput: If message is empty or not a string
            asyncio.TimeoutError: If the turn exceeds config.turn_timeout
        """
        if not isinstance(message, str) or not message.strip():
            raise InvalidInput("Message is required")

        initial_state = create_initial_state(message, conversation_id)
        log_state_transition("turn_start", initial_state, logger=logger)

        invocation = self.graph.ainvoke(initial_state)
        if self.config.turn_timeout:
            final_state = await asyncio.wait_for(invocation, timeout=self.config.turn_timeout)
        else:
            final_state = await invocation

        log_state_transition(
            "turn_complete",
            final_state,
            extra={"steps": final_state.get("step_history")},
            logger=logger,
        )
        return final_state

    async def validate_providers(self) -> Dict[str, Dict[str, bool]]:
        """Configured/valid status for each external provider (live probes)."""
        serpapi_configured = bool(self.search_client and self.search_client.enabled)
        llm_configured = self.llm is not None

        serpapi_valid, llm_valid = await asyncio.gather(
            self.search_client.validate() if serpapi_configured else _false(),
            self.llm.probe() if llm_configured else _false(),
        )
        return {
            "serpapi": {"configured": serpapi_configured, "valid": serpapi_valid},
            "llm": {"configured": llm_configured, "valid": llm_valid},
        }


async def _false() -> bool:
    return False

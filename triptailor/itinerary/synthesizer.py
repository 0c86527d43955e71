"""
Itinerary synthesizer.

Asks the model for a markdown itinerary built from the request, the
extracted details and the gathered results. Falls back to a templated
itinerary when the model is missing or fails, so the pipeline always ends
with a non-empty response.
"""

import logging
import time
from typing import Any, Dict, Optional

from triptailor.itinerary.prompts import SYSTEM_PROMPT, build_itinerary_prompt
from triptailor.itinerary.templates import build_fallback_itinerary
from triptailor.shared.contracts.travel_details import TravelDetails
from triptailor.shared.errors import ModelUnavailable
from triptailor.shared.llm.client import TextCompletionClient, complete_with_deadline


logger = logging.getLogger(__name__)

DEFAULT_SYNTHESIS_TIMEOUT = 60.0


class ItinerarySynthesizer:
    """
    Markdown itinerary from details and tool results.

    Attributes:
        llm: Completion client, or None to always use the template
        timeout: Deadline for the model call, retries included
    """

    def __init__(
        self,
        llm: Optional[TextCompletionClient] = None,
        timeout: Optional[float] = DEFAULT_SYNTHESIS_TIMEOUT,
    ):
        self.llm = llm
        self.timeout = timeout

    async def synthesize(
        self,
        message: str,
        details: TravelDetails,
        tool_results: Dict[str, Any],
        _log: str = "",
    ) -> str:
        if self.llm is None:
            logger.info(f"{_log}No LLM configured - using templated itinerary")
            return build_fallback_itinerary(message, details, tool_results)

        prompt = build_itinerary_prompt(message, details, tool_results)
        start_time = time.perf_counter()
        try:
            itinerary = await complete_with_deadline(
                self.llm, [SYSTEM_PROMPT, prompt], message, self.timeout
            )
        except ModelUnavailable as e:
            logger.warning(f"{_log}LLM unavailable for itinerary, using template: {e}")
            return build_fallback_itinerary(message, details, tool_results)
        except Exception as e:
            logger.exception(f"{_log}Unexpected itinerary error, using template: {e}")
            return build_fallback_itinerary(message, details, tool_results)

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{_log}LLM itinerary ok | duration={duration_ms:.0f}ms, chars={len(itinerary)}"
        )
        return itinerary

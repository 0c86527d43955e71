"""
Detail extractor: free text -> TravelDetails.

Asks the model for strict JSON and falls back to heuristic extraction
whenever the model is missing, fails, or returns something that does not
validate. Never raises.
"""

import logging
import time
from typing import Optional

from triptailor.extraction.heuristics import extract_basic_travel_info
from triptailor.extraction.prompts import build_extraction_prompt
from triptailor.extraction.response_parser import parse_extraction_response
from triptailor.shared.contracts.travel_details import TravelDetails
from triptailor.shared.errors import ModelUnavailable, ParseError
from triptailor.shared.llm.client import TextCompletionClient, complete_with_deadline


logger = logging.getLogger(__name__)

DEFAULT_MAX_MESSAGE_CHARS = 4000
DEFAULT_EXTRACTION_TIMEOUT = 30.0


def truncate_message(message: str, max_chars: int = DEFAULT_MAX_MESSAGE_CHARS) -> str:
    """Keep the head of overly long messages; trip details come first in practice."""
    if len(message) <= max_chars:
        return message
    return message[:max_chars]


class DetailExtractor:
    """
    Structured extraction with heuristic fallback.

    Attributes:
        llm: Completion client, or None to always use heuristics
        max_message_chars: Cap on message length sent to the model
        timeout: Deadline for the model call, retries included
    """

    def __init__(
        self,
        llm: Optional[TextCompletionClient] = None,
        max_message_chars: int = DEFAULT_MAX_MESSAGE_CHARS,
        timeout: Optional[float] = DEFAULT_EXTRACTION_TIMEOUT,
    ):
        self.llm = llm
        self.max_message_chars = max_message_chars
        self.timeout = timeout

    async def extract(self, message: str, _log: str = "") -> TravelDetails:
        """
        Extract travel details from one user message.

        Args:
            message: The latest user message
            _log: Log prefix for correlation

        Returns:
            Fully populated TravelDetails
        """
        message = message or ""

        if self.llm is None:
            logger.info(f"{_log}No LLM configured - using heuristic extraction")
            return extract_basic_travel_info(message)

        bounded = truncate_message(message, self.max_message_chars)
        if len(bounded) < len(message):
            logger.info(
                f"{_log}Message truncated for extraction | "
                f"chars={len(message)} -> {len(bounded)}"
            )

        start_time = time.perf_counter()
        try:
            raw = await complete_with_deadline(
                self.llm, [build_extraction_prompt(bounded)], bounded, self.timeout
            )
            details = parse_extraction_response(raw)
        except ModelUnavailable as e:
            logger.warning(f"{_log}LLM unavailable for extraction, using heuristics: {e}")
            return extract_basic_travel_info(message)
        except ParseError as e:
            logger.warning(f"{_log}Extraction output rejected, using heuristics: {e}")
            return extract_basic_travel_info(message)
        except Exception as e:
            logger.exception(f"{_log}Unexpected extraction error, using heuristics: {e}")
            return extract_basic_travel_info(message)

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{_log}LLM extraction ok | duration={duration_ms:.0f}ms, "
            f"from={details.from_location}, to={details.to_location}"
        )
        return details

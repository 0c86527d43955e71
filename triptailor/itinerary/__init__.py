"""Itinerary synthesis: LLM markdown with a templated fallback."""

from triptailor.itinerary.synthesizer import ItinerarySynthesizer
from triptailor.itinerary.templates import build_fallback_itinerary
from triptailor.itinerary.prompts import SYSTEM_PROMPT, build_itinerary_prompt

__all__ = [
    "ItinerarySynthesizer",
    "build_fallback_itinerary",
    "SYSTEM_PROMPT",
    "build_itinerary_prompt",
]

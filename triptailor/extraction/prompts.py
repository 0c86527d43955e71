"""Prompt templates for travel detail extraction."""

from triptailor.shared.contracts.travel_details import NOT_SPECIFIED


EXTRACTION_PROMPT_TEMPLATE = """Extract travel details from: "{message}"

Return ONLY a JSON object, with no prose and no code fences, containing exactly these keys:
{{
  "fromLocation": "departure city or {sentinel}",
  "toLocation": "destination city or {sentinel}",
  "departureDate": "YYYY-MM-DD or {sentinel}",
  "returnDate": "YYYY-MM-DD or {sentinel}",
  "travelers": 1,
  "budget": "amount or {sentinel}",
  "preferences": [],
  "duration": "X days or {sentinel}",
  "specialRequirements": "any special needs or {sentinel}"
}}

Rules:
- Use the exact string "{sentinel}" for any text field the request does not mention.
- "travelers" is a positive integer; use 1 when the request does not say.
- "preferences" is a list of short interest tags (e.g. "food", "museums"), or [].
- Never invent dates; only convert dates the request actually states."""


def build_extraction_prompt(message: str) -> str:
    """Strict JSON instruction prompt for one user message."""
    return EXTRACTION_PROMPT_TEMPLATE.format(message=message, sentinel=NOT_SPECIFIED)

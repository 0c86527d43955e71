"""
Configuration for the travel agent graph.

Centralizes timeouts and limits, making it easy to tune behavior without
modifying the graph wiring.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class AgentGraphConfig:
    """
    Configuration for the travel agent.

    Stage deadlines are sequential, so extraction_timeout + tool_call_timeout
    + synthesis_timeout must stay below turn_timeout; a slow stage then falls
    back on its own instead of the whole turn timing out.

    Attributes:
        extraction_timeout: Upper bound for the extraction model call (seconds)
        tool_call_timeout: Upper bound per capability adapter call (seconds)
        synthesis_timeout: Upper bound for the itinerary model call (seconds)
        turn_timeout: Upper bound for a whole turn (seconds, None = unbounded)
        max_message_chars: Cap on the message length sent for extraction
        history_cap: Conversation entries kept per conversation (20 exchanges)
        max_retries: LLM attempts for transient failures (tenacity)
    """

    # Execution limits
    extraction_timeout: float = 30.0
    tool_call_timeout: float = 20.0
    synthesis_timeout: float = 60.0
    turn_timeout: Optional[float] = 120.0

    # Prompt bounds
    max_message_chars: int = 4000
    history_cap: int = 40

    # Retry configuration (used by tenacity in llm/client.py)
    max_retries: int = 3

    def __post_init__(self):
        if self.turn_timeout is not None and self.stage_budget >= self.turn_timeout:
            raise ValueError(
                f"Stage timeouts ({self.stage_budget}s) must fit within "
                f"turn_timeout ({self.turn_timeout}s)"
            )

    @property
    def stage_budget(self) -> float:
        """Worst-case time for one turn when every stage hits its deadline."""
        return self.extraction_timeout + self.tool_call_timeout + self.synthesis_timeout


# Default configuration instance
DEFAULT_CONFIG = AgentGraphConfig()

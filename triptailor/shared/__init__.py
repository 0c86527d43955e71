"""
Shared infrastructure for all pipeline stages.

Modules:
- llm: OpenAI-compatible completion client with retry logic
- logging: Structured JSON logging
- contracts: TravelDetails and ToolResults shapes
- errors: Error taxonomy
- settings: Environment-backed configuration
"""

from triptailor.shared.llm.client import TextCompletionClient, create_text_completion_client
from triptailor.shared.logging.config import setup_logging, log_state_transition
from triptailor.shared.settings import Settings, get_settings

__all__ = [
    "TextCompletionClient",
    "create_text_completion_client",
    "setup_logging",
    "log_state_transition",
    "Settings",
    "get_settings",
]

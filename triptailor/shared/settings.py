"""
Environment-backed settings for provider credentials and endpoints.

Credentials are optional: every consumer has a no-credential fallback.
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


SERPAPI_URL = "https://serpapi.com/search"


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """
    Provider configuration.

    Attributes:
        llm_api_key: Key for the OpenAI-compatible completion endpoint
        llm_base_url: Optional endpoint override (e.g. Groq's OpenAI API)
        llm_model: Model identifier used for extraction and synthesis
        llm_temperature: Sampling temperature
        llm_max_tokens: Completion token cap
        llm_timeout: Per-call completion timeout in seconds
        serpapi_api_key: Key for the search provider
        serpapi_url: Search provider endpoint
        log_json: Emit JSON log lines for the triptailor loggers
    """

    llm_api_key: Optional[str] = None
    llm_base_url: Optional[str] = None
    llm_model: str = "gpt-4.1-mini"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 2000
    llm_timeout: float = 30.0
    serpapi_api_key: Optional[str] = None
    serpapi_url: str = SERPAPI_URL
    log_json: bool = False

    @property
    def llm_enabled(self) -> bool:
        return bool(self.llm_api_key)

    @property
    def serpapi_enabled(self) -> bool:
        return bool(self.serpapi_api_key)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables (and .env)."""
        return cls(
            llm_api_key=(
                os.environ.get("LLM_API_KEY")
                or os.environ.get("OPENAI_API_KEY")
                or os.environ.get("GROQ_API_KEY")
            ),
            llm_base_url=os.environ.get("LLM_BASE_URL") or None,
            llm_model=os.environ.get("LLM_MODEL", "gpt-4.1-mini"),
            llm_temperature=_env_float("LLM_TEMPERATURE", 0.7),
            llm_max_tokens=int(_env_float("LLM_MAX_TOKENS", 2000)),
            llm_timeout=_env_float("LLM_TIMEOUT", 30.0),
            serpapi_api_key=os.environ.get("SERPAPI_API_KEY") or None,
            serpapi_url=os.environ.get("SERPAPI_URL", SERPAPI_URL),
            log_json=os.environ.get("LOG_JSON", "").lower() in ("1", "true", "yes"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Returns the process-wide settings, read once from the environment."""
    return Settings.from_env()

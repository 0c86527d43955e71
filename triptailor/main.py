"""
FastAPI application entry point.

Assembles the FastAPI app with the travel agent router.
"""

import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from triptailor.graph.chat_api import get_conversation_store, router as chat_router
from triptailor.shared.logging.config import setup_logging
from triptailor.shared.settings import get_settings


# ============================================================================
# Logging configuration
# ============================================================================
LOG_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)-35s | %(message)s"
)

logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[logging.StreamHandler(sys.stdout)],
    force=True,
)

# Quiet noisy third-party loggers
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("openai").setLevel(logging.WARNING)

# LOG_JSON=1 switches the triptailor loggers to JSON lines
if get_settings().log_json:
    setup_logging(level=logging.INFO, logger_name="triptailor")


SERVICE_NAME = "TripTailor AI Travel Agent"
VERSION = "0.1.0"

app = FastAPI(
    title="TripTailor",
    description="AI travel agent built with LangGraph",
    version=VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chat_router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "TripTailor",
        "version": VERSION,
        "endpoints": {
            "chat": "/api/chat",
            "new_conversation": "/api/new-conversation",
            "conversation": "/api/conversation/{conversation_id}",
            "agent_state": "/api/agent-state/{conversation_id}",
            "provider_health": "/api/health/providers",
        },
    }


@app.get("/health")
async def health():
    """Static health check: configuration only, no provider calls."""
    settings = get_settings()
    return {
        "status": "OK",
        "service": SERVICE_NAME,
        "version": VERSION,
        "providers": {
            "llm": settings.llm_enabled,
            "serpapi": settings.serpapi_enabled,
        },
        "conversations": len(get_conversation_store()),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)

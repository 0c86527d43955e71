"""
Structured logging configuration.

Turn-level state transitions are logged with a key=value summary in the
message text, readable under the plain format main.py installs, and with the
same summary attached as structured data for the JSON formatter.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class StructuredFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON.

    Each entry carries timestamp, level, logger and message. Records logged
    through log_state_transition also carry event, conversation_id and
    state_summary at the top level, plus any caller-supplied extra.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        transition = getattr(record, "transition", None)
        if transition:
            log_entry.update(transition)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    logger_name: str = "triptailor",
) -> logging.Logger:
    """
    Route a logger tree to JSON lines on stdout (and optionally a file).

    Replaces any handlers on the logger and stops propagation, so records
    are not printed a second time by the root handler.

    Args:
        level: Logging level (default: INFO)
        log_file: Optional path to an additional log file
        logger_name: Root of the logger tree to configure

    Returns:
        The configured logger.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.handlers = []
    logger.propagate = False

    formatter = StructuredFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def summarize_state(state: Dict[str, Any]) -> Dict[str, Any]:
    """Key fields of an agent state, small enough to log on every transition."""
    details = state.get("travel_details") or {}
    results = state.get("tool_results") or {}
    return {
        "current_step": state.get("current_step"),
        "destination": details.get("to_location"),
        "tools": sorted(k for k in results if k != "error"),
        "gathering_error": "error" in results,
        "response_chars": len(state.get("final_response") or ""),
    }


def log_state_transition(
    event: str,
    state: Dict[str, Any],
    extra: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log an agent state transition event.

    Args:
        event: Name of the event (e.g., "turn_start", "turn_complete")
        state: Current state dictionary (will extract key fields)
        extra: Additional context to include in the log
        logger: Logger instance to use. If not provided, uses default.
    """
    if logger is None:
        logger = logging.getLogger("triptailor")

    conversation_id = state.get("conversation_id")
    summary = summarize_state(state)
    transition: Dict[str, Any] = {
        "event": event,
        "conversation_id": conversation_id,
        "state_summary": summary,
    }
    if extra:
        transition["extra"] = extra

    fields = ", ".join(f"{key}={value}" for key, value in {**summary, **(extra or {})}.items())
    logger.info(
        f"[conversation={conversation_id}] [graph=travel_agent] "
        f"State transition: {event} | {fields}",
        extra={"transition": transition},
    )

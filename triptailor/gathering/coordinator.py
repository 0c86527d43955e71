"""
Data gathering coordinator.

Decides which capability adapters apply to a TravelDetails record and runs
them concurrently. Each call is isolated: a timeout or exception in one
capability becomes {"error": reason} under its key and never prevents the
others from completing.
"""

import asyncio
import logging
from typing import Any, Awaitable, Dict, List, Mapping, Optional, Tuple

from triptailor.gathering.pricing import budget_price_tier
from triptailor.shared.contracts.tool_results import error_marker, is_error_marker
from triptailor.shared.contracts.travel_details import NOT_SPECIFIED, TravelDetails
from triptailor.shared.errors import GatheringFailed


logger = logging.getLogger(__name__)

DEFAULT_CALL_TIMEOUT = 20.0

GATHERING_FAILED_MESSAGE = (
    "Some travel data could not be retrieved, but I can still help plan your trip!"
)


def _known(value: str) -> Optional[str]:
    return None if value == NOT_SPECIFIED else value


def plan_calls(details: TravelDetails) -> Dict[str, Dict[str, Any]]:
    """
    Capability key -> adapter keyword arguments, for every capability whose
    precondition holds.
    """
    calls: Dict[str, Dict[str, Any]] = {}
    destination = _known(details.to_location)
    origin = _known(details.from_location)
    departure_date = _known(details.departure_date)
    return_date = _known(details.return_date)

    if destination:
        calls["weather"] = {"location": destination, "travel_date": departure_date}
        calls["attractions"] = {"location": destination}
        calls["restaurants"] = {
            "location": destination,
            "cuisine": "local" if "food" in details.preferences else None,
            "price_range": budget_price_tier(details.budget),
        }
        calls["hotels"] = {
            "location": destination,
            "check_in": departure_date,
            "check_out": return_date,
            "adults": details.travelers,
        }

    if origin and destination and departure_date:
        calls["flights"] = {
            "location": destination,
            "origin": origin,
            "departure_date": departure_date,
            "return_date": return_date,
            "adults": details.travelers,
        }

    return calls


class DataGatheringCoordinator:
    """
    Runs applicable adapters concurrently with per-call isolation.

    Attributes:
        adapters: Capability key -> adapter exposing async search(location, **kwargs)
        call_timeout: Upper bound in seconds for each adapter call
    """

    def __init__(self, adapters: Mapping[str, Any], call_timeout: float = DEFAULT_CALL_TIMEOUT):
        self.adapters = dict(adapters)
        self.call_timeout = call_timeout

    async def _call(self, key: str, kwargs: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
        adapter = self.adapters.get(key)
        if adapter is None:
            return key, error_marker(f"No adapter configured for {key}")

        params = dict(kwargs)
        location = params.pop("location")
        try:
            result = await asyncio.wait_for(
                adapter.search(location, **params), timeout=self.call_timeout
            )
        except asyncio.TimeoutError:
            logger.warning(f"[tool={key}] Timed out after {self.call_timeout}s")
            return key, error_marker(f"{key} search timed out after {self.call_timeout}s")
        except Exception as e:
            logger.error(f"[tool={key}] Adapter failed: {e}")
            return key, error_marker(str(e) or type(e).__name__)
        return key, result

    def _plan(self, details: TravelDetails) -> Dict[str, Dict[str, Any]]:
        try:
            return plan_calls(details)
        except Exception as e:
            raise GatheringFailed(f"Could not plan capability calls: {e}") from e

    async def gather(self, details: TravelDetails, _log: str = "") -> Dict[str, Any]:
        """
        Gather supporting data for one turn.

        Args:
            details: Extracted travel details
            _log: Log prefix for correlation

        Returns:
            ToolResults dict; never raises (except cancellation)
        """
        try:
            calls = self._plan(details)
            logger.info(
                f"{_log}Gathering travel data | tools={sorted(calls)}, "
                f"from={details.from_location}, to={details.to_location}, "
                f"departure={details.departure_date}"
            )

            tasks: List[Awaitable[Tuple[str, Dict[str, Any]]]] = [
                self._call(key, kwargs) for key, kwargs in calls.items()
            ]
            settled = await asyncio.gather(*tasks)
        except GatheringFailed as e:
            logger.error(f"{_log}Gathering failed: {e}")
            return {"error": GATHERING_FAILED_MESSAGE}
        except Exception as e:
            logger.exception(f"{_log}Gathering failed: {e}")
            return {"error": GATHERING_FAILED_MESSAGE}

        tool_results = dict(settled)
        failed = sorted(k for k, v in tool_results.items() if is_error_marker(v))
        logger.info(
            f"{_log}Travel data gathered | populated={len(tool_results)}, failed={failed}"
        )
        return tool_results

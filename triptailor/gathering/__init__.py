"""Data gathering: applicable capability calls, run concurrently."""

from triptailor.gathering.coordinator import DataGatheringCoordinator, plan_calls
from triptailor.gathering.pricing import budget_price_tier

__all__ = ["DataGatheringCoordinator", "plan_calls", "budget_price_tier"]

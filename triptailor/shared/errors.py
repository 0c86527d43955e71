"""
Error taxonomy for the travel agent.

Recovery happens as close to the failing call as possible; only
InvalidInput and truly unexpected failures reach the caller.
"""

from typing import Optional


class TravelAgentError(Exception):
    """Base class for all travel agent errors."""

    pass


class InvalidInput(TravelAgentError):
    """Raised when the caller supplies no message or a malformed request."""

    pass


class ModelUnavailable(TravelAgentError):
    """Raised when the text completion provider cannot be reached or fails."""

    pass


class ModelTimeout(ModelUnavailable):
    """Raised when a text completion call exceeds its configured timeout."""

    pass


class ProviderUnavailable(TravelAgentError):
    """Raised inside a capability adapter when its search provider fails."""

    def __init__(self, capability: str, reason: str):
        self.capability = capability
        self.reason = reason
        super().__init__(f"{capability}: {reason}")


class GatheringFailed(TravelAgentError):
    """Raised when the gathering stage cannot even begin."""

    pass


class ParseError(TravelAgentError):
    """Raised when model output cannot be parsed into a contract."""

    def __init__(self, message: str, raw: Optional[str] = None):
        self.raw = raw
        super().__init__(message)

"""
Capability adapter base and the shared search provider client.

Every adapter builds a provider query from semantic parameters, normalizes
the provider payload, and substitutes a clearly labeled fallback payload
when credentials are missing or the provider fails. Adapters never raise
for provider problems; the failure reason travels inside the result.
"""

import logging
import re
from datetime import date
from typing import Any, Dict, List, Optional

import httpx

from triptailor.shared.contracts.tool_results import LIVE_SOURCE, SearchResult
from triptailor.shared.errors import ProviderUnavailable
from triptailor.shared.settings import SERPAPI_URL
from triptailor.tools.mock_data import fallback_result


logger = logging.getLogger(__name__)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_valid_date(value: Optional[str]) -> bool:
    """True for a real calendar date in YYYY-MM-DD form."""
    if not value or not _ISO_DATE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def format_location(location: str) -> str:
    return re.sub(r"\s+", " ", location.strip())


class SerpAPIClient:
    """
    Thin async client for the search provider.

    One GET per query; non-2xx, transport errors, timeouts, non-JSON bodies
    and provider-reported errors all raise ProviderUnavailable.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = SERPAPI_URL,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self._http = http_client

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def search(
        self,
        capability: str,
        params: Dict[str, Any],
        timeout: float = 10.0,
    ) -> Dict[str, Any]:
        if not self.enabled:
            raise ProviderUnavailable(capability, "SERPAPI_API_KEY not configured")

        query = {**params, "api_key": self.api_key}
        try:
            if self._http is not None:
                response = await self._http.get(self.base_url, params=query, timeout=timeout)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(self.base_url, params=query, timeout=timeout)
        except httpx.TimeoutException as e:
            raise ProviderUnavailable(capability, f"timed out after {timeout}s") from e
        except httpx.HTTPError as e:
            raise ProviderUnavailable(capability, f"request failed: {e}") from e

        if response.status_code >= 400:
            raise ProviderUnavailable(capability, f"HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderUnavailable(capability, "malformed payload") from e

        if not isinstance(data, dict):
            raise ProviderUnavailable(capability, "malformed payload")
        if data.get("error"):
            raise ProviderUnavailable(capability, f"API Error: {data['error']}")

        return data

    async def validate(self, timeout: float = 5.0) -> bool:
        """Live probe used by the health surface."""
        if not self.enabled:
            logger.warning("SERPAPI_API_KEY not found - using fallback mode")
            return False
        try:
            await self.search("validation", {"engine": "google", "q": "test"}, timeout=timeout)
        except ProviderUnavailable as e:
            logger.error(f"SerpAPI validation failed: {e.reason}")
            return False
        logger.info("SerpAPI validation successful")
        return True


class CapabilityAdapter:
    """
    Fallback-on-failure wrapper around one search capability.

    Subclasses provide build_params (query builder), normalize (provider
    payload -> ordered item list) and fallback_items (placeholder items).
    """

    capability: str = ""
    search_type: str = ""
    timeout: float = 10.0
    max_results: int = 8

    def __init__(self, client: SerpAPIClient):
        self.client = client

    def build_params(self, **params: Any) -> Dict[str, Any]:
        raise NotImplementedError

    def normalize(self, data: Dict[str, Any], **params: Any) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def fallback_items(self, **params: Any) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def fallback_note(self, location: str) -> str:
        return "API temporarily unavailable - showing general recommendations"

    async def search(self, location: str, **params: Any) -> Dict[str, Any]:
        """
        Run the capability search.

        Args:
            location: City the search is about
            **params: Capability-specific semantic parameters

        Returns:
            SearchResult dict; live data or the labeled fallback payload
        """
        location = format_location(location)
        try:
            query = self.build_params(location=location, **params)
            data = await self.client.search(self.capability, query, timeout=self.timeout)
            try:
                items = self.normalize(data, location=location, **params)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise ProviderUnavailable(self.capability, f"malformed payload: {e}") from e
            if not items:
                raise ProviderUnavailable(self.capability, "No results found")
        except ProviderUnavailable as e:
            logger.warning(
                f"[tool={self.capability}] Provider unavailable, using fallback | "
                f"location={location}, reason={e.reason}"
            )
            return self._fallback(location, e.reason, **params)

        items = items[: self.max_results]
        logger.info(
            f"[tool={self.capability}] Found {len(items)} results | location={location}"
        )
        return SearchResult(
            location=location,
            search_type=self.search_type,
            results=items,
            total_found=len(items),
            data_source=LIVE_SOURCE,
        ).model_dump(exclude_none=True)

    def _fallback(self, location: str, reason: str, **params: Any) -> Dict[str, Any]:
        return fallback_result(
            location=location,
            search_type=self.search_type,
            items=self.fallback_items(location=location, **params),
            note=self.fallback_note(location),
            reason=reason,
        )

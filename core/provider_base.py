from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
import logging
import httpx
from core.errors import ConfigurationError, ProviderError
from core.http_client import HTTPClient
from core.models import Category, ContentItem, MAX_ITEMS

logger = logging.getLogger(__name__)

class BaseProvider(ABC):
    """
    One upstream news API. Subclasses build the provider-specific query and
    normalize the response into ContentItem objects.
    """

    def __init__(self, http_client: HTTPClient, api_key: Optional[str] = None):
        self.http_client = http_client
        self.api_key = api_key
        self.name = self.__class__.__name__

    @abstractmethod
    async def fetch(self, category: Category) -> List[ContentItem]:
        """
        Main entry point for the provider.
        Returns at most MAX_ITEMS items in provider order, or raises ProviderError.
        """
        pass

    def check_envelope(self, payload: Any):
        """Raise ProviderError if the payload is a provider-reported error."""
        if not isinstance(payload, dict):
            raise ProviderError(f"{self.name}: malformed payload ({type(payload).__name__})")

    def require_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError(f"{self.name}: API key not configured")
        return self.api_key

    async def get_json(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            payload = await self.http_client.fetch_json(url, params=params)
        except httpx.HTTPStatusError as e:
            # Error envelopes usually come with a 4xx; prefer their message
            try:
                body = e.response.json()
            except ValueError:
                body = None
            if body is not None:
                self.check_envelope(body)
            raise ProviderError(f"{self.name}: HTTP {e.response.status_code}", cause=e) from e
        except (httpx.HTTPError, ValueError) as e:
            raise ProviderError(f"{self.name}: request failed: {e}", cause=e) from e

        self.check_envelope(payload)
        return payload

    def normalize_entries(self, entries: List[Any], category: Category) -> List[ContentItem]:
        items = []
        for entry in entries:
            if len(items) >= MAX_ITEMS:
                break
            try:
                item = self.normalize_entry(entry, str(len(items)), category)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.warning(f"{self.name}: skipping malformed entry: {e}")
                continue
            items.append(item)
        return items

    @abstractmethod
    def normalize_entry(self, entry: Any, item_id: str, category: Category) -> ContentItem:
        """Map one upstream entry to a ContentItem; raise if the entry is unusable."""
        pass

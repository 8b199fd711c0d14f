from typing import Any, List, Optional
from datetime import datetime, timezone
import logging
import os
from core.errors import ProviderError
from core.http_client import HTTPClient
from core.models import Category, ContentItem, Sentiment, MAX_ITEMS, PLACEHOLDER_URL
from core.provider_base import BaseProvider

logger = logging.getLogger(__name__)

CATEGORY_QUERIES = {
    Category.GENERAL: "stock market OR investing OR financial markets",
    Category.TECHNOLOGY: "technology stocks OR tech earnings OR semiconductor",
    Category.EARNINGS: "earnings report OR quarterly results OR financial results",
}


class NewsAPIProvider(BaseProvider):
    """Secondary provider: NewsAPI /v2/everything search, one query string per category."""
    API_URL = "https://newsapi.org/v2/everything"

    def __init__(self, http_client: HTTPClient, api_key: Optional[str] = None):
        if api_key is None:
            api_key = os.getenv("NEWS_API_KEY")
        super().__init__(http_client, api_key)

    async def fetch(self, category: Category) -> List[ContentItem]:
        api_key = self.require_key()
        payload = await self.get_json(self.API_URL, {
            "q": CATEGORY_QUERIES[category],
            "language": "en",
            "sortBy": "publishedAt",
            "pageSize": MAX_ITEMS,
            "apiKey": api_key,
        })

        articles = payload.get("articles")
        if not isinstance(articles, list):
            raise ProviderError(f"{self.name}: response has no articles array")

        items = self.normalize_entries(articles, category)
        logger.info(f"{self.name}: {len(items)} items for '{category.value}'")
        return items

    def check_envelope(self, payload: Any):
        super().check_envelope(payload)
        if payload.get("status") == "error":
            raise ProviderError(f"{self.name}: {payload.get('message') or 'Failed to fetch news'}")

    def normalize_entry(self, entry: Any, item_id: str, category: Category) -> ContentItem:
        title = (entry.get("title") or "").strip()
        if not title:
            raise ValueError("entry has no title")

        published_at = datetime.fromisoformat(entry["publishedAt"].replace("Z", "+00:00"))
        if published_at.tzinfo is None:
            published_at = published_at.replace(tzinfo=timezone.utc)

        source = entry.get("source") or {}
        return ContentItem(
            id=item_id,
            title=title,
            url=entry.get("url") or PLACEHOLDER_URL,
            source=source.get("name") or "NewsAPI",
            published_at=published_at,
            summary=entry.get("description") or None,
            image_url=entry.get("urlToImage") or None,
            sentiment=Sentiment.ABSENT,
            category=category,
        )

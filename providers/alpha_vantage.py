from typing import Any, List, Optional
from datetime import datetime, timezone
import logging
import os
from core.errors import ProviderError
from core.http_client import HTTPClient
from core.models import Category, ContentItem, Sentiment, PLACEHOLDER_URL
from core.provider_base import BaseProvider

logger = logging.getLogger(__name__)

SENTIMENT_LABELS = {
    "bullish": Sentiment.POSITIVE,
    "somewhat-bullish": Sentiment.POSITIVE,
    "positive": Sentiment.POSITIVE,
    "bearish": Sentiment.NEGATIVE,
    "somewhat-bearish": Sentiment.NEGATIVE,
    "negative": Sentiment.NEGATIVE,
    "neutral": Sentiment.NEUTRAL,
}


class AlphaVantageProvider(BaseProvider):
    """
    Primary provider: Alpha Vantage NEWS_SENTIMENT feed.

    The upstream query has no category parameter, so the same multi-topic
    query is issued for every category and results are never filtered here.
    """
    API_URL = "https://www.alphavantage.co/query"
    TOPICS = "financial_markets,earnings,technology"
    ERROR_KEYS = ("Error Message", "Information", "Note")

    def __init__(self, http_client: HTTPClient, api_key: Optional[str] = None):
        if api_key is None:
            api_key = os.getenv("ALPHA_VANTAGE_API_KEY")
        # The public "demo" key does not serve the news feed
        if api_key == "demo":
            api_key = None
        super().__init__(http_client, api_key)

    async def fetch(self, category: Category) -> List[ContentItem]:
        api_key = self.require_key()
        payload = await self.get_json(self.API_URL, {
            "function": "NEWS_SENTIMENT",
            "topics": self.TOPICS,
            "apikey": api_key,
        })

        feed = payload.get("feed")
        if not isinstance(feed, list):
            raise ProviderError(f"{self.name}: response has no feed array")

        items = self.normalize_entries(feed, category)
        logger.info(f"{self.name}: {len(items)} items")
        return items

    def check_envelope(self, payload: Any):
        super().check_envelope(payload)
        for key in self.ERROR_KEYS:
            if payload.get(key):
                raise ProviderError(f"{self.name}: {payload[key]}")

    def normalize_entry(self, entry: Any, item_id: str, category: Category) -> ContentItem:
        title = (entry.get("title") or "").strip()
        if not title:
            raise ValueError("entry has no title")

        # time_published looks like 20240115T093000, in UTC
        published_at = datetime.strptime(entry["time_published"], "%Y%m%dT%H%M%S").replace(tzinfo=timezone.utc)

        label = entry.get("overall_sentiment_label")
        if isinstance(label, str):
            sentiment = SENTIMENT_LABELS.get(label.strip().lower(), Sentiment.ABSENT)
        else:
            sentiment = Sentiment.ABSENT

        return ContentItem(
            id=item_id,
            title=title,
            url=entry.get("url") or PLACEHOLDER_URL,
            source=entry.get("source") or "Alpha Vantage",
            published_at=published_at,
            summary=entry.get("summary") or None,
            image_url=entry.get("banner_image") or None,
            sentiment=sentiment,
            category=None,
        )

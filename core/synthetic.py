from datetime import datetime, timedelta, timezone
from typing import List, Optional
from core.models import Category, ContentItem, Sentiment, PLACEHOLDER_URL

# (title, summary, outlet, hours before anchor, sentiment)
SAMPLE_NEWS = [
    (
        "Major Tech Stocks Rally as AI Sector Shows Strong Growth",
        "Technology stocks surged today as artificial intelligence companies reported better-than-expected quarterly results.",
        "Financial Times", 1, Sentiment.POSITIVE,
    ),
    (
        "Federal Reserve Holds Interest Rates Steady",
        "The Federal Reserve maintained current interest rates, citing stable inflation and employment data.",
        "Reuters", 2, Sentiment.NEUTRAL,
    ),
    (
        "Renewable Energy Stocks Gain Momentum",
        "Clean energy companies see increased investor interest following new government incentives.",
        "Bloomberg", 3, Sentiment.POSITIVE,
    ),
    (
        "Quarterly Earnings Season Begins with Mixed Results",
        "Early earnings reports show varied performance across different sectors of the market.",
        "CNBC", 4, Sentiment.NEUTRAL,
    ),
    (
        "Cryptocurrency Market Shows Signs of Recovery",
        "Digital assets rebound after recent volatility, with Bitcoin and Ethereum leading gains.",
        "CoinDesk", 5, Sentiment.POSITIVE,
    ),
]

TITLE_KEYWORDS = {
    Category.TECHNOLOGY: ("tech", "ai", "crypto"),
    Category.EARNINGS: ("earnings", "quarterly"),
}


class SyntheticContentSource:
    """
    Last-resort sample news. Timestamps are fixed when the source is built,
    so repeated calls for the same category return identical items.
    """

    def __init__(self, anchor: Optional[datetime] = None):
        self.anchor = anchor or datetime.now(timezone.utc)
        self.items = [
            ContentItem(
                id=str(idx + 1),
                title=title,
                url=PLACEHOLDER_URL,
                source=outlet,
                published_at=self.anchor - timedelta(hours=hours),
                summary=summary,
                sentiment=sentiment,
            )
            for idx, (title, summary, outlet, hours, sentiment) in enumerate(SAMPLE_NEWS)
        ]

    def get(self, category: Category) -> List[ContentItem]:
        keywords = TITLE_KEYWORDS.get(category)
        if not keywords:
            return list(self.items)
        return [item for item in self.items if any(k in item.title.lower() for k in keywords)]

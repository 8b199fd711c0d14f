from datetime import datetime, timedelta, timezone
from typing import Optional
from core.models import Category, RetrievalState, Sentiment

CATEGORY_LABELS = {
    Category.GENERAL: "Market News",
    Category.TECHNOLOGY: "Tech Stocks",
    Category.EARNINGS: "Earnings",
}

SENTIMENT_MARKERS = {
    Sentiment.POSITIVE: "↗",
    Sentiment.NEGATIVE: "↘",
    Sentiment.NEUTRAL: "→",
    Sentiment.ABSENT: "",
}


def format_age(timestamp: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Relative age for display: 'Just now', '5h ago', '3d ago', or 'never' without a timestamp."""
    if timestamp is None:
        return "never"
    now = now or datetime.now(timezone.utc)
    hours = int((now - timestamp).total_seconds() // 3600)
    if hours < 1:
        return "Just now"
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


def staleness(state: RetrievalState, now: Optional[datetime] = None) -> Optional[timedelta]:
    if state.last_refreshed_at is None:
        return None
    return (now or datetime.now(timezone.utc)) - state.last_refreshed_at


def sentiment_marker(sentiment: Sentiment) -> str:
    return SENTIMENT_MARKERS[sentiment]

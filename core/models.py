from dataclasses import dataclass, field
from typing import Optional, Tuple
from datetime import datetime, timezone
from enum import Enum

MAX_ITEMS = 10
PLACEHOLDER_URL = "#"  # No real link available


class Category(str, Enum):
    GENERAL = "general"
    TECHNOLOGY = "technology"
    EARNINGS = "earnings"


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    ABSENT = "absent"  # Provider does not supply sentiment


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    DEGRADED_READY = "degraded_ready"


@dataclass(frozen=True)
class ContentItem:
    id: str  # Unique within one retrieval batch only
    title: str
    url: str
    source: str  # Outlet or provider name
    published_at: datetime
    summary: Optional[str] = None
    image_url: Optional[str] = None
    sentiment: Sentiment = Sentiment.ABSENT
    category: Optional[Category] = None


@dataclass(frozen=True)
class RetrievalState:
    category: Category = Category.GENERAL
    items: Tuple[ContentItem, ...] = ()
    phase: Phase = Phase.IDLE
    error_message: Optional[str] = None
    last_refreshed_at: Optional[datetime] = None


@dataclass(frozen=True)
class ChatMessage:
    id: str
    content: str
    role: str  # "user" or "assistant"
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

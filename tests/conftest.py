from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from core.http_client import HTTPClient
from core.models import ContentItem


FIXED_NOW = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


def make_item(idx: int, title: str = None, category=None) -> ContentItem:
    return ContentItem(
        id=str(idx),
        title=title or f"Headline {idx}",
        url=f"https://example.com/{idx}",
        source="Example Wire",
        published_at=FIXED_NOW,
        category=category,
    )


def make_provider(name: str, result=None, error: Exception = None) -> MagicMock:
    """Stand-in provider whose fetch returns `result` or raises `error`."""
    provider = MagicMock()
    provider.name = name
    if error is not None:
        provider.fetch = AsyncMock(side_effect=error)
    else:
        provider.fetch = AsyncMock(return_value=result or [])
    return provider


def mock_http(handler) -> HTTPClient:
    """HTTPClient whose requests are answered by `handler(request) -> httpx.Response`."""
    return HTTPClient(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.fixture
def clock():
    return lambda: FIXED_NOW

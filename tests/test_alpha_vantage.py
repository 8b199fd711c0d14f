"""Tests for the Alpha Vantage (primary) provider."""

from datetime import datetime, timezone

import httpx
import pytest

from conftest import mock_http

from core.errors import ConfigurationError, ProviderError
from core.models import Category, Sentiment, PLACEHOLDER_URL
from providers.alpha_vantage import AlphaVantageProvider


def feed_entry(idx: int, **overrides):
    entry = {
        "title": f"Story {idx}",
        "url": f"https://news.example.com/{idx}",
        "time_published": "20240115T093000",
        "summary": f"Summary {idx}",
        "banner_image": f"https://img.example.com/{idx}.png",
        "source": "Benzinga",
        "overall_sentiment_label": "Neutral",
    }
    entry.update(overrides)
    return entry


def json_handler(payload, status=200, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status, json=payload)
    return handler


@pytest.mark.asyncio
async def test_fetch_normalizes_feed():
    seen = []
    provider = AlphaVantageProvider(mock_http(json_handler({"feed": [feed_entry(1)]}, seen=seen)), api_key="key")

    items = await provider.fetch(Category.GENERAL)

    assert len(items) == 1
    item = items[0]
    assert item.id == "0"
    assert item.title == "Story 1"
    assert item.summary == "Summary 1"
    assert item.url == "https://news.example.com/1"
    assert item.source == "Benzinga"
    assert item.image_url == "https://img.example.com/1.png"
    assert item.published_at == datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)
    assert item.sentiment is Sentiment.NEUTRAL
    assert item.category is None

    params = seen[0].url.params
    assert params["function"] == "NEWS_SENTIMENT"
    assert params["topics"] == "financial_markets,earnings,technology"
    assert params["apikey"] == "key"


@pytest.mark.asyncio
async def test_same_query_for_every_category():
    seen = []
    provider = AlphaVantageProvider(mock_http(json_handler({"feed": [feed_entry(1)]}, seen=seen)), api_key="key")

    for category in Category:
        items = await provider.fetch(category)
        assert items[0].category is None

    assert len({str(request.url) for request in seen}) == 1


@pytest.mark.asyncio
async def test_sentiment_labels_map_to_enum():
    feed = [
        feed_entry(1, overall_sentiment_label="Bullish"),
        feed_entry(2, overall_sentiment_label="Somewhat-Bearish"),
        feed_entry(3, overall_sentiment_label="Neutral"),
        feed_entry(4, overall_sentiment_label="Mystery"),
        feed_entry(5, overall_sentiment_label=None),
    ]
    provider = AlphaVantageProvider(mock_http(json_handler({"feed": feed})), api_key="key")

    items = await provider.fetch(Category.GENERAL)

    assert [item.sentiment for item in items] == [
        Sentiment.POSITIVE,
        Sentiment.NEGATIVE,
        Sentiment.NEUTRAL,
        Sentiment.ABSENT,
        Sentiment.ABSENT,
    ]


@pytest.mark.asyncio
async def test_missing_optional_fields_stay_absent():
    entry = {"title": "Bare story", "time_published": "20240115T093000", "source": "Wire"}
    provider = AlphaVantageProvider(mock_http(json_handler({"feed": [entry]})), api_key="key")

    item = (await provider.fetch(Category.GENERAL))[0]

    assert item.summary is None
    assert item.image_url is None
    assert item.url == PLACEHOLDER_URL
    assert item.sentiment is Sentiment.ABSENT


@pytest.mark.asyncio
async def test_truncates_to_ten_in_provider_order():
    feed = [feed_entry(i) for i in range(15)]
    provider = AlphaVantageProvider(mock_http(json_handler({"feed": feed})), api_key="key")

    items = await provider.fetch(Category.GENERAL)

    assert [item.title for item in items] == [f"Story {i}" for i in range(10)]
    assert [item.id for item in items] == [str(i) for i in range(10)]


@pytest.mark.asyncio
async def test_malformed_entries_are_skipped():
    feed = [
        feed_entry(1, time_published="yesterday"),
        feed_entry(2, title=""),
        feed_entry(3),
    ]
    provider = AlphaVantageProvider(mock_http(json_handler({"feed": feed})), api_key="key")

    items = await provider.fetch(Category.GENERAL)

    assert [item.title for item in items] == ["Story 3"]
    assert items[0].id == "0"


@pytest.mark.asyncio
async def test_empty_feed_is_not_an_error():
    provider = AlphaVantageProvider(mock_http(json_handler({"feed": []})), api_key="key")

    assert await provider.fetch(Category.GENERAL) == []


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [
    {"Error Message": "Invalid API call."},
    {"Information": "API rate limit reached."},
    {"items": "0"},
    ["not", "an", "object"],
])
async def test_error_envelopes_raise_provider_error(payload):
    provider = AlphaVantageProvider(mock_http(json_handler(payload)), api_key="key")

    with pytest.raises(ProviderError):
        await provider.fetch(Category.GENERAL)


@pytest.mark.asyncio
async def test_http_failure_raises_provider_error_with_cause():
    def handler(request):
        raise httpx.ConnectError("connection refused")

    provider = AlphaVantageProvider(mock_http(handler), api_key="key")

    with pytest.raises(ProviderError) as exc_info:
        await provider.fetch(Category.GENERAL)
    assert isinstance(exc_info.value.cause, httpx.ConnectError)


@pytest.mark.asyncio
@pytest.mark.parametrize("api_key", ["", "demo"])
async def test_missing_key_raises_configuration_error(api_key):
    seen = []
    provider = AlphaVantageProvider(mock_http(json_handler({"feed": []}, seen=seen)), api_key=api_key)

    with pytest.raises(ConfigurationError):
        await provider.fetch(Category.GENERAL)
    assert seen == []


def test_key_read_from_environment(monkeypatch):
    monkeypatch.setenv("ALPHA_VANTAGE_API_KEY", "from-env")

    provider = AlphaVantageProvider(mock_http(json_handler({})))

    assert provider.api_key == "from-env"


@pytest.mark.asyncio
async def test_non_string_sentiment_label_is_absent():
    feed = [feed_entry(1, overall_sentiment_label=0.35), feed_entry(2, overall_sentiment_label=["Bullish"])]
    provider = AlphaVantageProvider(mock_http(json_handler({"feed": feed})), api_key="key")

    items = await provider.fetch(Category.GENERAL)

    assert [item.title for item in items] == ["Story 1", "Story 2"]
    assert all(item.sentiment is Sentiment.ABSENT for item in items)

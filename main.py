import argparse
import logging
import asyncio
import os
from typing import Optional
from dotenv import load_dotenv

from core.http_client import HTTPClient
from core.aggregator import AggregationEngine
from core.assistant import InvestmentAssistant, PREDEFINED_QUESTIONS
from core.formatting import CATEGORY_LABELS, format_age, sentiment_marker
from core.models import Category, RetrievalState, PLACEHOLDER_URL

from providers.alpha_vantage import AlphaVantageProvider
from providers.newsapi import NewsAPIProvider


logger = logging.getLogger(__name__)


def render_news(state: RetrievalState) -> str:
    lines = [f"{CATEGORY_LABELS[state.category]} (updated {format_age(state.last_refreshed_at)})"]
    if state.error_message:
        lines.append(f"! {state.error_message}")
    if not state.items:
        lines.append("No news available for this category")
    for item in state.items:
        marker = sentiment_marker(item.sentiment)
        lines.append(f"- {item.title}")
        lines.append(f"  {item.source} • {format_age(item.published_at)} {marker}".rstrip())
        if item.url != PLACEHOLDER_URL:
            lines.append(f"  {item.url}")
    return "\n".join(lines)


async def show_news(category: Category):
    logger.info(f"Fetching '{category.value}' news...")
    http = HTTPClient()
    # Primary first, secondary second
    engine = AggregationEngine([
        AlphaVantageProvider(http),
        NewsAPIProvider(http),
    ])
    try:
        state = await engine.select_category(category)
    finally:
        await http.close()
    print(render_news(state))


def render_starters() -> str:
    lines = ["Popular questions:"]
    lines.extend(f"- {question}" for question in PREDEFINED_QUESTIONS)
    return "\n".join(lines)


async def ask(question: Optional[str]):
    if not question:
        print(render_starters())
        return
    assistant = InvestmentAssistant()
    reply = await assistant.send_message(question)
    if reply:
        print(reply.content)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Investor dashboard news and assistant")
    sub = parser.add_subparsers(dest="command", required=True)

    news_cmd = sub.add_parser("news", help="Fetch market news")
    news_cmd.add_argument("--category", choices=[c.value for c in Category], default=Category.GENERAL.value)

    ask_cmd = sub.add_parser("ask", help="Ask the investment assistant")
    ask_cmd.add_argument("question", nargs="?", help="Omit to list starter questions")

    args = parser.parse_args(argv)

    if args.command == "news":
        asyncio.run(show_news(Category(args.category)))
    else:
        asyncio.run(ask(args.question))


if __name__ == "__main__":
    # Load env
    load_dotenv()

    # Setup logging
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    main()

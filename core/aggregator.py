import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence, Union
from core.errors import EmptyResultError, ProviderError
from core.models import Category, ContentItem, Phase, RetrievalState, MAX_ITEMS
from core.provider_base import BaseProvider
from core.synthetic import SyntheticContentSource

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Failed to load news. Using sample data."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AggregationEngine:
    """
    Runs the fallback chain (providers in order, then synthetic content) and
    owns the RetrievalState the presentation layer reads.

    Every refresh takes a new request token. A chain that finishes after a
    newer refresh was requested is discarded, so the visible state always
    belongs to the most recent request.
    """

    def __init__(
        self,
        providers: Sequence[BaseProvider],
        synthetic: Optional[SyntheticContentSource] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.providers = list(providers)
        self.synthetic = synthetic or SyntheticContentSource()
        self.clock = clock
        self._state = RetrievalState()
        self._latest_token = 0

    def get_state(self) -> RetrievalState:
        return self._state

    async def select_category(self, category: Union[Category, str]) -> RetrievalState:
        return await self.request_refresh(category)

    async def request_refresh(self, category: Union[Category, str, None] = None) -> RetrievalState:
        category = Category(category) if category is not None else self._state.category

        self._latest_token += 1
        token = self._latest_token
        # Previous items stay visible while loading
        self._state = replace(self._state, category=category, phase=Phase.LOADING, error_message=None)

        items = await self._run_chain(category)

        if token != self._latest_token:
            logger.info(f"Discarding superseded refresh #{token} for '{category.value}'")
            return self._state

        if items:
            self._state = RetrievalState(
                category=category,
                items=tuple(items[:MAX_ITEMS]),
                phase=Phase.READY,
                last_refreshed_at=self.clock(),
            )
        else:
            logger.warning(f"All providers failed for '{category.value}', using sample data")
            self._state = RetrievalState(
                category=category,
                items=tuple(self.synthetic.get(category)[:MAX_ITEMS]),
                phase=Phase.DEGRADED_READY,
                error_message=FALLBACK_MESSAGE,
                last_refreshed_at=self.clock(),
            )
        return self._state

    async def _run_chain(self, category: Category) -> List[ContentItem]:
        """Return the first non-empty provider result, or an empty list if every provider failed."""
        for provider in self.providers:
            try:
                items = await provider.fetch(category)
                if not items:
                    raise EmptyResultError(f"{provider.name}: no items")
                return items
            except ProviderError as e:
                logger.warning(f"Provider {provider.name} failed: {e}")
            except Exception:
                logger.exception(f"Provider {provider.name} raised unexpectedly")
        return []

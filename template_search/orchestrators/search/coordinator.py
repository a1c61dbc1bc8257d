"""Search coordinator: one search generation per keyword change.

Pipeline per generation:
  1. Normalize keywords (empty set -> no-op)
  2. Cancel the previous generation and mark it stale
  3. Reset the aggregate and pagination state, signal loading
  4. Fan out one catalog call per keyword, concurrently
  5. Filter + fold each resolution into the aggregate and publish it
  6. Top up from the paginated listing when the aggregate is sparse

Every resolution compares its generation token with the live one before it
touches shared state; merge steps are synchronous, so each fold is atomic.
"""

import asyncio
import time
from collections.abc import Iterable

from template_search.contracts.catalog_v1 import CategoryBucket
from template_search.core.config import config
from template_search.core.logger import logger
from template_search.orchestrators.search.constants import DiscardReason, GenerationState
from template_search.orchestrators.search.interface import CatalogClient, DisplaySink, Notifier
from template_search.orchestrators.search.keywords import normalize_keywords
from template_search.orchestrators.search.merger import compose_for_display, flatten
from template_search.orchestrators.search.models import (
    AggregateState,
    GenerationOutcome,
    PaginationState,
    QueryContext,
)
from template_search.orchestrators.search.pagination import PaginationController
from template_search.orchestrators.search.visibility import VisibilityConfig, filter_hidden


class SearchHandle:
    """Returned by ``SearchCoordinator.search``: cancel or await one generation."""

    def __init__(
        self,
        coordinator: "SearchCoordinator",
        outcome: GenerationOutcome,
        task: asyncio.Task | None = None,
    ):
        self._coordinator = coordinator
        self._outcome = outcome
        self._task = task

    @property
    def generation(self) -> int:
        return self._outcome.generation

    @property
    def outcome(self) -> GenerationOutcome:
        return self._outcome

    def cancel(self) -> None:
        if self._task is not None:
            self._coordinator.cancel(self._outcome.generation)

    def done(self) -> bool:
        return self._task is None or self._task.done()

    async def wait(self) -> GenerationOutcome:
        if self._task is None:
            return self._outcome
        try:
            return await self._task
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise
            return self._outcome


class SearchCoordinator:
    """Runs search generations and owns the aggregate they build."""

    def __init__(
        self,
        client: CatalogClient,
        display: DisplaySink,
        notifier: Notifier,
        *,
        visibility: VisibilityConfig | None = None,
        page_size: int | None = None,
        min_results_before_top_up: int | None = None,
    ):
        self._client = client
        self._display = display
        self._notifier = notifier
        self._visibility = visibility or VisibilityConfig.from_config(config)
        self._page_size = page_size if page_size is not None else config.page_size
        self._min_results = (
            min_results_before_top_up
            if min_results_before_top_up is not None
            else config.min_results_before_top_up
        )
        self._generation = 0
        self._live: int | None = None
        self._aggregate = AggregateState()
        self._pagination: PaginationController | None = None
        self._tasks: dict[int, asyncio.Task] = {}
        self._loading = False

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def live_generation(self) -> int | None:
        return self._live

    @property
    def aggregate(self) -> AggregateState:
        return self._aggregate

    @property
    def pagination_state(self) -> PaginationState:
        if self._pagination is None:
            return PaginationState()
        return self._pagination.state

    @property
    def loading(self) -> bool:
        return self._loading

    def is_live(self, generation: int) -> bool:
        return self._live is not None and generation == self._live

    def search(self, keywords: str | Iterable[str], context: QueryContext) -> SearchHandle:
        normalized = normalize_keywords(keywords)
        if not normalized:
            logger.debug("Search skipped: no keywords after normalization")
            return SearchHandle(self, GenerationOutcome(self._generation, []))

        for task in list(self._tasks.values()):
            task.cancel()
        self._generation += 1
        generation = self._generation
        self._live = generation
        self._aggregate = AggregateState()
        pagination = PaginationController(
            self._client,
            context,
            generation=generation,
            visibility=self._visibility,
            display=self._display,
            notifier=self._notifier,
            apply=lambda buckets: self._fold(generation, buckets),
            is_live=self.is_live,
            page_size=self._page_size,
        )
        self._pagination = pagination

        logger.search_started(generation, normalized, context.page_builder)
        self._publish()
        self._loading = True
        self._display.on_loading_changed(True)
        pagination.publish()

        outcome = GenerationOutcome(generation, normalized, state=GenerationState.FETCHING)
        task = asyncio.create_task(
            self._run(generation, normalized, context, pagination, outcome),
            name=f"template-search-{generation}",
        )
        self._tasks[generation] = task
        task.add_done_callback(lambda _t: self._tasks.pop(generation, None))
        return SearchHandle(self, outcome, task)

    def cancel(self, generation: int | None = None) -> None:
        """Cancel one generation (default: the live one) and drop its late results."""
        target = self._live if generation is None else generation
        if target is None:
            return
        task = self._tasks.get(target)
        if task is not None:
            task.cancel()
        if self.is_live(target):
            self._live = None
            self._set_loading(False)

    async def load_more(self) -> bool:
        if self._pagination is None or not self.is_live(self._pagination.generation):
            return False
        return await self._pagination.load_more()

    async def aclose(self) -> None:
        tasks = list(self._tasks.values())
        self.cancel()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _run(
        self,
        generation: int,
        keywords: list[str],
        context: QueryContext,
        pagination: PaginationController,
        outcome: GenerationOutcome,
    ) -> GenerationOutcome:
        children = [
            asyncio.create_task(self._search_keyword(generation, kw, context, pagination, outcome))
            for kw in keywords
        ]
        try:
            # Keyword calls never raise Exception; a transport-side cancel of one
            # call comes back as a CancelledError value and is ignored.
            await asyncio.gather(*children, return_exceptions=True)
            if self.is_live(generation) and len(self._aggregate) < self._min_results:
                outcome.topped_up = True
                await pagination.fetch_page(1)
        except asyncio.CancelledError:
            outcome.state = GenerationState.CANCELLED
            logger.generation_discarded(generation, DiscardReason.CANCELLED, self._live)
            raise

        if not self.is_live(generation):
            outcome.state = GenerationState.CANCELLED
            return outcome

        self._set_loading(False)
        outcome.total_designs = len(self._aggregate)
        outcome.state = GenerationState.SETTLED
        logger.generation_settled(generation, outcome.total_designs, outcome.failed_keywords)
        return outcome

    async def _search_keyword(
        self,
        generation: int,
        keyword: str,
        context: QueryContext,
        pagination: PaginationController,
        outcome: GenerationOutcome,
    ) -> None:
        started = time.monotonic()
        try:
            buckets = await self._client.search_by_keyword(
                keyword, context.business_name, context.page_builder
            )
        except Exception as e:
            if not self.is_live(generation):
                logger.generation_discarded(generation, self._discard_reason(), self._live)
                return
            logger.keyword_failed(generation, keyword, e)
            outcome.failed_keywords.append(keyword)
            self._set_loading(False)
            return

        if not self.is_live(generation):
            logger.generation_discarded(generation, self._discard_reason(), self._live)
            return

        visible = filter_hidden(buckets, self._visibility)
        self._aggregate = self._aggregate.fold(visible)
        outcome.resolved_keywords.append(keyword)
        logger.keyword_resolved(generation, keyword, len(flatten(visible)), started)
        self._publish()
        self._set_loading(False)
        pagination.offer_more(len(self._aggregate) > 0)

    def _fold(self, generation: int, buckets: list[CategoryBucket]) -> None:
        if not self.is_live(generation):
            logger.generation_discarded(generation, self._discard_reason(), self._live)
            return
        self._aggregate = self._aggregate.fold(buckets)
        self._publish()

    def _publish(self) -> None:
        self._display.on_aggregate_update(
            list(self._aggregate.designs),
            compose_for_display(self._aggregate.buckets),
        )

    def _set_loading(self, loading: bool) -> None:
        if self._loading == loading:
            return
        self._loading = loading
        self._display.on_loading_changed(loading)

    def _discard_reason(self) -> DiscardReason:
        return DiscardReason.CANCELLED if self._live is None else DiscardReason.SUPERSEDED

"""Pagination controller: tops up sparse results from the paginated catalog listing.

One controller belongs to one search generation. Fetches are serialized by
``PaginationState.is_loading_page`` and stop for good once the catalog reports
the last page. Page results are merged only while the owning generation is live.
"""

import time
from collections.abc import Callable

from template_search.contracts.catalog_v1 import CategoryBucket
from template_search.core.logger import logger
from template_search.orchestrators.search.constants import DEFAULT_PAGE_SIZE, DiscardReason
from template_search.orchestrators.search.errors import ServiceError
from template_search.orchestrators.search.interface import CatalogClient, DisplaySink, Notifier
from template_search.orchestrators.search.models import PaginationState, QueryContext
from template_search.orchestrators.search.visibility import VisibilityConfig, filter_hidden


class PaginationController:
    def __init__(
        self,
        client: CatalogClient,
        context: QueryContext,
        *,
        generation: int,
        visibility: VisibilityConfig,
        display: DisplaySink,
        notifier: Notifier,
        apply: Callable[[list[CategoryBucket]], None],
        is_live: Callable[[int], bool],
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self._client = client
        self._context = context
        self._generation = generation
        self._visibility = visibility
        self._display = display
        self._notifier = notifier
        self._apply = apply
        self._is_live = is_live
        self._page_size = page_size
        self._state = PaginationState()

    @property
    def state(self) -> PaginationState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    def _set_state(self, **changes) -> None:
        self._state = self._state.update(**changes)
        if self._is_live(self._generation):
            self._display.on_pagination_state_changed(self._state)

    def publish(self) -> None:
        if self._is_live(self._generation):
            self._display.on_pagination_state_changed(self._state)

    def offer_more(self, available: bool) -> None:
        """Show or hide "load more"; a no-op once the last page was seen."""
        if self._state.exhausted or self._state.has_more_pages == available:
            return
        self._set_state(has_more_pages=available)

    async def fetch_page(self, page: int) -> bool:
        """Fetch and merge one page. Returns True when the page was merged."""
        if self._state.is_loading_page:
            logger.debug(f"Page {page} skipped: a page fetch is already in flight")
            return False
        if self._state.exhausted:
            logger.debug(f"Page {page} skipped: catalog listing exhausted")
            return False

        self._set_state(is_loading_page=True)
        changes: dict = {}
        started = time.monotonic()
        logger.page_requested(self._generation, page, self._page_size)
        try:
            result = await self._client.fetch_page(
                page,
                self._context.business_name,
                self._context.page_builder,
                self._page_size,
            )
            if not self._is_live(self._generation):
                logger.generation_discarded(self._generation, DiscardReason.SUPERSEDED)
                return False

            visible = filter_hidden(result.buckets, self._visibility)
            self._apply(visible)
            logger.page_fetched(
                self._generation,
                page,
                result.last_page,
                sum(len(b.designs) for b in visible),
                started,
            )
            if page >= result.last_page:
                changes = {"has_more_pages": False, "exhausted": True}
            else:
                changes = {"current_page": page + 1, "has_more_pages": True}
            return True
        except Exception as e:
            logger.page_failed(self._generation, page, e)
            if self._is_live(self._generation):
                self._notifier.on_error(str(e) or ServiceError.DEFAULT_MESSAGE)
            return False
        finally:
            self._set_state(is_loading_page=False, **changes)

    async def load_more(self) -> bool:
        """Explicit "load more" trigger: requests ``current_page``."""
        if not self._state.has_more_pages:
            return False
        return await self.fetch_page(self._state.current_page)

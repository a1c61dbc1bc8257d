"""Search session: search-box semantics on top of the coordinator.

An empty box searches the initial keyword derived from the business details;
switching the page builder re-runs the current keyword.
"""

from template_search.orchestrators.search.coordinator import SearchCoordinator, SearchHandle
from template_search.orchestrators.search.keywords import initial_keyword
from template_search.orchestrators.search.models import QueryContext


class SearchSession:
    def __init__(self, coordinator: SearchCoordinator, context: QueryContext):
        self._coordinator = coordinator
        self._context = context
        self._keyword = ""

    @property
    def context(self) -> QueryContext:
        return self._context

    @property
    def keyword(self) -> str:
        return self._keyword

    @property
    def coordinator(self) -> SearchCoordinator:
        return self._coordinator

    def effective_keyword(self) -> str:
        return self._keyword.strip() or initial_keyword(self._context)

    def start(self) -> SearchHandle:
        return self._coordinator.search(self.effective_keyword(), self._context)

    def change_keyword(self, raw: str) -> SearchHandle:
        self._keyword = raw or ""
        return self.start()

    def clear_keyword(self) -> SearchHandle | None:
        """Reset the box; a no-op when it is already empty."""
        if not self._keyword:
            return None
        self._keyword = ""
        return self.start()

    def change_page_builder(self, page_builder: str) -> SearchHandle | None:
        if not page_builder or page_builder == self._context.page_builder:
            return None
        self._context = self._context.model_copy(update={"page_builder": page_builder})
        return self.start()

    async def load_more(self) -> bool:
        return await self._coordinator.load_more()

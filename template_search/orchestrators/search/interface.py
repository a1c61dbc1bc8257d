"""Interfaces between the search pipeline and its collaborators.

CatalogClient is the remote template catalog; DisplaySink and Notifier are the
presentation side that receives aggregate updates and user-facing errors.
"""

from abc import ABC, abstractmethod

from template_search.contracts.catalog_v1 import CatalogPage, CategoryBucket, Design
from template_search.orchestrators.search.merger import DisplayEntry
from template_search.orchestrators.search.models import PaginationState


class CatalogClient(ABC):
    """Base class for catalog transports."""

    @abstractmethod
    async def search_by_keyword(
        self,
        keyword: str,
        business_name: str,
        page_builder: str,
    ) -> list[CategoryBucket]:
        """Buckets for one keyword, highest priority first.

        Raises NetworkError or ServiceError; cancellation surfaces as
        asyncio.CancelledError.
        """

    @abstractmethod
    async def fetch_page(
        self,
        page: int,
        business_name: str,
        page_builder: str,
        page_size: int,
    ) -> CatalogPage:
        """One page of the unfiltered catalog listing."""


class DisplaySink(ABC):
    """Receives every published aggregate and status change."""

    @abstractmethod
    def on_aggregate_update(
        self, designs: list[Design], composed: list[DisplayEntry]
    ) -> None:
        pass

    @abstractmethod
    def on_loading_changed(self, loading: bool) -> None:
        pass

    @abstractmethod
    def on_pagination_state_changed(self, state: PaginationState) -> None:
        pass


class Notifier(ABC):
    """User-visible error channel (pagination failures only)."""

    @abstractmethod
    def on_error(self, message: str) -> None:
        pass

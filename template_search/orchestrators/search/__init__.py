"""Template search: keyword fan-out, category merging and paginated top-up."""

from template_search.orchestrators.search.coordinator import SearchCoordinator, SearchHandle
from template_search.orchestrators.search.interface import CatalogClient, DisplaySink, Notifier
from template_search.orchestrators.search.models import AggregateState, PaginationState, QueryContext
from template_search.orchestrators.search.session import SearchSession

__all__ = [
    "AggregateState",
    "CatalogClient",
    "DisplaySink",
    "Notifier",
    "PaginationState",
    "QueryContext",
    "SearchCoordinator",
    "SearchHandle",
    "SearchSession",
]

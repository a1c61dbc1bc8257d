"""Orchestration layer: drives catalog searches and folds their results."""

from template_search.orchestrators.search import SearchCoordinator, SearchSession

__all__ = [
    "SearchCoordinator",
    "SearchSession",
]

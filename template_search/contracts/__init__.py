"""Catalog contract v1: shared types for catalog items, requests and pages."""

from template_search.contracts.catalog_v1 import (
    AllTemplatesRequest,
    CatalogPage,
    CategoryBucket,
    Design,
    MatchType,
    SearchResultSet,
    TemplateSearchRequest,
)

__all__ = [
    "AllTemplatesRequest",
    "CatalogPage",
    "CategoryBucket",
    "Design",
    "MatchType",
    "SearchResultSet",
    "TemplateSearchRequest",
]

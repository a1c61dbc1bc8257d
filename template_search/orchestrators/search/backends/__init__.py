from template_search.orchestrators.search.backends.catalog_http import HttpCatalogClient

__all__ = [
    "HttpCatalogClient",
]

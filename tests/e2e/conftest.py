from collections.abc import Iterator

import pytest

from template_search.core.config import config
from template_search.orchestrators.search.backends.catalog_http import HttpCatalogClient
from template_search.orchestrators.search.models import QueryContext


@pytest.fixture
def live_catalog() -> Iterator[HttpCatalogClient]:
    """Catalog client against CATALOG_URL; e2e suites only."""
    yield HttpCatalogClient()


@pytest.fixture
def live_context() -> QueryContext:
    return QueryContext(
        business_name=config.business_name or "Test Business",
        business_type=config.business_type,
        page_builder=config.page_builder,
    )

"""One-shot interface: run a single keyword search, print the composed list, exit."""

from __future__ import annotations

import asyncio

from template_search.core.config import config
from template_search.interfaces.console import ConsoleDisplay
from template_search.orchestrators.search.backends.catalog_http import HttpCatalogClient
from template_search.orchestrators.search.coordinator import SearchCoordinator
from template_search.orchestrators.search.interface import CatalogClient
from template_search.orchestrators.search.models import QueryContext


async def run_oneshot(
    keywords: str,
    pages: int = 0,
    page_builder: str | None = None,
    client: CatalogClient | None = None,
) -> int:
    text = (keywords or "").strip()
    if not text:
        print("Error: keywords must not be empty")
        return 2

    errors = config.validate()
    if errors:
        for error in errors:
            print(f"Error: {error}")
        return 2

    display = ConsoleDisplay()
    coordinator = SearchCoordinator(client or HttpCatalogClient(), display, display)
    context = QueryContext(
        business_name=config.business_name,
        business_type=config.business_type,
        page_builder=page_builder or config.page_builder,
    )
    try:
        handle = coordinator.search(text, context)
        outcome = await handle.wait()
        for _ in range(max(0, pages)):
            if not await coordinator.load_more():
                break
        print(display.render(more_hint=False))
        if outcome.failed_keywords:
            print(f"Warning: no results for failed keywords: {', '.join(outcome.failed_keywords)}")
        return 0
    finally:
        await coordinator.aclose()


def main(keywords: str, pages: int = 0, page_builder: str | None = None) -> int:
    return asyncio.run(run_oneshot(keywords=keywords, pages=pages, page_builder=page_builder))

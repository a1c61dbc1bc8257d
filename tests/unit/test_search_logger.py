import json

import pytest

from template_search.core.logger import logger
from template_search.orchestrators.search.coordinator import SearchCoordinator
from template_search.orchestrators.search.errors import NetworkError
from template_search.orchestrators.search.models import QueryContext
from template_search.orchestrators.search.visibility import VisibilityConfig


def _events_since(offset: int) -> list[dict]:
    with open(logger.log_file, encoding="utf-8") as f:
        f.seek(offset)
        return [json.loads(line) for line in f if line.strip()]


@pytest.mark.asyncio
async def test_generation_events_are_written_as_json_lines(catalog, display):
    catalog.keyword_results["bakery"] = NetworkError("connection reset")
    coordinator = SearchCoordinator(
        catalog, display, display, visibility=VisibilityConfig(), min_results_before_top_up=0
    )
    offset = logger.log_file.stat().st_size

    handle = coordinator.search("bakery, cafe", QueryContext(business_name="Acme"))
    await handle.wait()

    events = _events_since(offset)
    types = [e["event_type"] for e in events]
    assert types[0] == "SEARCH_STARTED"
    assert types[-1] == "GENERATION_SETTLED"
    failed = next(e for e in events if e["event_type"] == "KEYWORD_FAILED")
    assert failed["data"]["keyword"] == "bakery"
    assert failed["data"]["error_type"] == "NetworkError"
    assert events[-1]["data"]["failed_keywords"] == ["bakery"]


def test_error_event_records_exception_text():
    offset = logger.log_file.stat().st_size

    logger.error("Search crashed", exception=ValueError("bad keyword"))

    event = _events_since(offset)[-1]
    assert event["event_type"] == "ERROR"
    assert event["data"] == {"message": "Search crashed", "exception": "bad keyword"}

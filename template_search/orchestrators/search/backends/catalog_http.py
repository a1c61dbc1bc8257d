"""Catalog backend over the WordPress REST proxy (``zipwp/v1``). Returns CategoryBuckets."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from template_search.contracts.catalog_v1 import (
    AllTemplatesRequest,
    CatalogPage,
    CategoryBucket,
    Design,
    TemplateSearchRequest,
)
from template_search.core.config import config
from template_search.orchestrators.search.errors import NetworkError, ServiceError
from template_search.orchestrators.search.interface import CatalogClient

logger = logging.getLogger(__name__)

TEMPLATES_PATH = "zipwp/v1/templates"
ALL_TEMPLATES_PATH = "zipwp/v1/all-templates"


def _unwrap(payload: Any) -> Any:
    """``{"success": ..., "data": {"data": X}}`` -> X; raises ServiceError on failure."""
    if not isinstance(payload, dict):
        raise ServiceError("Unexpected catalog response")
    data = payload.get("data")
    inner = data.get("data") if isinstance(data, dict) else None
    if payload.get("success") is False:
        message = inner if isinstance(inner, str) else None
        raise ServiceError(message)
    return inner


def _parse_design(raw: Any) -> Design | None:
    if not isinstance(raw, dict):
        return None
    try:
        return Design.model_validate(raw)
    except ValidationError as e:
        logger.debug("Skipping malformed design: %s validation errors", e.error_count())
        return None


def _parse_bucket(item: dict[str, Any]) -> CategoryBucket | None:
    """One bucket; None when it names no category. Malformed designs are dropped."""
    match = item.get("match")
    if not isinstance(match, str) or not match:
        logger.debug("Skipping catalog bucket without a match: %s", sorted(item))
        return None
    raw_designs = item.get("designs") or []
    if not isinstance(raw_designs, list):
        logger.debug("Bucket '%s' has non-list designs, treating as empty", match)
        raw_designs = []
    designs = [d for d in (_parse_design(r) for r in raw_designs) if d is not None]
    return CategoryBucket(match=match, designs=designs)


def _parse_buckets(raw: Any) -> list[CategoryBucket]:
    if not raw:
        return []
    if not isinstance(raw, list):
        raise ServiceError("Unexpected catalog response: buckets are not a list")
    buckets = (_parse_bucket(item) for item in raw if isinstance(item, dict))
    return [b for b in buckets if b is not None]


class HttpCatalogClient(CatalogClient):
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        root = base_url or config.catalog_url or ""
        self._base_url = root.rstrip("/")
        self._timeout = timeout if timeout is not None else config.catalog_timeout
        self._transport = transport

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path}"

    async def _post(self, path: str, body: dict[str, Any]) -> Any:
        if not self._base_url:
            raise NetworkError("Catalog URL is not configured")
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self._url(path),
                    json=body,
                    follow_redirects=True,
                )
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            raise NetworkError(
                f"Catalog returned HTTP {e.response.status_code} for {path}"
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Catalog request failed for {path}: {e!s}") from e
        except ValueError as e:
            raise NetworkError(f"Catalog returned invalid JSON for {path}") from e

    async def search_by_keyword(
        self,
        keyword: str,
        business_name: str,
        page_builder: str,
    ) -> list[CategoryBucket]:
        request = TemplateSearchRequest(
            keyword=keyword,
            business_name=business_name,
            page_builder=page_builder,
        )
        payload = await self._post(TEMPLATES_PATH, request.model_dump())
        buckets = _parse_buckets(_unwrap(payload))
        logger.debug(
            "Catalog search '%s': %s buckets, %s designs",
            keyword,
            len(buckets),
            sum(len(b.designs) for b in buckets),
        )
        return buckets

    async def fetch_page(
        self,
        page: int,
        business_name: str,
        page_builder: str,
        page_size: int,
    ) -> CatalogPage:
        request = AllTemplatesRequest(
            business_name=business_name,
            page_builder=page_builder,
            per_page=page_size,
            page=page,
        )
        payload = await self._post(ALL_TEMPLATES_PATH, request.model_dump())
        inner = _unwrap(payload)
        if not isinstance(inner, dict):
            inner = {}
        last_page = inner.get("lastPage") or 1
        try:
            last_page = max(1, int(last_page))
        except (TypeError, ValueError):
            last_page = 1
        return CatalogPage(buckets=_parse_buckets(inner.get("result")), last_page=last_page)

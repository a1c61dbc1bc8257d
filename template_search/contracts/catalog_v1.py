"""Catalog Contract v1.

Defines the canonical types exchanged with the template catalog:
  - Catalog items (Design) and their category grouping (CategoryBucket)
  - Keyword search request (TemplateSearchRequest)
  - Paginated listing request and page payload (AllTemplatesRequest, CatalogPage)

A keyword search returns an ordered list of buckets; the index of a bucket in
that list is its priority (recommended > partial > generic).
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


class MatchType(StrEnum):
    """Category names the catalog uses, highest priority first."""

    RECOMMENDED = "recommended"
    PARTIAL = "partial"
    GENERIC = "generic"


# ---------------------------------------------------------------------------
# Catalog items
# ---------------------------------------------------------------------------

_TRUTHY_FLAGS = frozenset({"yes", "true", "1", "on"})


def feature_enabled(value: Any) -> bool:
    """Whether a raw feature flag value marks the feature as supported.

    The catalog mixes booleans and "yes"/"no" strings.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY_FLAGS
    return False


class Design(BaseModel):
    """One catalog template. Identity is ``uuid``; display fields pass through."""

    model_config = ConfigDict(frozen=True, extra="allow")

    uuid: str = Field(description="Stable identifier across fetches")
    is_premium: bool = Field(default=False)
    features: dict[str, Any] = Field(
        default_factory=dict,
        description="Feature support flags, e.g. {'ecommerce': 'yes'}",
    )

    @field_validator("uuid", mode="before")
    @classmethod
    def _uuid_as_string(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("features", mode="before")
    @classmethod
    def _features_default(cls, v: Any) -> Any:
        # Absent or malformed maps mean no features.
        return v if isinstance(v, dict) else {}

    def supports(self, feature: str) -> bool:
        return feature_enabled(self.features.get(feature))


class CategoryBucket(BaseModel):
    """A named category paired with its ordered designs."""

    match: str = Field(description="Category name: recommended, partial, generic")
    designs: list[Design] = Field(default_factory=list)

    @field_validator("designs", mode="before")
    @classmethod
    def _designs_default(cls, v: Any) -> Any:
        return v if v is not None else []

    def with_designs(self, designs: list[Design]) -> CategoryBucket:
        return self.model_copy(update={"designs": list(designs)})


SearchResultSet = list[CategoryBucket]


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class TemplateSearchRequest(BaseModel):
    """Body of a keyword search (``zipwp/v1/templates``)."""

    keyword: str = Field(min_length=1)
    business_name: str = Field(default="")
    page_builder: str = Field(default="spectra")


class AllTemplatesRequest(BaseModel):
    """Body of a paginated listing (``zipwp/v1/all-templates``)."""

    business_name: str = Field(default="")
    page_builder: str = Field(default="spectra")
    per_page: int = Field(default=9, ge=1)
    page: int = Field(default=1, ge=1)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class CatalogPage(BaseModel):
    """One page of the paginated listing."""

    buckets: list[CategoryBucket] = Field(default_factory=list)
    last_page: int = Field(default=1, ge=1)
